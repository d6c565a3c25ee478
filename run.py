"""Entry point for the WasteWise API server.

Serves ``wastewise_api.app.main:app`` with uvicorn.  Host and port are
read from the ``HOST`` and ``PORT`` environment variables (defaults
``0.0.0.0`` and ``8000``); everything else is configured through the
variables documented in ``wastewise_api.app.core.config``.

Usage:
    python run.py
"""
import asyncio
import os

from uvicorn import Config, Server

from wastewise_api.app.core.config import settings
from wastewise_api.app.main import app


async def main() -> None:
    """Run the API server until interrupted."""
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    config = Config(app=app, host=host, port=port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
