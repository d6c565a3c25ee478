"""
Main entrypoint for the WasteWise API.

This module assembles the FastAPI application: logging, the session
and CORS middleware, error handlers and the API router mounted under
``/api``.  ``create_app`` builds a fresh application with its own
in-memory store; the module-level ``app`` is what uvicorn serves::

    uvicorn wastewise_api.app.main:app --reload

Tests call ``create_app`` directly with their own ``Settings`` so each
test starts from an empty store.
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .services.seed_service import seed_sample_data
from .services.storage import Storage

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, storage: Optional[Storage] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use instead of the environment-derived
        defaults.
    storage : Optional[Storage]
        Facade to serve from.  A new, empty one is created if omitted.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.settings = settings
    app.state.storage = storage or Storage()

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.secret_key,
        session_cookie=settings.session_cookie,
        max_age=settings.session_max_age,
        same_site="lax",
    )
    if settings.cors_origin_list:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origin_list,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")

    @app.on_event("startup")
    async def startup_event() -> None:
        if settings.seed_sample_data:
            await seed_sample_data(app.state.storage)
        logger.info("%s %s started", settings.project_name, settings.api_version)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
