"""
Domain exceptions and their HTTP translation.

Services raise the exceptions below; ``register_exception_handlers``
turns them (and FastAPI's own ``HTTPException`` and
``RequestValidationError``) into JSON bodies that always carry a
``message`` field.  Validation failures additionally carry an
``errors`` list with one entry per offending field.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class WasteWiseError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message}


class NotFoundError(WasteWiseError):
    status_code = status.HTTP_404_NOT_FOUND


class DuplicateUsername(WasteWiseError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, username: str) -> None:
        super().__init__("Username already exists")
        self.username = username


class InvalidPayload(WasteWiseError):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: List[Dict[str, Any]], message: str = "Invalid data") -> None:
        super().__init__(message)
        self.errors = errors

    def to_body(self) -> Dict[str, Any]:
        return {"message": self.message, "errors": self.errors}


def _request_validation_errors(exc: RequestValidationError) -> List[Dict[str, Any]]:
    return [
        {"path": [str(p) for p in err.get("loc", ())], "message": err.get("msg", "")}
        for err in exc.errors()
    ]


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the JSON error handlers to ``app``."""

    @app.exception_handler(WasteWiseError)
    async def _domain_error(request: Request, exc: WasteWiseError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_body())

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        message: Optional[str] = exc.detail if isinstance(exc.detail, str) else None
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": message or "Request failed"},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Invalid data", "errors": _request_validation_errors(exc)},
        )

    @app.exception_handler(Exception)
    async def _unexpected_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )
