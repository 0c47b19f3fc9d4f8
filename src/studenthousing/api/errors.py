"""
API Error Handlers

Every error response body has the shape ``{"message": str}`` so clients can
surface the server's explanation directly. Validation failures also carry an
``errors`` list with the offending fields.
"""
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.studenthousing.utils.logger import get_logger

logger = get_logger(__name__)


def _field_path(loc) -> str:
    parts = [str(part) for part in loc if part not in ("body", "query", "path")]
    return ".".join(parts) or "request"


def format_validation_message(exc: RequestValidationError) -> str:
    """
    Summarize validation errors as one line, e.g.
    ``Validation failed: rent: Field required; address: ...``.
    """
    details = [f"{_field_path(err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()]
    return "Validation failed: " + "; ".join(details)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTPException detail as ``message``."""
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": message},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Missing or malformed fields are a 400 with a readable summary."""
    message = format_validation_message(exc)
    logger.info("request_validation_failed", path=request.url.path, message=message)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": message, "errors": jsonable_encoder(exc.errors())},
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Constraint violations that escaped the routers are reported as conflicts."""
    logger.warning("integrity_error", path=request.url.path, error=str(exc.orig))
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"message": "Request conflicts with existing data"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Install the JSON error handlers on an application.

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
