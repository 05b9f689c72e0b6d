"""
Central error handling for the HRMS access-control backend

Services raise the typed errors below; the handlers registered in app.main
translate them (and FastAPI's own exceptions) into one JSON envelope:

    {"success": false, "data": null, "message": "...", "errors": {...}, "path": "/api/..."}
"""
import logging
import traceback
from typing import Any, Dict, List, Optional

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors that map onto an HTTP status code."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    default_message: str = "An error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[Dict[str, List[str]]] = None,
    ) -> None:
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input. `errors` maps field name -> messages."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    default_message = "Validation failed"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


def _error_body(request: Request, message: str, errors: Any = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "success": False,
        "data": None,
        "message": message,
    }
    if errors is not None:
        body["errors"] = errors
    body["path"] = str(request.url.path)
    return body


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Translate a typed application error into its status code and envelope."""
    if exc.status_code == status.HTTP_403_FORBIDDEN:
        logger.info("Forbidden on %s: %s", request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, exc.message, exc.errors),
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """
    Handle HTTPException with consistent JSON response format

    Args:
        request: FastAPI request object
        exc: HTTPException instance

    Returns:
        JSONResponse with error details
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


def _field_errors(raw_errors) -> Dict[str, List[str]]:
    """Collapse pydantic error entries into a field -> messages map."""
    fields: Dict[str, List[str]] = {}
    for err in raw_errors:
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        key = ".".join(loc) or "non_field_errors"
        fields.setdefault(key, []).append(err.get("msg", "Invalid value"))
    return fields


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle RequestValidationError as a 422 with a field-keyed error map

    Only field names and messages are returned; raw input values and
    validator context are never echoed back.
    """
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body(request, "Validation failed", _field_errors(exc.errors())),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected exceptions with consistent JSON response format

    Does not leak internal error details in production.
    """
    from app.core.config import settings

    logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)

    if settings.APP_ENV == "prod":
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(request, "Internal server error"),
        )

    body = _error_body(request, str(exc))
    if settings.APP_ENV == "local":
        body["traceback"] = traceback.format_exc()
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)
