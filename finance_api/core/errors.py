"""
Application errors and the JSON error envelope.

Every error leaves the API as ``{"success": false, "message", "code"}``,
optionally with per-field ``errors`` for validation failures and a ``stack``
in development.
"""
import logging
import traceback
from collections import defaultdict
from typing import Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Expected, operational error with an HTTP status and a machine-readable code."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        code: str = "INTERNAL_ERROR",
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code

    def __repr__(self):
        return f"<AppError {self.status_code} {self.code}: {self.message}>"


class NotFoundError(AppError):
    def __init__(self, resource: str):
        super().__init__(f"{resource} not found", status.HTTP_404_NOT_FOUND, "NOT_FOUND")


HTTP_STATUS_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    429: "RATE_LIMIT_EXCEEDED",
}


def error_response(
    status_code: int,
    message: str,
    code: str,
    errors: Optional[Dict[str, List[str]]] = None,
    exc: Optional[BaseException] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    content = {"success": False, "message": message, "code": code}
    if errors:
        content["errors"] = errors
    if settings.is_development and exc is not None:
        content["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def format_validation_errors(exc: RequestValidationError) -> Dict[str, List[str]]:
    errors: Dict[str, List[str]] = defaultdict(list)
    for err in exc.errors():
        # Drop the "body"/"query"/"path" prefix
        loc = [str(part) for part in err.get("loc", ())[1:]]
        path = ".".join(loc) or err.get("loc", ("body",))[0]
        errors[path].append(err.get("msg", "Invalid value"))
    return dict(errors)


async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"❌ {request.method} {request.url.path}: {exc!r}")
    return error_response(exc.status_code, exc.message, exc.code, exc=exc)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    locations = {err.get("loc", ("body",))[0] for err in exc.errors()}
    if locations == {"path"}:
        return error_response(status.HTTP_400_BAD_REQUEST, "Invalid ID format", "INVALID_ID", exc=exc)
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "Validation failed",
        "VALIDATION_ERROR",
        errors=format_validation_errors(exc),
        exc=exc,
    )


async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return error_response(status.HTTP_409_CONFLICT, "Resource already exists", "DUPLICATE_ERROR", exc=exc)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    code = HTTP_STATUS_CODES.get(exc.status_code, "HTTP_ERROR")
    return error_response(exc.status_code, str(exc.detail), code, headers=getattr(exc, "headers", None))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}", exc_info=exc)
    message = str(exc) if settings.is_development else "Something went wrong"
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message, "INTERNAL_ERROR", exc=exc)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
