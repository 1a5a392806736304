"""
Application error taxonomy and request-boundary exception handlers.

Every failure leaves the API as {"error": <message>, "code": <stable code>}.
Clients that only read `error` keep working; `code` is for programmatic checks.
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    status_code = 500
    code = "INTERNAL_ERROR"
    message = "Internal server error"

    def __init__(self, message: Optional[str] = None, headers: Optional[dict[str, str]] = None):
        self.message = message or self.message
        self.headers = headers
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"
    message = "Invalid request"


class AuthenticationError(AppError):
    status_code = 401
    code = "UNAUTHENTICATED"
    message = "Unauthorized"


class AuthorizationError(AppError):
    status_code = 403
    code = "FORBIDDEN"
    message = "Forbidden"


class NotFoundError(AppError):
    status_code = 404
    code = "NOT_FOUND"
    message = "Not found"


class ConflictError(AppError):
    status_code = 409
    code = "CONFLICT"
    message = "Conflict"


class RateLimitError(AppError):
    status_code = 429
    code = "RATE_LIMITED"
    message = "Too many requests"


class UnexpectedError(AppError):
    pass


def error_response(
    status_code: int,
    message: str,
    code: str,
    headers: Optional[dict[str, str]] = None,
    **extra: Any,
) -> JSONResponse:
    content = {"error": message, "code": code}
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _describe_validation_error(error: dict) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path"))
    message = error.get("msg", "Invalid value")
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    return f"{location}: {message}" if location else message


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} - {exc.message}")
        else:
            logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.message}")
        return error_response(exc.status_code, exc.message, exc.code, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        logger.warning(f"Validation error for {request.url.path}: {errors}")
        message = _describe_validation_error(errors[0]) if errors else ValidationError.message
        details = [
            {"loc": [str(part) for part in e.get("loc", ())], "msg": e.get("msg")} for e in errors
        ]
        return error_response(400, message, ValidationError.code, details=details)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return error_response(exc.status_code, message, f"HTTP_{exc.status_code}", headers=exc.headers)

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        logger.exception(f"❌ Database error on {request.method} {request.url.path}: {exc}")
        return error_response(500, UnexpectedError.message, UnexpectedError.code)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"❌ Unhandled error on {request.method} {request.url.path}: {exc}")
        return error_response(500, UnexpectedError.message, UnexpectedError.code)
