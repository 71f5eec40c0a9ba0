import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppException(Exception):
    def __init__(self, message: str, status_code: int = 400):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ValidationError(AppException):
    """A required field is missing or blank."""

    def __init__(self, message: str):
        super().__init__(message, status_code=400)


class NotFoundError(AppException):
    """Unknown host, visit or token."""

    def __init__(self, message: str):
        super().__init__(message, status_code=404)


class ConflictError(AppException):
    """A unique constraint (host email, visit token) was violated."""

    def __init__(self, message: str):
        super().__init__(message, status_code=409)


class AlreadyCheckedOutError(ConflictError):
    """The visit already has a check-out time."""


class StorageError(AppException):
    """The underlying transaction failed. Not retried."""

    def __init__(self, message: str = "Storage failure"):
        super().__init__(message, status_code=500)


def _describe_validation_errors(exc: RequestValidationError) -> str:
    fields: list[str] = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")]
        name = ".".join(loc) or "body"
        if name not in fields:
            fields.append(name)
    return f"invalid or missing fields: {', '.join(fields)}"


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppException)
    async def _app_exception_handler(_: Request, exc: AppException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message},
        )

    @app.exception_handler(RequestValidationError)
    async def _request_validation_handler(_: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={"error": _describe_validation_errors(exc)},
        )

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
        )
