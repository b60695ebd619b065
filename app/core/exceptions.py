"""Application-level exceptions and FastAPI exception handlers."""


import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError

logger = logging.getLogger(__name__)

class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        code: str = "INTERNAL_ERROR",
        details: Any = None,
    ):
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details
        super().__init__(message)

class BadRequestError(AppException):
    def __init__(self, message: str, details: Any = None):
        super().__init__(message, status_code=400, code="BAD_REQUEST", details=details)

class NotFoundError(AppException):
    def __init__(self, entity: str, entity_id: Any = None, details: Any = None):
        msg = f"{entity} not found" if entity_id is None else f"{entity} '{entity_id}' not found"
        super().__init__(msg, status_code=404, code="NOT_FOUND", details=details)

class ConflictError(AppException):
    def __init__(self, message: str, details: Any = None):
        super().__init__(message, status_code=409, code="CONFLICT", details=details)

class ServiceUnavailableError(AppException):
    def __init__(self, message: str = "Service temporarily unavailable"):
        super().__init__(message, status_code=503, code="SERVICE_UNAVAILABLE")

class StorageError(AppException):
    """Raised when the object store rejects or cannot complete a transfer."""

    def __init__(self, message: str):
        super().__init__(message, status_code=503, code="STORAGE_ERROR")

class CreditAnalysisError(AppException):
    """Raised when the AI narrative call fails (upstream service error)."""

    def __init__(self, message: str):
        super().__init__(message, status_code=502, code="AI_ANALYSIS_ERROR")

# ---------------------------------------------------------------------------
# Database error translation
# ---------------------------------------------------------------------------

def translate_integrity_error(exc: IntegrityError, entity: str = "Record") -> AppException:
    """Map a driver-level constraint violation onto a client-facing error.

    Drivers only expose the constraint kind through the message text
    (e.g. ``UNIQUE constraint failed`` on SQLite, ``duplicate key value
    violates unique constraint`` on Postgres), so match on that.
    """
    text = str(exc.orig).lower()
    if "unique" in text or "duplicate key" in text:
        return ConflictError(f"{entity} already exists")
    if "foreign key" in text:
        return NotFoundError("Referenced record", details="The referenced record does not exist")
    return AppException(f"Failed to save {entity.lower()}")

# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def _error_body(message: str, details: Any = None) -> dict:
    body: dict[str, Any] = {"success": False, "error": message}
    if details is not None:
        body["details"] = details
    return body

def _field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    errors = []
    for err in exc.errors():
        # Drop the "body"/"query" location prefix FastAPI adds
        loc = [str(p) for p in err.get("loc", ())[1:]]
        errors.append({"field": ".".join(loc), "message": err.get("msg", "Invalid value")})
    return errors

def register_exception_handlers(app: FastAPI) -> None:
    """Attach all custom exception handlers to the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        log = logger.error if exc.status_code >= 500 else logger.info
        log("%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, exc.details),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = _field_errors(exc)
        logger.info("Validation failed on %s: %s", request.url.path, details)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body("Validation failed", details),
        )

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
        logger.warning("Constraint violation on %s: %s", request.url.path, exc.orig)
        translated = translate_integrity_error(exc)
        return JSONResponse(
            status_code=translated.status_code,
            content=_error_body(translated.message, translated.details),
        )

    @app.exception_handler(OperationalError)
    @app.exception_handler(InterfaceError)
    async def database_unavailable_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Database unavailable on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=_error_body("Database connection not available. Service temporarily unavailable."),
        )

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content=_error_body("Resource not found"),
        )

    @app.exception_handler(Exception)
    async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=_error_body("An unexpected error occurred"),
        )
