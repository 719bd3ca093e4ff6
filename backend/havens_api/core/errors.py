"""
Exception handlers.

Every error leaves the API as {"error": message}. Dashboards show the
message verbatim, so nothing internal goes into it.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from havens_shared.config.logging import rest_api_logger as logger
from havens_shared.infrastructure.correlation import get_request_id
from havens_shared.security.rate_limit import rate_limit_exceeded_handler


def _error(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """AppException and plain HTTPException (401 from token checks, 404 routes)."""
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return _error(exc.status_code, message, getattr(exc, "headers", None))


def _describe(error: dict) -> str:
    location = [str(part) for part in error.get("loc", ()) if part != "body"]
    field = ".".join(location)
    message = error.get("msg", "Invalid value")
    if error.get("type") == "missing":
        return f"{field} is required" if field else "Missing required field"
    return f"{field}: {message}" if field else message


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed or missing input is a 400 ValidationError."""
    errors = exc.errors()
    message = _describe(errors[0]) if errors else "Invalid request"
    logger.warning(
        "Request validation failed",
        path=request.url.path,
        errors=len(errors),
        first_error=message,
    )
    return _error(400, message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Unexpected failures become a generic 500."""
    logger.error(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        request_id=get_request_id(),
        error=str(exc),
        exc_info=exc,
    )
    return _error(500, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
