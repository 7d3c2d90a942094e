"""
Maps service error kinds and framework exceptions to JSON responses.

Every error body has a ``message``; validation failures add an
``errors`` list with one entry per offending field.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .errors import DEFAULT_MESSAGES, ErrorKind, Result, ServiceError, STATUS_BY_KIND

logger = logging.getLogger(__name__)


class ServiceErrorException(Exception):
    """Carries a ``ServiceError`` from a route up to the exception handler."""

    def __init__(self, error: ServiceError):
        super().__init__(error.message)
        self.error = error


def unwrap(result: Result):
    """Return the result's value or raise its error for the handler to map."""
    if not result.is_ok:
        raise ServiceErrorException(result.error)
    return result.value


def error_body(error: ServiceError) -> dict:
    body = {"message": error.message}
    if error.details:
        body["errors"] = error.details
    return body


def _validation_details(exc: RequestValidationError) -> list:
    details = []
    for err in exc.errors():
        field = ".".join(str(x) for x in err.get("loc", []) if x != "body")
        details.append({"field": field, "message": err.get("msg") or "Invalid input."})
    return details


def _request_settings(request: Request) -> Settings:
    """Settings as route dependencies see them, honouring app overrides."""
    provider = request.app.dependency_overrides.get(get_settings, get_settings)
    return provider()


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ServiceErrorException)
    async def service_error_handler(request: Request, exc: ServiceErrorException):
        return JSONResponse(status_code=STATUS_BY_KIND[exc.error.kind], content=error_body(exc.error))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        error = ServiceError.of(ErrorKind.VALIDATION_ERROR, _validation_details(exc))
        return JSONResponse(status_code=error.status_code, content=error_body(error))

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        body = {"message": DEFAULT_MESSAGES[ErrorKind.INTERNAL_ERROR]}
        if _request_settings(request).is_development:
            body["error"] = f"{exc.__class__.__name__}: {exc}"
        return JSONResponse(status_code=STATUS_BY_KIND[ErrorKind.INTERNAL_ERROR], content=body)
