"""
Error types for the forecast pipeline and their HTTP mapping.

Every request-level failure ends up as one of three responses:
400 for caller mistakes, 500 for provider and schema failures. The
details go to the server log only.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

MISSING_LOCATION_MESSAGE = "Please provide a location in the request body."
INTERNAL_ERROR_MESSAGE = "Internal Server Error"


class SportscastError(Exception):
    """Base class for all service errors."""


class ConfigurationError(SportscastError):
    """Startup configuration is unusable (e.g. missing API key)."""


class InputError(SportscastError):
    """The caller left out a required field."""

    def __init__(self, message: str = MISSING_LOCATION_MESSAGE):
        self.message = message
        super().__init__(message)


class ProviderError(SportscastError):
    """The LLM provider call failed: network, auth, quota, timeout or a malformed reply."""

    def __init__(self, message: str, timeout: bool = False, original: Exception | None = None):
        self.timeout = timeout
        self.original = original
        super().__init__(message)


class SchemaValidationError(SportscastError):
    """The model output did not match the forecast schema, even after repair."""

    def __init__(self, message: str, completion: str = ""):
        self.completion = completion
        super().__init__(message)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def _input_error_handler(request: Request, exc: InputError) -> JSONResponse:
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.message)
    return _error(400, exc.message)


async def _request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # unparseable body or a non-string location: same answer as a missing one
    logger.info("Invalid request body on %s: %s", request.url.path, exc.errors())
    return _error(400, MISSING_LOCATION_MESSAGE)


async def _provider_error_handler(request: Request, exc: ProviderError) -> JSONResponse:
    kind = "timeout" if exc.timeout else "failure"
    logger.error("LLM provider %s on %s: %s", kind, request.url.path, exc)
    return _error(500, INTERNAL_ERROR_MESSAGE)


async def _schema_error_handler(request: Request, exc: SchemaValidationError) -> JSONResponse:
    logger.error("Model output rejected on %s: %s", request.url.path, exc)
    return _error(500, INTERNAL_ERROR_MESSAGE)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(500, INTERNAL_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InputError, _input_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(ProviderError, _provider_error_handler)
    app.add_exception_handler(SchemaValidationError, _schema_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
