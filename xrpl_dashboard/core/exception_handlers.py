"""
Application-level exception handlers.

Routers translate errors at their own boundary. These handlers cover what
is raised before a handler runs: dependency failures (no database) and
request validation (non-numeric page, malformed JSON body).
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from xrpl_dashboard.core.responses import error_json_response, status_for, tool_error_json_response
from xrpl_dashboard.shared.exceptions import AppException, MalformedInput, ValidationError
from xrpl_dashboard.utils.logger import get_logger

logger = get_logger(__name__)

# Database tool endpoints answer {"status": "error", ...} envelopes
TOOL_PATH_PREFIX = "/api/mongodb/"


def _envelope(request: Request, status_code: int, message: str) -> JSONResponse:
    if request.url.path.startswith(TOOL_PATH_PREFIX):
        return tool_error_json_response(status_code, message)
    return error_json_response(status_code, message)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Translate AppException raised outside a router's own try block."""
    logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    return _envelope(request, status_for(exc.status_code), exc.message)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Request validation failures answer 400.

    An unparseable JSON body is reported as malformed input, anything else
    as a validation error naming the offending parameters.
    """
    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        error = MalformedInput()
    else:
        fields = ", ".join(
            ".".join(str(part) for part in error.get("loc", ()) if part not in ("query", "body"))
            for error in errors
        )
        error = ValidationError(f"Invalid request parameters: {fields}" if fields else "Invalid request parameters")

    logger.warning(f"{error.code} on {request.method} {request.url.path}: {errors}")
    return _envelope(request, status.HTTP_400_BAD_REQUEST, error.message)
