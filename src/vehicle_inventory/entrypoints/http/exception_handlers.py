"""FastAPI exception handlers.

Translates domain errors (and framework errors) into the response envelope
with an appropriate HTTP status code.
"""

import logging
from collections import defaultdict

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from vehicle_inventory.config import expose_error_details
from vehicle_inventory.domain.errors import GLOBAL_FIELD, DomainError
from vehicle_inventory.entrypoints.http.error_responses import failure

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def _envelope(status_code: int, errors: dict[str, list[str]]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=failure(errors).model_dump(mode="json"))


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Handle all domain errors with automatic HTTP status code mapping.

    Maps domain errors to appropriate HTTP status codes:
    - VALIDATION_ERROR, EMPTY_PAYLOAD → 422 Unprocessable Entity
    - NOT_FOUND → 404 Not Found
    - CONFLICT → 409 Conflict
    - INTERNAL_ERROR → 500 Internal Server Error
    - Other → 400 Bad Request

    Args:
        request: FastAPI request object
        exc: Domain error to handle

    Returns:
        Envelope with the error's field-error map
    """
    status_code_map: dict[str, int] = {
        "VALIDATION_ERROR": 422,  # HTTP_422_UNPROCESSABLE_CONTENT
        "EMPTY_PAYLOAD": 422,
        "NOT_FOUND": status.HTTP_404_NOT_FOUND,
        "CONFLICT": status.HTTP_409_CONFLICT,
        "INTERNAL_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
    }

    status_code = status_code_map.get(exc.error_code, status.HTTP_400_BAD_REQUEST)

    if status_code >= 500:
        logger.error(
            "Domain error occurred",
            extra={
                "error_code": exc.error_code,
                "error_message": exc.message,
                "context": exc.context,
                "path": request.url.path,
                "method": request.method,
            },
        )
    else:
        logger.info(
            "Client error",
            extra={
                "error_code": exc.error_code,
                "error_message": exc.message,
                "path": request.url.path,
                "method": request.method,
            },
        )

    return _envelope(status_code, exc.field_errors())


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle FastAPI/Pydantic validation errors.

    These come from typed route parameters, e.g. a non-integer vehicle id
    in the path. Errors are keyed by parameter name like domain errors.

    Args:
        request: FastAPI request object
        exc: Pydantic validation error

    Returns:
        Envelope with 422 status
    """
    errors: dict[str, list[str]] = defaultdict(list)

    for error in exc.errors():
        # Filter out 'body', 'query' and 'path' prefixes
        field_path = ".".join(
            str(loc) for loc in error["loc"] if loc not in ("body", "query", "path")
        )
        errors[field_path or GLOBAL_FIELD].append(error["msg"])

    logger.info(
        "Request validation error",
        extra={
            "errors": dict(errors),
            "path": request.url.path,
            "method": request.method,
        },
    )

    return _envelope(422, dict(errors))  # HTTP_422_UNPROCESSABLE_CONTENT


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes, disallowed methods and other transport-level misses."""
    logger.info(
        "HTTP error",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
            "method": request.method,
        },
    )

    response = _envelope(exc.status_code, {GLOBAL_FIELD: [str(exc.detail)]})
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected errors.

    These should be rare and indicate bugs or infrastructure issues (e.g. the
    database being unavailable). Always logged with full traceback. The raw
    message only reaches the client when EXPOSE_ERROR_DETAILS is enabled.

    Args:
        request: FastAPI request object
        exc: Unexpected exception

    Returns:
        Envelope with 500 status and a ``global`` error
    """
    logger.error(
        "Unexpected error occurred",
        exc_info=exc,
        extra={
            "error_type": type(exc).__name__,
            "error_message": str(exc),
            "path": request.url.path,
            "method": request.method,
        },
    )

    message = str(exc) if expose_error_details() and str(exc) else GENERIC_ERROR_MESSAGE
    return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, {GLOBAL_FIELD: [message]})


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with FastAPI app.

    This should be called once during app initialization.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(DomainError, handle_domain_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, handle_unexpected_error)

    logger.info("Exception handlers registered successfully")
