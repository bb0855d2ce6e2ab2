"""Error taxonomy shared by the proxy endpoints."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base class for errors that are reported to callers as JSON bodies."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(ServiceError):
    """The caller supplied missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConfigurationError(ServiceError):
    """The deployment is missing a required secret or setting."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class UpstreamError(ServiceError):
    """The external service failed, or calling it raised."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(message: str) -> dict[str, str]:
    return {"error": message}


async def _handle_service_error(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))


async def _handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Malformed JSON and wrongly typed fields are caller errors, not 422s.
    fields = sorted(
        {
            error["loc"][1]
            for error in exc.errors()
            if len(error.get("loc", ())) > 1
            and error["loc"][0] == "body"
            and isinstance(error["loc"][1], str)
        }
    )
    if fields:
        message = f"Invalid request field(s): {', '.join(fields)}"
    else:
        message = "Request body must be a JSON object"
    logger.debug("Rejected request to %s: %s", request.url.path, exc.errors())
    return JSONResponse(
        status_code=ValidationError.status_code, content=error_body(message)
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install handlers that turn service errors into ``{"error": ...}`` bodies."""
    app.add_exception_handler(ServiceError, _handle_service_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation_error)


__all__ = [
    "ConfigurationError",
    "ServiceError",
    "UpstreamError",
    "ValidationError",
    "error_body",
    "register_error_handlers",
]
