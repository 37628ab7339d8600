"""Exception handlers that turn failures into JSON error bodies."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tutoring_api.errors import TutoringError, ValidationError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI, typed_statuses: bool) -> None:
    """Install handlers for domain and request validation errors.

    Unless `typed_statuses` is set every failure is reported as 400.
    """

    def error_response(exc: TutoringError) -> JSONResponse:
        status_code = (
            exc.status_code if typed_statuses else status.HTTP_400_BAD_REQUEST
        )
        return JSONResponse(
            status_code=status_code,
            content={"error": exc.message, "kind": exc.kind},
        )

    @app.exception_handler(TutoringError)
    async def handle_tutoring_error(
        request: Request, exc: TutoringError
    ) -> JSONResponse:
        logger.warning(
            "Request failed",
            extra={"path": request.url.path, "kind": exc.kind, "error": exc.message},
        )
        return error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        message = format_validation_errors(exc.errors())
        logger.warning(
            "Invalid request body",
            extra={"path": request.url.path, "error": message},
        )
        return error_response(ValidationError(message))


def format_validation_errors(errors: list[dict]) -> str:
    """Collapse pydantic errors into a single readable message."""
    parts = []
    for error in errors:
        loc = [str(item) for item in error.get("loc", ()) if item != "body"]
        field = ".".join(loc)
        message = error.get("msg", "invalid value")
        parts.append(f"{field}: {message}" if field else message)
    return "Invalid request: " + "; ".join(parts) if parts else "Invalid request"
