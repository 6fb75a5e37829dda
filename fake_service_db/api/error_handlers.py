"""Error Handlers — global exception handlers answering with envelopes.

Invariants:
    - FakeServiceError → envelope with code = http_status and error = message
    - RequestValidationError → 400 envelope
    - Exception (catch-all) → 500 envelope, never leaks internal details
    - HTTP status always equals the envelope code
"""

import logging

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError

from fake_service_db.api.responses import envelope_response
from fake_service_db.core.errors import FakeServiceError
from fake_service_db.schemas.envelope import Envelope

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_service_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_service_error_handler(app: FastAPI) -> None:

    @app.exception_handler(FakeServiceError)
    async def service_error_handler(request: Request, exc: FakeServiceError):
        logger.error(
            f"FakeServiceError: {exc.message}",
            extra={**exc.log_fields(), "path": request.url.path},
        )
        return _error_envelope(request, exc.http_status, exc.message)


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return _error_envelope(
            request, status.HTTP_400_BAD_REQUEST, "Invalid request data",
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all; never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return _error_envelope(
            request, status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE,
        )


def _error_envelope(request: Request, code: int, message: str) -> Response:
    return envelope_response(Envelope(
        name=request.app.state.settings.name,
        body=message,
        code=code,
        error=message,
    ))
