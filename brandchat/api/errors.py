"""Relay error type and the handlers that render errors as ``{"error": ...}``."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

MISSING_MESSAGE = "Missing 'message' in request body"
MISSING_CREDENTIALS = (
    "Server misconfiguration: GEMINI_API_KEY (or GOOGLE_API_KEY) not set in .env"
)
MISSING_CREDENTIALS_SUGGEST = "Server misconfiguration: GEMINI_API_KEY not set"
INVALID_BODY = "Invalid request body"


class RelayError(Exception):
    """Raised by route code to answer with a JSON error body.

    Only used before a streaming response has been committed; afterwards
    errors travel in-band.
    """

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    """Render a RelayError."""
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Map malformed JSON bodies to 400 instead of FastAPI's 422."""
    logger.debug(f"Invalid body for {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": INVALID_BODY},
    )


def register_error_handlers(application: FastAPI) -> None:
    """Install the relay's exception handlers on ``application``."""
    application.add_exception_handler(RelayError, relay_error_handler)
    application.add_exception_handler(RequestValidationError, validation_error_handler)
