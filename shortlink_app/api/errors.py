"""
Translate core errors into HTTP responses.

Every failure is answered as {"error": "<message>"}; storage failures never
leak their details.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shortlink_app.exceptions import (
    ConflictError,
    ExpiredError,
    NotFoundError,
    ShortLinkError,
    StorageError,
    ValidationError,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ConflictError: status.HTTP_409_CONFLICT,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ExpiredError: status.HTTP_410_GONE,
}

INTERNAL_ERROR_MESSAGE = "Internal server error"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def short_link_error_handler(request: Request, exc: ShortLinkError) -> JSONResponse:
    status_code = STATUS_BY_ERROR.get(type(exc))
    if status_code is None or isinstance(exc, StorageError):
        # Already logged with traceback where it was raised
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)
    return error_response(status_code, exc.message or "Request failed")


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed bodies are a ValidationError like any other: 400"""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return error_response(status.HTTP_400_BAD_REQUEST, "; ".join(messages) or "Invalid request")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ShortLinkError, short_link_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
