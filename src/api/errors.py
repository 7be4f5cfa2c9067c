"""Exception handlers turning failures into error envelopes."""

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.config import get_settings
from src.exceptions import AppError, AuthError
from src.schemas.common import ApiErrorResponse

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Internal server error"


def error_response(
    status_code: int,
    message: str,
    error: object = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build a JSON response carrying the error envelope."""
    body = ApiErrorResponse(message=message, error=jsonable_encoder(error))
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Map service failures to their status codes."""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None

    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        error = GENERIC_ERROR if get_settings().is_production else exc.details or exc.message
        return error_response(exc.status_code, exc.message, error)

    return error_response(exc.status_code, exc.message, exc.details, headers)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies, paths, and queries as 400."""
    return error_response(status.HTTP_400_BAD_REQUEST, "Validation Error", exc.errors())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Envelope framework-raised HTTP errors such as unmatched routes."""
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return error_response(
            exc.status_code,
            "Not found",
            f"Route {request.method} {request.url.path} not found",
        )
    return error_response(exc.status_code, str(exc.detail), headers=exc.headers)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for anything the services did not translate."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    if get_settings().is_production:
        error = GENERIC_ERROR
    else:
        error = "".join(traceback.format_exception(exc))
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Something went wrong", error)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error envelope handlers on the app."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
