"""HTTP error types and the handlers that render them as ``{"error": ...}``."""
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .services.merger import MergeValidationError, describe_validation_errors

logger = logging.getLogger(__name__)


class ApiError(HTTPException):
    """Base for errors with a fixed status code."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(status_code=self.status_code, detail=message)


class BadRequest(ApiError):
    status_code = 400


class AuthenticationRequired(ApiError):
    status_code = 401


class AuthorizationDenied(ApiError):
    status_code = 403


class NotFound(ApiError):
    status_code = 404


class Conflict(ApiError):
    status_code = 409


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error(400, describe_validation_errors(exc.errors()))


async def model_validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return _error(400, describe_validation_errors(exc.errors()))


async def merge_validation_handler(request: Request, exc: MergeValidationError) -> JSONResponse:
    return _error(400, exc.message)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return _error(500, str(exc) or exc.__class__.__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on an application."""
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationError, model_validation_handler)
    app.add_exception_handler(MergeValidationError, merge_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
