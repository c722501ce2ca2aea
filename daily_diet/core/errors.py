"""
Error taxonomy shared by every route.

All error responses share one body shape, ``{"error": str, "message": str}``.
Routes raise ``ApiError`` (an ``HTTPException``) and the handlers registered in
``register_exception_handlers`` render it; validation failures and unexpected
exceptions are rendered the same way.
"""
import logging
from http import HTTPStatus
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiError(HTTPException):
    """HTTPException that also carries the short error kind shown to clients."""

    def __init__(
        self,
        status_code: int,
        message: str,
        error: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.error = error or _phrase(status_code)


def _phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def bad_request(message: str, error: str = "Bad Request") -> ApiError:
    return ApiError(status.HTTP_400_BAD_REQUEST, message, error)

def unauthorized(message: str, error: str = "Unauthorized") -> ApiError:
    return ApiError(status.HTTP_401_UNAUTHORIZED, message, error)

def forbidden(message: str, error: str = "Forbidden") -> ApiError:
    return ApiError(status.HTTP_403_FORBIDDEN, message, error)

def not_found(message: str, error: str = "Not Found") -> ApiError:
    return ApiError(status.HTTP_404_NOT_FOUND, message, error)

def conflict(message: str, error: str = "Conflict") -> ApiError:
    return ApiError(status.HTTP_409_CONFLICT, message, error)

def internal_error(message: str, error: str = "Internal Server Error") -> ApiError:
    return ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, message, error)


def error_body(error: str, message: Any) -> Dict[str, str]:
    return {"error": error, "message": str(message)}


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        # drop the leading "body"/"path"/"query" marker
        loc = [str(p) for p in err.get("loc", ())[1:]]
        field = ".".join(loc) or "body"
        parts.append(f"{field}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts) or "Invalid request"


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    kind = getattr(exc, "error", None) or _phrase(exc.status_code)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(kind, exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Bad Request", _format_validation_errors(exc)),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=error_body("Conflict", "Resource already exists"),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal Server Error", exc),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
