# bike_inventory/core/exceptions.py

"""
Application error types and their translation into the JSON error envelope.

Every error response has the shape ``{"status": "error", "code": int, "message": str}``.
Services raise the ``ApiError`` subclasses below; FastAPI/Starlette errors,
request validation failures and database integrity violations are mapped
by the handlers registered in ``register_exception_handlers``.
"""

import logging
from typing import Optional, Dict

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


# =============================================================================
# 1. Error types
# =============================================================================
class ApiError(HTTPException):
    """Base class for errors raised deliberately by the service layer."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, headers: Optional[Dict[str, str]] = None):
        super().__init__(status_code=self.status_code, detail=message, headers=headers)
        self.message = message


class BadRequestError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class ForbiddenError(ApiError):
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND


class StorageError(ApiError):
    """Object storage call failed (upload, delete or presign)."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


# =============================================================================
# 2. Envelope helpers
# =============================================================================
def error_body(code: int, message: str) -> Dict[str, object]:
    return {"status": "error", "code": code, "message": message}


def error_response(code: int, message: str, headers: Optional[Dict[str, str]] = None) -> JSONResponse:
    return JSONResponse(status_code=code, content=error_body(code, message), headers=headers)


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path"))
    message = first.get("msg", "Invalid request")
    return f"{location}: {message}" if location else message


# =============================================================================
# 3. Handlers
# =============================================================================
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return error_response(exc.status_code, message, getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, _first_validation_message(exc))


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning("Integrity violation on %s %s: %s", request.method, request.url.path, exc.orig)
    return error_response(status.HTTP_400_BAD_REQUEST, "Request conflicts with existing data")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
