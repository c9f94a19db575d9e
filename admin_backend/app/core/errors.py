# app/core/errors.py
"""
Error taxonomy for the admin API.

Every failure that reaches a caller is one of the HTTPException subclasses
below. `register_error_handlers` renders them as `{"error": ..., "code": ...}`
so dashboard clients only ever see a single error shape.
"""
import logging
from typing import Optional

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger("admin.errors")

_BEARER = {"WWW-Authenticate": "Bearer"}


class AdminApiError(HTTPException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = "internal"
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, headers: Optional[dict] = None):
        super().__init__(
            status_code=self.status_code,
            detail=message or self.default_message,
            headers=headers,
        )


class Unauthenticated(AdminApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"
    default_message = "Missing Authorization Bearer token"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers=_BEARER)


class InvalidCredential(AdminApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "invalid_credential"
    default_message = "Invalid or expired token"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message, headers=_BEARER)


class Forbidden(AdminApiError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    default_message = "Forbidden: admin access only"


class BadRequest(AdminApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "bad_request"
    default_message = "Bad request"


class NotFound(AdminApiError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Not found"


class InternalError(AdminApiError):
    pass


def internal_error(exc: Exception, log: logging.Logger, what: str) -> InternalError:
    """Log a downstream failure and wrap its raw message for the caller."""
    log.exception("%s failed", what)
    return InternalError(str(exc) or exc.__class__.__name__)


_CODES_BY_STATUS = {
    400: BadRequest.code,
    401: Unauthenticated.code,
    403: Forbidden.code,
    404: NotFound.code,
}


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = getattr(exc, "code", None) or _CODES_BY_STATUS.get(exc.status_code, "error")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "code": code},
        headers=getattr(exc, "headers", None),
    )


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug("Rejected request body on %s: %s", request.url.path, exc.errors())
    return await _http_exception_handler(request, BadRequest("Malformed request body"))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
