"""Error taxonomy shared by the workflows and its HTTP rendering.

Workflows raise one of the ``StoreError`` subclasses; the handlers installed
by :func:`install_handlers` turn them into ``{"error": message}`` bodies, the
shape the storefront client reads.
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class StoreError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = 'Internal server error'

    def __init__(self, message: str | None = None, status_code: int | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        if status_code:
            self.status_code = status_code


class ValidationError(StoreError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = 'Invalid request'


class ConflictError(StoreError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = 'Resource already exists'


class AuthError(StoreError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = 'Access token required'


class NotFoundError(StoreError):
    status_code = status.HTTP_404_NOT_FOUND
    message = 'Not found'


class PaymentError(StoreError):
    # Provider detail stays in the server log.
    message = 'Payment processing failed'


class InternalError(StoreError):
    pass


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={'error': message})


async def store_error_handler(request: Request, exc: StoreError):
    return _error(exc.status_code, exc.message)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = '.'.join(str(p) for p in first.get('loc', ()) if p != 'body')
        message = f"{field}: {first.get('msg')}" if field else first.get('msg', 'Invalid request')
    else:
        message = 'Invalid request'
    return _error(status.HTTP_400_BAD_REQUEST, message)


async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return _error(exc.status_code, 'Route not found')
    return _error(exc.status_code, str(exc.detail))


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception('Unhandled error on %s %s', request.method, request.url.path)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, 'Internal server error')


def install_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StoreError, store_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
