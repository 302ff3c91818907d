"""
HTTP mapping for marketplace errors.

Every error body is ``{"detail": ..., "error": <error type>}``. Domain
errors carry their own status code; a ledger write that kept losing races
(TransientConflictError) is a 409 the client may retry.
"""

from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from src.platform.exception.exceptions import CustomBaseError, TransientConflictError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.marketplace_metrics import metrics

# Type alias for exception handlers (compatible with Starlette's expected signature)
ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]

RETRY_AFTER_SECONDS = '1'


def _error_response(
    *, status_code: int, error: str, detail: Any, headers: dict[str, str] | None = None
) -> JSONResponse:
    metrics.record_error_response(error=error, status_code=status_code)
    return JSONResponse(
        status_code=status_code,
        content={'detail': detail, 'error': error},
        headers=headers,
    )


async def marketplace_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, CustomBaseError) else CustomBaseError(str(exc), 500)
    headers = (
        {'Retry-After': RETRY_AFTER_SECONDS} if isinstance(error, TransientConflictError) else None
    )
    return _error_response(
        status_code=error.status_code,
        error=type(error).__name__,
        detail=error.message,
        headers=headers,
    )


async def value_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return _error_response(
        status_code=status.HTTP_400_BAD_REQUEST, error='ValueError', detail=str(exc)
    )


async def request_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    # Malformed bodies are client errors (400), same as domain validation failures
    errors = exc.errors() if isinstance(exc, RequestValidationError) else []
    return _error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        error='RequestValidationError',
        detail=jsonable_encoder(errors),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    if not getattr(exc, '_has_logged', False):
        Logger.base.opt(exception=exc).error(
            f'💥 [HTTP] Unhandled {type(exc).__name__} on {request.method} {request.url.path}'
        )
    return _error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        error='InternalServerError',
        detail='Internal server error',
    )


EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    CustomBaseError: marketplace_error_handler,
    ValueError: value_error_handler,
    RequestValidationError: request_validation_handler,
    Exception: unhandled_error_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
