from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from src.platform.exception.exceptions import CustomBaseError, ValidationError
from src.platform.logging.loguru_io import Logger


# Type alias for exception handlers (compatible with Starlette's expected signature)
ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]

TIMESTAMP_FORMAT = '%Y-%m-%d %H:%M:%S'


def _error_body(*, status_code: int, reason: str, message: Any) -> dict[str, Any]:
    return {
        'status': HTTPStatus(status_code).name,
        'reason': reason,
        'message': message,
        'timestamp': datetime.now(timezone.utc).strftime(TIMESTAMP_FORMAT),
    }


async def custom_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, CustomBaseError) else CustomBaseError(str(exc))
    return JSONResponse(
        status_code=error.status_code,
        content=_error_body(
            status_code=error.status_code, reason=error.reason, message=error.message
        ),
    )


async def value_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(
            status_code=status.HTTP_400_BAD_REQUEST,
            reason=ValidationError.reason,
            message=str(exc),
        ),
    )


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, RequestValidationError) else RequestValidationError([])
    messages = [
        f'{".".join(str(part) for part in err.get("loc", ()))}: {err.get("msg", "")}'
        for err in error.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(
            status_code=status.HTTP_400_BAD_REQUEST,
            reason=ValidationError.reason,
            message='; '.join(messages),
        ),
    )


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.exception(f'Unhandled error on {request.url.path}: {exc}')
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            reason=CustomBaseError.reason,
            message='Internal server error',
        ),
    )


EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    CustomBaseError: custom_error_handler,
    ValueError: value_error_handler,
    RequestValidationError: validation_error_handler,
    Exception: general_500_exception_handler,  # Catch-all for unhandled exceptions
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
