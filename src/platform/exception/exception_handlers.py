from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from src.platform.exception.exceptions import CustomBaseError, InternalError
from src.platform.logging.loguru_io import Logger

# Type alias for exception handlers (compatible with Starlette's expected signature)
ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]


def _error_response(*, status_code: int, message: str, **extra: Any) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={'success': False, 'error': message, **extra}
    )


async def custom_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, CustomBaseError) else CustomBaseError(str(exc), 500)
    if isinstance(error, InternalError):
        return _error_response(status_code=error.status_code, message=error.public_message)
    return _error_response(status_code=error.status_code, message=error.message)


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, RequestValidationError) else RequestValidationError([])
    return _error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        message='Invalid request body',
        detail=[{'loc': list(e['loc']), 'msg': e['msg']} for e in error.errors()],
    )


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.opt(exception=exc).error(
        f'Unhandled {type(exc).__name__} on {request.method} {request.url.path}'
    )
    return _error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message='Internal server error',
    )


# Exception handler mapping
EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    CustomBaseError: custom_error_handler,
    RequestValidationError: validation_error_handler,
    Exception: general_500_exception_handler,  # Catch-all for unhandled exceptions
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
