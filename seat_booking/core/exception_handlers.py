import logging
from typing import Any, Callable, Coroutine, Dict, Type

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from seat_booking.core.exceptions import SeatBookingError

logger = logging.getLogger(__name__)

ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]


async def seat_booking_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, SeatBookingError) else SeatBookingError(str(exc))
    headers = {"Retry-After": "1"} if error.retryable else None
    return JSONResponse(status_code=error.status_code, content=error.to_dict(), headers=headers)


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    errors = jsonable_encoder(exc.errors()) if isinstance(exc, RequestValidationError) else []
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request", "code": "INVALID_REQUEST", "retryable": False, "detail": errors},
    )


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Server error", "code": "INTERNAL_ERROR", "retryable": False},
    )


EXCEPTION_HANDLERS: Dict[Type[Exception], ExceptionHandler] = {
    SeatBookingError: seat_booking_error_handler,
    RequestValidationError: validation_error_handler,
    Exception: general_500_exception_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
