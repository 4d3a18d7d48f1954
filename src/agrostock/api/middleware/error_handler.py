"""
Error responses.

Every error leaves the API as an ErrorResponse body: a stable error_code, a
message, a recovery hint and the request path. Domain errors carry their
own code; HTTP and validation errors get one derived from the status.
"""

import traceback
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from agrostock.application.dto.responses import ErrorResponse
from agrostock.config import get_logger
from agrostock.core.exceptions import (
    AgroStockError,
    AlertNotFoundError,
    ConfigurationError,
    InsufficientStockError,
    InventoryItemNotFoundError,
    StorageError,
    TransactionFailedError,
    ValidationError,
)

logger = get_logger(__name__)

# First match wins, so subclasses precede their bases
EXCEPTION_STATUS_MAP: list[tuple[type[Exception], int]] = [
    (InventoryItemNotFoundError, status.HTTP_404_NOT_FOUND),
    (AlertNotFoundError, status.HTTP_404_NOT_FOUND),
    (InsufficientStockError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (TransactionFailedError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (StorageError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (ConfigurationError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (ValueError, status.HTTP_400_BAD_REQUEST),
]

HINT_MAP: dict[str, str] = {
    "INVENTORY_ITEM_NOT_FOUND": "List tracked items with GET /api/inventory, or create one first.",
    "ALERT_NOT_FOUND": "List alerts with GET /api/inventory/alerts?unread_only=false.",
    "INSUFFICIENT_STOCK": "Lower the amount or record a stock addition first.",
    "TRANSACTION_FAILED": "Nothing was changed. Retry the request.",
    "VALIDATION_ERROR": "Fix the fields listed in detail and resend.",
    "MISSING_USER": "Send the caller's id in the X-User-Id header.",
}

STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    401: "Identify the caller.",
    404: "Check the id in the URL.",
    405: "Check the HTTP method for this path.",
    409: "The request conflicts with current stock.",
    500: "Unexpected server error. See server logs.",
    503: "Temporarily unavailable. Retry later.",
}

STATUS_CODES: dict[int, str] = {
    400: "BAD_REQUEST",
    401: "MISSING_USER",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    422: "VALIDATION_ERROR",
}


def error_json(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    detail: str | None = None,
) -> JSONResponse:
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=HINT_MAP.get(error_code) or STATUS_HINTS.get(status_code),
        detail=detail,
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def build_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Map a raised exception to its status and error body."""
    status_code = next(
        (code for exc_type, code in EXCEPTION_STATUS_MAP if isinstance(exc, exc_type)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    if isinstance(exc, AgroStockError):
        error_code = exc.code
    elif status_code == status.HTTP_400_BAD_REQUEST:
        error_code = "BAD_REQUEST"
    else:
        error_code = "INTERNAL_ERROR"

    log = logger.error if status_code >= 500 else logger.warning
    log(
        "request_error",
        path=request.url.path,
        status=status_code,
        error_code=error_code,
        error=str(exc),
        traceback=traceback.format_exc() if status_code >= 500 else None,
    )

    # Internal details stay in the logs
    message = str(exc)
    if status_code >= 500 and not isinstance(exc, AgroStockError):
        message = "Internal server error"
    return error_json(request, status_code, error_code, message)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turns exceptions no handler claimed into ErrorResponse bodies."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return build_error_response(request, e)


def setup_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AgroStockError)
    async def domain_error(request: Request, exc: AgroStockError) -> JSONResponse:
        return build_error_response(request, exc)

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        problems = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        return error_json(
            request,
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "VALIDATION_ERROR",
            "Request validation failed",
            detail="; ".join(problems),
        )

    @app.exception_handler(HTTPException)
    async def http_error(request: Request, exc: HTTPException) -> JSONResponse:
        return error_json(
            request,
            exc.status_code,
            STATUS_CODES.get(exc.status_code, "HTTP_ERROR"),
            str(exc.detail or "Request failed"),
        )
