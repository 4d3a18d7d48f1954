"""API middleware."""

from agrostock.api.middleware.error_handler import ErrorHandlerMiddleware
from agrostock.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
