"""API middleware."""

from outletstock.api.middleware.error_handler import ErrorHandlerMiddleware
from outletstock.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
