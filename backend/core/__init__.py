"""Core module with logging, errors, middleware, and exception handling."""

from backend.core.errors import (
    AppError,
    ErrorCode,
    ErrorResponse,
    MissingCredentialError,
    TitleGenerationError,
    UnsupportedModelError,
    ValidationError,
)
from backend.core.logging import get_logger, get_request_id, setup_logging
from backend.core.middleware import RequestContextMiddleware, setup_exception_handlers

__all__ = [
    "AppError",
    "ErrorCode",
    "ErrorResponse",
    "MissingCredentialError",
    "TitleGenerationError",
    "UnsupportedModelError",
    "ValidationError",
    "get_logger",
    "get_request_id",
    "setup_logging",
    "RequestContextMiddleware",
    "setup_exception_handlers",
]
