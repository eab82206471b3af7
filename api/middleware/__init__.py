"""
API Middleware Package

Error handling and request logging middleware.
"""

from api.middleware.error_handler import (
    setup_error_handlers,
    APIError,
    NotFoundError,
    MissingInputError,
    ReferenceNotFoundError,
    ConflictError,
    MailTransportError,
)
from api.middleware.logging import LoggingMiddleware

__all__ = [
    "setup_error_handlers",
    "APIError",
    "NotFoundError",
    "MissingInputError",
    "ReferenceNotFoundError",
    "ConflictError",
    "MailTransportError",
    "LoggingMiddleware",
]
