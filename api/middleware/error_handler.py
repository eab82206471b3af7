"""
Error Handler Middleware

Global error handling for consistent API responses.
"""

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from agents.base import UpstreamServiceFailure

logger = logging.getLogger("procurement.api.errors")


class APIError(Exception):
    """Base API error with status code and error code."""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR"
    ):
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(message)


class NotFoundError(APIError):
    """Resource not found error."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, 404, "NOT_FOUND")


class MissingInputError(APIError):
    """A required identifier or text field was not supplied."""

    def __init__(self, message: str = "Required input missing"):
        super().__init__(message, 400, "MISSING_REQUIRED_INPUT")


class ReferenceNotFoundError(APIError):
    """A referenced RFP or vendor does not exist."""

    def __init__(self, message: str = "Referenced entity not found"):
        super().__init__(message, 400, "REFERENCE_NOT_FOUND")


class ConflictError(APIError):
    """Unique constraint violation."""

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message, 409, "CONFLICT")


class MailTransportError(APIError):
    """SMTP/IMAP transport is unavailable or misconfigured."""

    def __init__(self, message: str = "Mail transport failed"):
        super().__init__(message, 502, "MAIL_TRANSPORT_FAILURE")


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": code,
                "message": message
            }
        }
    )


def setup_error_handlers(app: FastAPI):
    """
    Set up global error handlers for the application.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        """Handle custom API errors."""
        logger.warning(f"API Error: {exc.error_code} - {exc.message}")
        return _error_response(exc.status_code, exc.error_code, exc.message)

    @app.exception_handler(UpstreamServiceFailure)
    async def upstream_error_handler(request: Request, exc: UpstreamServiceFailure):
        """Completion service failures are not retried; report them as a bad gateway."""
        logger.error(f"Upstream failure on {request.url.path}: {exc}")
        return _error_response(
            status.HTTP_502_BAD_GATEWAY,
            "UPSTREAM_SERVICE_FAILURE",
            str(exc)
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions."""
        return _error_response(exc.status_code, "HTTP_ERROR", exc.detail)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle request validation errors."""
        errors = []
        for error in exc.errors():
            errors.append({
                "field": ".".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
                "type": error["type"]
            })

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "error": {
                    "code": "VALIDATION_ERROR",
                    "message": "Request validation failed",
                    "details": errors
                }
            }
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions."""
        logger.error(f"Unhandled exception: {str(exc)}")
        logger.error(traceback.format_exc())

        # Don't expose internal errors in production
        from config.settings import settings

        if settings.api_env == "development":
            message = str(exc)
        else:
            message = "An internal error occurred"

        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "INTERNAL_ERROR",
            message
        )
