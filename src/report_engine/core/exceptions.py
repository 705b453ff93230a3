"""Custom exception classes and error handling."""

from typing import Any

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> dict[str, Any]:
        """Convert to API error response format."""
        response = {
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            response["details"] = self.details
        return response


class ContentValidationError(AppException):
    """A content record does not match the expected shape."""

    def __init__(self, message: str, shortcode: str | None = None, kind: str | None = None):
        details: dict[str, Any] = {}
        if shortcode:
            details["shortcode"] = shortcode
        if kind:
            details["kind"] = kind
        super().__init__(
            message=message,
            code="CONTENT_VALIDATION_ERROR",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details=details,
        )


class UnsupportedVisualError(AppException):
    """No visualizer is registered for a chart or table type."""

    def __init__(self, family: str, visual_type: str):
        super().__init__(
            message=f"Unsupported {family} type: {visual_type}",
            code="UNSUPPORTED_VISUAL",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            details={"family": family, "type": visual_type},
        )


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle AppException and return JSON response."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle FastAPI HTTPException and return consistent JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "code": "HTTP_ERROR",
            "message": exc.detail,
        },
    )
