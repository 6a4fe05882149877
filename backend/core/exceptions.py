"""
API error types and handlers.

Services raise their own exceptions; routers translate them into the
APIError subclasses below so every failure reaches the client with the
same body: detail, error_code, path and optional details.
"""

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse
from typing import Any, Dict, Optional
import logging

logger = logging.getLogger(__name__)


class APIError(HTTPException):
    """Base API error with consistent structure"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code
        self.details = details or {}


class NotFoundError(APIError):
    """Resource not found error"""

    def __init__(
        self,
        detail: str = "Resource not found",
        error_code: str = "NOT_FOUND",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            status.HTTP_404_NOT_FOUND, detail, error_code, details=details
        )


class ValidationError(APIError):
    """Input rejected before any side effect"""

    def __init__(
        self,
        detail: str = "Validation failed",
        error_code: str = "VALIDATION_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            status.HTTP_400_BAD_REQUEST, detail, error_code, details=details
        )


class ConflictError(APIError):
    """Request conflicts with an operation already in progress"""

    def __init__(
        self,
        detail: str = "Resource conflict",
        error_code: str = "CONFLICT",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            status.HTTP_409_CONFLICT, detail, error_code, details=details
        )


class UpstreamServiceError(APIError):
    """A backing service failed or returned an unusable response"""

    def __init__(
        self,
        detail: str = "Upstream service failed",
        error_code: str = "UPSTREAM_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            status.HTTP_502_BAD_GATEWAY, detail, error_code, details=details
        )


def error_response(
    request: Request,
    status_code: int,
    detail: str,
    error_code: Optional[str],
    details: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, Any]] = None,
) -> JSONResponse:
    content = {
        "detail": detail,
        "error_code": error_code,
        "path": str(request.url.path),
    }
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
    """Convert ValueError to consistent API response"""
    logger.warning(f"ValueError at {request.url.path}: {str(exc)}")
    return error_response(
        request, status.HTTP_400_BAD_REQUEST, str(exc), "VALIDATION_ERROR"
    )


async def handle_api_error(request: Request, exc: APIError) -> JSONResponse:
    """Handle custom API errors"""
    if exc.status_code >= 500:
        logger.error(f"{exc.error_code} at {request.url.path}: {exc.detail}")
    return error_response(
        request, exc.status_code, exc.detail, exc.error_code, exc.details, exc.headers
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app"""
    app.add_exception_handler(ValueError, handle_value_error)
    app.add_exception_handler(APIError, handle_api_error)
