# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every failure is rendered as the same envelope:
#   {"success": false, "message": "...", "error": "..."}
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class MarketplaceException(Exception):
    """
    Base exception for the marketplace API.

    All custom exceptions inherit from this class. `error` carries the
    underlying cause (gateway message, storage error) when there is one.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error: str | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error = error
        self.headers = headers

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result: dict[str, Any] = {
            "success": False,
            "message": self.message,
        }
        if self.error:
            result["error"] = self.error
        return result


# =============================================================================
# Validation Exceptions
# =============================================================================

class MissingFieldError(MarketplaceException):
    """Raised when a required request field is absent or blank."""

    def __init__(self, field: str, message: str | None = None):
        super().__init__(
            message=message or f"{field} is required",
            status_code=400,
        )
        self.field = field


class InvalidFieldError(MarketplaceException):
    """Raised when a field is present but cannot be used as given."""

    def __init__(self, field: str, reason: str):
        super().__init__(
            message=f"{field} is invalid: {reason}",
            status_code=400,
        )
        self.field = field


class InvalidFileTypeError(MarketplaceException):
    """Raised when uploaded file type is not allowed."""

    def __init__(self, filename: str, allowed: list[str]):
        super().__init__(
            message=f"Invalid file type: {filename}",
            status_code=400,
            error=f"Only these file types are supported: {', '.join(allowed)}",
        )


class FileTooLargeError(MarketplaceException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            status_code=413,
        )


# =============================================================================
# Resource Exceptions
# =============================================================================

class BrandNotFoundError(MarketplaceException):
    """Raised when a brand id or slug doesn't resolve."""

    def __init__(self, key: str):
        super().__init__(message="Brand not found", status_code=404)
        self.key = key


class CarNotFoundError(MarketplaceException):
    """Raised when a car id or slug doesn't resolve."""

    def __init__(self, key: str):
        super().__init__(message="Car not found", status_code=404)
        self.key = key


class DuplicateBrandError(MarketplaceException):
    """
    Raised when a brand with the same name already exists.

    Reported with HTTP 200 and success=false, which is what existing
    clients of this API check for.
    """

    def __init__(self, name: str):
        super().__init__(message="Brand already exists", status_code=200)
        self.name = name


# =============================================================================
# Upstream Exceptions
# =============================================================================

class StorageUploadError(MarketplaceException):
    """Raised when an image cannot be written to the blob store."""

    def __init__(self, error: str):
        super().__init__(
            message="Failed to upload image",
            status_code=500,
            error=error,
        )


class PaymentGatewayError(MarketplaceException):
    """Raised when Braintree rejects a request or cannot be reached."""

    def __init__(self, message: str, error: str | None = None):
        super().__init__(message=message, status_code=500, error=error)


# =============================================================================
# Auth Exceptions
# =============================================================================

class AuthenticationError(MarketplaceException):
    """Raised when a bearer token is missing, invalid or expired."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(
            message=message,
            status_code=401,
            headers={"WWW-Authenticate": "Bearer"},
        )


class AdminRequiredError(MarketplaceException):
    """Raised when an authenticated user is not an admin."""

    def __init__(self):
        super().__init__(
            message="Unauthorized access, only admin can access",
            status_code=403,
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def marketplace_exception_handler(
    request: Request,
    exc: MarketplaceException
) -> JSONResponse:
    """Convert MarketplaceException to the JSON envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=exc.headers,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors raised by FastAPI.

    Reports the first offending field the same way the services report a
    missing one.
    """
    errors = exc.errors()
    message = "Validation error"
    if errors:
        loc = [str(part) for part in errors[0].get("loc", ()) if part not in ("body", "query", "path")]
        if loc:
            message = f"{'.'.join(loc)}: {errors[0].get('msg', 'invalid value')}"
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "message": message,
            "error": str(errors),
        }
    )
