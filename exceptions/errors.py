"""
Custom exception classes for the application.

Every error carries a stable code, an HTTP status and a details dict.
Routes turn them into the command response format.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "PRODUCT_NOT_MATCHED")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None,
        message: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=message or f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ConflictError(AppError):
    """Conflict with existing resource (409)."""

    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=409,
            details=details
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


class ConfigurationError(AppError):
    """Required setting is missing (500)."""

    def __init__(self, setting: str, message: Optional[str] = None):
        super().__init__(
            code="CONFIGURATION_ERROR",
            message=message or f"{setting.upper()} is not configured",
            status_code=500,
            details={"setting": setting}
        )


# ===================
# MODEL RESPONSE ERRORS
# ===================

class MalformedModelResponseError(AppError):
    """The completion model did not return JSON."""

    def __init__(self, raw_text: str):
        super().__init__(
            code="MALFORMED_MODEL_RESPONSE",
            message=f"Invalid JSON response from model: {raw_text}",
            status_code=502,
            details={"raw_text": raw_text}
        )


class InterpretationSchemaError(AppError):
    """The model returned JSON with missing or mistyped keys."""

    def __init__(self, errors: list[dict], raw_text: str):
        missing = sorted({
            str(err["loc"][0]) for err in errors
            if err.get("loc") and err.get("type") == "missing"
        })
        message = "Model response does not match the expected shape"
        if missing:
            message += f": missing {', '.join(missing)}"
        super().__init__(
            code="INVALID_MODEL_RESPONSE",
            message=message,
            status_code=502,
            details={"errors": errors, "raw_text": raw_text}
        )


# ===================
# PRODUCT ERRORS
# ===================

class ProductNotMatchedError(NotFoundError):
    """Model named a product that is not in the snapshot."""

    def __init__(self, product_title: str):
        super().__init__(
            resource="Product",
            identifier=product_title,
            code="PRODUCT_NOT_MATCHED",
            message=f"Product not found: {product_title}"
        )
        self.product_title = product_title


class StaleSnapshotError(ConflictError):
    """Snapshot no longer agrees with the live catalog."""

    def __init__(self, product_id: str, expected_title: str, current_title: Optional[str]):
        super().__init__(
            code="STALE_SNAPSHOT",
            message="Product changed since the page was loaded; reload and try again",
            details={
                "product_id": product_id,
                "expected_title": expected_title,
                "current_title": current_title
            }
        )


# ===================
# SHOPIFY ERRORS
# ===================

class ShopifyAPIError(ExternalServiceError):
    """Shopify Admin API transport or GraphQL error."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            service="shopify",
            message=message,
            details=details
        )


class ShopifyUserError(ValidationError):
    """Shopify rejected the mutation input (userErrors)."""

    def __init__(self, user_errors: list[dict]):
        messages = "; ".join(str(err.get("message")) for err in user_errors)
        super().__init__(
            code="SHOPIFY_USER_ERROR",
            message=f"Shopify rejected the update: {messages}",
            details={"user_errors": user_errors}
        )
