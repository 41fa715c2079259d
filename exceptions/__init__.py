"""
Custom exceptions module.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ConflictError,
    ExternalServiceError,
    ConfigurationError,

    # Model response
    MalformedModelResponseError,
    InterpretationSchemaError,

    # Product
    ProductNotMatchedError,
    StaleSnapshotError,

    # Shopify
    ShopifyAPIError,
    ShopifyUserError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "ExternalServiceError",
    "ConfigurationError",

    # Model response
    "MalformedModelResponseError",
    "InterpretationSchemaError",

    # Product
    "ProductNotMatchedError",
    "StaleSnapshotError",

    # Shopify
    "ShopifyAPIError",
    "ShopifyUserError",
]
