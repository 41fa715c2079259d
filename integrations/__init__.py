"""
External service integrations.
"""

from integrations.shopify import (
    ShopifyAdminClient,
    ShopifySession,
    get_shopify_session,
)

__all__ = [
    "ShopifyAdminClient",
    "ShopifySession",
    "get_shopify_session",
]
