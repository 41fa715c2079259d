"""
Product schemas for the catalog snapshot.
"""

from pydantic import Field

from models.base import BaseSchema


class Product(BaseSchema):
    """
    A catalog product as loaded from Shopify.

    Never persisted; lives for one page view / one submission.
    """

    id: str = Field(
        ...,
        min_length=1,
        description="Shopify product GID",
        examples=["gid://shopify/Product/1"]
    )
    title: str = Field(..., description="Product title")
    description_html: str = Field(
        default="",
        description="Product description (HTML)"
    )


class ProductListResponse(BaseSchema):
    """Page-load view model: the catalog snapshot."""

    products: list[Product]


class UpdatedProductResponse(BaseSchema):
    """Successful command response."""

    updated_product: Product
