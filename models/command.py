"""
Command and interpretation schemas.
"""

from typing import Optional
from pydantic import Field, field_validator

from models.base import BaseSchema
from models.product import Product


class CommandRequest(BaseSchema):
    """
    A merchant command plus the snapshot it was typed against.

    The snapshot is the one the client received on page load.
    """

    command: str = Field(
        ...,
        min_length=1,
        max_length=2000,
        description="Free-text instruction",
        examples=["Change the snowboard title to 'Extreme Winter Glider'"]
    )
    products: list[Product] = Field(
        default_factory=list,
        description="Catalog snapshot from page load"
    )

    @field_validator("command")
    @classmethod
    def command_not_blank(cls, v: str) -> str:
        """Command must contain something besides whitespace."""
        if not v.strip():
            raise ValueError("command must not be blank")
        return v.strip()


class InterpretationResult(BaseSchema):
    """
    What the completion model decided.

    productTitle names an existing product; the other two are the new values.
    """

    product_title: str = Field(..., min_length=1)
    new_title: str = Field(..., min_length=1)
    new_description: str


class UpdatePlan(BaseSchema):
    """Resolved update: which product and what to write."""

    product_id: str
    product_title: str
    new_title: str
    new_description: str


class CommandErrorResponse(BaseSchema):
    """Failed command response."""

    error: str
    code: str
    stack: Optional[str] = None
