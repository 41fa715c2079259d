"""
Pydantic models for validation and serialization.
"""

from models.base import BaseSchema
from models.product import (
    Product,
    ProductListResponse,
    UpdatedProductResponse,
)
from models.command import (
    CommandRequest,
    InterpretationResult,
    UpdatePlan,
    CommandErrorResponse,
)

__all__ = [
    "BaseSchema",
    "Product",
    "ProductListResponse",
    "UpdatedProductResponse",
    "CommandRequest",
    "InterpretationResult",
    "UpdatePlan",
    "CommandErrorResponse",
]
