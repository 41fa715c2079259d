"""
Base schemas for all models.

Wire format is camelCase (Shopify GraphQL and the admin UI both use it);
Python attributes stay snake_case.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """
    Base for all schemas.

    Features:
        - camelCase aliases, populated by either name
        - Validate on attribute assignment
        - Allow ORM objects (from_attributes)
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        validate_assignment=True
    )

    def to_wire(self) -> dict:
        """Dump using camelCase keys."""
        return self.model_dump(by_alias=True)
