"""
Business logic services.

Each service handles one stage of the command pipeline.
"""

from services.catalog_service import CatalogService
from services.command_interpreter_service import (
    CommandInterpreterService,
    get_command_interpreter_service,
)
from services.product_matcher_service import (
    find_product,
    build_update_plan,
    titles_match,
)
from services.command_service import CommandService

__all__ = [
    "CatalogService",
    "CommandInterpreterService",
    "get_command_interpreter_service",
    "find_product",
    "build_update_plan",
    "titles_match",
    "CommandService",
]
