"""
API route modules.

Each module defines routes for one area.
"""

from routes.products import router as products_router
from routes.commands import router as commands_router

__all__ = [
    "products_router",
    "commands_router",
]
