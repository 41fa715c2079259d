"""
Product API routes.

Page-load view model: the catalog snapshot the admin UI renders and later
sends back with each command.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
import structlog

from models.product import ProductListResponse
from services.catalog_service import CatalogService
from routes.dependencies import get_catalog
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    # Unexpected error
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


# ===================
# ROUTES
# ===================

@router.get("", response_model=ProductListResponse)
def list_products(catalog: CatalogService = Depends(get_catalog)):
    """
    Load the catalog snapshot.

    Returns the first products (id, title, descriptionHtml) in server order.
    """
    try:
        products = catalog.list_products()
        return ProductListResponse(products=products)

    except Exception as e:
        return handle_error(e)
