"""
Product matcher: resolves the model's product title against the snapshot.

Exact, case-insensitive title equality. First match in snapshot order wins.
No fuzzy matching: a paraphrased title fails instead of updating the wrong product.
"""

from typing import Optional
import structlog

from models.command import InterpretationResult, UpdatePlan
from models.product import Product
from exceptions import ProductNotMatchedError

logger = structlog.get_logger(__name__)


def titles_match(a: Optional[str], b: Optional[str]) -> bool:
    """Case-insensitive exact equality."""
    if a is None or b is None:
        return False
    return a.lower() == b.lower()


def find_product(product_title: str, products: list[Product]) -> Product:
    """
    Find the product whose title equals product_title, ignoring case.

    Raises:
        ProductNotMatchedError: No product has that title
    """
    for product in products:
        if titles_match(product.title, product_title):
            logger.info("product_matched", product_id=product.id, title=product.title)
            return product

    logger.warning(
        "product_not_matched",
        product_title=product_title,
        snapshot_titles=[p.title for p in products]
    )
    raise ProductNotMatchedError(product_title)


def build_update_plan(result: InterpretationResult, products: list[Product]) -> UpdatePlan:
    """Resolve an interpretation into a concrete update."""
    product = find_product(result.product_title, products)
    return UpdatePlan(
        product_id=product.id,
        product_title=product.title,
        new_title=result.new_title,
        new_description=result.new_description
    )
