"""
Catalog service: reads the product snapshot and writes title/description updates.

All calls go through the Shopify Admin GraphQL client. Errors propagate
unmodified; there is no retry and no partial-success handling.
"""

from typing import Optional
import structlog

from config import settings
from integrations.shopify import ShopifyAdminClient
from models.product import Product
from exceptions import ShopifyAPIError, ShopifyUserError

logger = structlog.get_logger(__name__)


PRODUCTS_QUERY = """
query products($first: Int!) {
  products(first: $first) {
    edges {
      node {
        id
        title
        descriptionHtml
      }
    }
  }
}
"""

PRODUCT_QUERY = """
query product($id: ID!) {
  product(id: $id) {
    id
    title
    descriptionHtml
  }
}
"""

PRODUCT_UPDATE_MUTATION = """
mutation updateProduct($input: ProductInput!) {
  productUpdate(input: $input) {
    product {
      id
      title
      descriptionHtml
    }
    userErrors {
      field
      message
    }
  }
}
"""


class CatalogService:
    """
    Product catalog access for one store session.
    """

    def __init__(self, client: ShopifyAdminClient):
        self.client = client

    # ===================
    # READ OPERATIONS
    # ===================

    def list_products(self, limit: Optional[int] = None) -> list[Product]:
        """
        Get the first products of the catalog.

        Args:
            limit: How many products to load (defaults to catalog_page_size)

        Returns:
            Products in server order
        """
        first = limit or settings.catalog_page_size
        logger.info("loading_products", first=first)

        data = self.client.graphql(PRODUCTS_QUERY, {"first": first})

        try:
            edges = data["products"]["edges"]
            products = [Product(**edge["node"]) for edge in edges]
        except (KeyError, TypeError) as e:
            logger.error("products_response_invalid", error=str(e))
            raise ShopifyAPIError("Unexpected products response shape") from e

        logger.info("products_loaded", count=len(products))
        return products

    def get_product(self, product_id: str) -> Optional[Product]:
        """
        Get one product by GID.

        Returns:
            Product, or None if it no longer exists
        """
        logger.debug("loading_product", product_id=product_id)

        data = self.client.graphql(PRODUCT_QUERY, {"id": product_id})
        node = data.get("product")
        if not node:
            return None
        return Product(**node)

    # ===================
    # WRITE OPERATIONS
    # ===================

    def update_product(self, product_id: str, title: str, description_html: str) -> Product:
        """
        Set title and description on a product in one mutation.

        Args:
            product_id: Product GID
            title: New title
            description_html: New description, treated as HTML

        Returns:
            Post-update view of the product

        Raises:
            ShopifyUserError: Shopify rejected the input
            ShopifyAPIError: Transport or GraphQL failure
        """
        logger.info(
            "updating_product",
            product_id=product_id,
            title=title,
            description_length=len(description_html)
        )

        data = self.client.graphql(
            PRODUCT_UPDATE_MUTATION,
            {
                "input": {
                    "id": product_id,
                    "title": title,
                    "descriptionHtml": description_html,
                }
            }
        )

        result = data.get("productUpdate") or {}
        user_errors = result.get("userErrors") or []
        if user_errors:
            logger.warning("product_update_rejected", product_id=product_id, user_errors=user_errors)
            raise ShopifyUserError(user_errors)

        node = result.get("product")
        if not node:
            raise ShopifyAPIError(
                "Shopify returned no product for the update",
                details={"product_id": product_id}
            )

        product = Product(**node)
        logger.info("product_updated", product_id=product.id, title=product.title)
        return product
