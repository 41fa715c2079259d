"""
Shopify Admin GraphQL integration.

Thin authenticated transport: posts a query, returns the `data` block,
raises ShopifyAPIError on transport, HTTP or GraphQL-level errors.
No retries.
"""

from dataclasses import dataclass
from typing import Any, Optional
import requests
import structlog

from config import settings
from exceptions import ConfigurationError, ShopifyAPIError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ShopifySession:
    """Authenticated store session supplied by the host app."""

    shop_domain: str
    access_token: str

    @property
    def shop(self) -> str:
        """Bare shop host without scheme or trailing slash."""
        domain = self.shop_domain.strip()
        for prefix in ("https://", "http://"):
            if domain.startswith(prefix):
                domain = domain[len(prefix):]
        return domain.rstrip("/")


def get_shopify_session() -> ShopifySession:
    """
    Build the store session from settings.

    Raises:
        ConfigurationError: If shop domain or access token is missing
    """
    if not settings.shopify_shop_domain:
        raise ConfigurationError("shopify_shop_domain")
    if not settings.shopify_access_token:
        raise ConfigurationError("shopify_access_token")

    return ShopifySession(
        shop_domain=settings.shopify_shop_domain,
        access_token=settings.shopify_access_token
    )


class ShopifyAdminClient:
    """
    Admin GraphQL client bound to one store session.

    Usage:
        client = ShopifyAdminClient(get_shopify_session())
        data = client.graphql("query { shop { name } }")
    """

    def __init__(
        self,
        session: ShopifySession,
        api_version: Optional[str] = None,
        timeout: Optional[int] = None,
        http: Optional[requests.Session] = None
    ):
        self.session = session
        self.api_version = api_version or settings.shopify_api_version
        self.timeout = timeout or settings.shopify_request_timeout
        self.http = http or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"https://{self.session.shop}/admin/api/{self.api_version}/graphql.json"

    def graphql(self, query: str, variables: Optional[dict[str, Any]] = None) -> dict:
        """
        Execute a GraphQL document.

        Args:
            query: GraphQL query or mutation
            variables: Optional variables

        Returns:
            The response's `data` object

        Raises:
            ShopifyAPIError: Transport failure, non-2xx status, or top-level GraphQL errors
        """
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        headers = {
            "X-Shopify-Access-Token": self.session.access_token,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        try:
            logger.debug("shopify_graphql_request", shop=self.session.shop)
            response = self.http.post(
                self.endpoint,
                json=payload,
                headers=headers,
                timeout=self.timeout
            )
            response.raise_for_status()
            body = response.json()

        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            logger.error("shopify_http_error", shop=self.session.shop, status=status, error=str(e))
            raise ShopifyAPIError(
                f"Shopify request failed: {str(e)}",
                details={"status": status}
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error("shopify_request_failed", shop=self.session.shop, error=str(e))
            raise ShopifyAPIError(f"Shopify request failed: {str(e)}") from e
        except ValueError as e:
            logger.error("shopify_invalid_json", shop=self.session.shop, error=str(e))
            raise ShopifyAPIError("Shopify returned a non-JSON response") from e

        errors = body.get("errors")
        if errors:
            messages = errors if isinstance(errors, str) else "; ".join(
                str(err.get("message", err)) if isinstance(err, dict) else str(err)
                for err in errors
            )
            logger.error("shopify_graphql_errors", shop=self.session.shop, errors=errors)
            raise ShopifyAPIError(
                f"Shopify GraphQL error: {messages}",
                details={"errors": errors}
            )

        data = body.get("data")
        if data is None:
            raise ShopifyAPIError("Shopify response is missing data")

        return data
