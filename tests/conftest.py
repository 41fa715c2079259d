"""
Shared test fixtures.

Shopify and the completion model are replaced by in-memory doubles;
nothing leaves the process.
"""

import sys
from pathlib import Path

# Add backend directory to Python path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

import pytest
from types import SimpleNamespace
from unittest.mock import MagicMock
from typing import Generator

from tests.factories import ProductFactory

# ===================
# FAKE SHOPIFY CLIENT
# ===================

class FakeShopifyClient:
    """
    In-memory stand-in for ShopifyAdminClient.

    Answers the products query, the product-by-id query and the
    productUpdate mutation from a list of product dicts. Records every call.
    """

    def __init__(self, products: list = None, user_errors: list = None):
        self.products = [dict(p) for p in products or []]
        self.user_errors = user_errors or []
        self.calls = []

    def set_products(self, products: list):
        self.products = [dict(p) for p in products]

    @property
    def mutations(self) -> list:
        """Variables of every productUpdate call."""
        return [variables for query, variables in self.calls if "productUpdate" in query]

    def _find(self, product_id: str):
        for product in self.products:
            if product["id"] == product_id:
                return product
        return None

    def graphql(self, query: str, variables: dict = None) -> dict:
        variables = variables or {}
        self.calls.append((query, variables))

        if "productUpdate" in query:
            if self.user_errors:
                return {"productUpdate": {"product": None, "userErrors": self.user_errors}}
            data = variables["input"]
            product = self._find(data["id"])
            if product is None:
                return {"productUpdate": {
                    "product": None,
                    "userErrors": [{"field": ["id"], "message": "Product does not exist"}]
                }}
            product["title"] = data["title"]
            product["descriptionHtml"] = data["descriptionHtml"]
            return {"productUpdate": {"product": dict(product), "userErrors": []}}

        if "product(id" in query:
            product = self._find(variables["id"])
            return {"product": dict(product) if product else None}

        first = variables.get("first", len(self.products))
        return {"products": {"edges": [{"node": dict(p)} for p in self.products[:first]]}}


# ===================
# FAKE COMPLETION MODEL
# ===================

def make_llm_client(reply_text: str = None, error: Exception = None) -> MagicMock:
    """
    Build a mock Anthropic client.

    Usage:
        client = make_llm_client('{"productTitle": "Snowboard", ...}')
        client = make_llm_client(error=anthropic.APIConnectionError(...))
    """
    client = MagicMock()
    if error is not None:
        client.messages.create.side_effect = error
    else:
        client.messages.create.return_value = SimpleNamespace(
            content=[SimpleNamespace(type="text", text=reply_text)]
        )
    return client


# ===================
# FIXTURES
# ===================

@pytest.fixture
def sample_products_list() -> list:
    """Snapshot as the admin UI would send it back."""
    return [
        ProductFactory.create(id="gid://shopify/Product/1", title="Snowboard"),
        ProductFactory.create(id="gid://shopify/Product/2", title="Ski Wax",
                              description_html="<p>Fast wax</p>"),
        ProductFactory.create(id="gid://shopify/Product/3", title="Gift Card",
                              description_html="<p>Give the gift of snow</p>"),
    ]


@pytest.fixture
def fake_shopify(sample_products_list) -> FakeShopifyClient:
    """Fake store holding sample_products_list."""
    return FakeShopifyClient(sample_products_list)


@pytest.fixture
def snowboard_reply() -> str:
    return (
        '{"productTitle": "Snowboard", '
        '"newTitle": "Extreme Winter Glider", '
        '"newDescription": "<p>Carve fresh powder all season.</p>"}'
    )


# ===================
# API TEST CLIENT
# ===================

@pytest.fixture
def test_client():
    """
    Create FastAPI test client.

    Usage:
        def test_endpoint(test_client):
            response = test_client.get("/health")
            assert response.status_code == 200
    """
    from fastapi.testclient import TestClient
    from main import app

    return TestClient(app)


@pytest.fixture
def api(fake_shopify) -> Generator:
    """
    Test client with Shopify replaced by fake_shopify.

    Set the model reply with api.set_llm(client).

    Usage:
        def test_endpoint(api, fake_shopify):
            api.set_llm(make_llm_client('{...}'))
            response = api.client.post("/api/commands", data={...})
    """
    from fastapi.testclient import TestClient
    from main import app
    from routes.dependencies import get_shopify_client
    from services.command_interpreter_service import (
        CommandInterpreterService,
        get_command_interpreter_service,
    )

    harness = SimpleNamespace(client=TestClient(app), llm=make_llm_client("{}"))

    def set_llm(llm):
        harness.llm = llm

    harness.set_llm = set_llm

    app.dependency_overrides[get_shopify_client] = lambda: fake_shopify
    app.dependency_overrides[get_command_interpreter_service] = (
        lambda: CommandInterpreterService(client=harness.llm)
    )
    try:
        yield harness
    finally:
        app.dependency_overrides.clear()
