"""
End-to-end tests through the HTTP boundary: page load, then command submission.

Shopify and the completion model are faked; everything in between is real.

Run: pytest tests/test_end_to_end_commands.py -v
"""

import json
import pytest
from unittest.mock import patch

from tests.conftest import make_llm_client


def submit(api, command: str, products) -> "Response":
    products_field = products if isinstance(products, str) else json.dumps(products)
    return api.client.post("/api/commands", data={"command": command, "products": products_field})


class TestPageLoad:
    """GET /api/products"""

    def test_returns_snapshot(self, api):
        response = api.client.get("/api/products")

        assert response.status_code == 200
        products = response.json()["products"]
        assert [p["title"] for p in products] == ["Snowboard", "Ski Wax", "Gift Card"]
        assert set(products[0]) == {"id", "title", "descriptionHtml"}

    def test_shopify_failure_returns_error(self, api, fake_shopify):
        from exceptions import ShopifyAPIError

        with patch.object(fake_shopify, "graphql", side_effect=ShopifyAPIError("Shopify request failed: 401")):
            response = api.client.get("/api/products")

        assert response.status_code == 503
        assert response.json()["error"]["code"] == "SHOPIFY_ERROR"

    def test_unconfigured_store_returns_configuration_error(self, test_client):
        """Without a session the dependency fails before the route runs."""
        with patch("integrations.shopify.settings") as mock_settings:
            mock_settings.shopify_shop_domain = None
            mock_settings.shopify_access_token = None
            response = test_client.get("/api/products")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "CONFIGURATION_ERROR"


class TestCommandScenarios:
    """POST /api/commands"""

    def test_rename_snowboard(self, api, fake_shopify, sample_products_list, snowboard_reply):
        """Scenario 1: matched product is updated and returned."""
        api.set_llm(make_llm_client(snowboard_reply))
        snapshot = api.client.get("/api/products").json()["products"]

        response = submit(api, "rename snowboard to Extreme Winter Glider", snapshot)

        assert response.status_code == 200
        updated = response.json()["updatedProduct"]
        assert updated == {
            "id": "gid://shopify/Product/1",
            "title": "Extreme Winter Glider",
            "descriptionHtml": "<p>Carve fresh powder all season.</p>",
        }
        assert len(fake_shopify.mutations) == 1

    def test_typo_in_model_reply(self, api, fake_shopify, sample_products_list):
        """Scenario 2: unresolved reference names the title; no mutation."""
        api.set_llm(make_llm_client(json.dumps({
            "productTitle": "Snowbord",
            "newTitle": "Extreme Winter Glider",
            "newDescription": "<p>...</p>"
        })))

        response = submit(api, "rename snowbord", sample_products_list)

        assert response.status_code == 404
        body = response.json()
        assert body["code"] == "PRODUCT_NOT_MATCHED"
        assert "Snowbord" in body["error"]
        assert fake_shopify.mutations == []

    def test_prose_model_reply(self, api, fake_shopify, sample_products_list):
        """Scenario 3: malformed response keeps the prose; no mutation."""
        prose = "The snowboard could be renamed to Extreme Winter Glider."
        api.set_llm(make_llm_client(prose))

        response = submit(api, "rename snowboard", sample_products_list)

        assert response.status_code == 502
        body = response.json()
        assert body["code"] == "MALFORMED_MODEL_RESPONSE"
        assert prose in body["error"]
        assert fake_shopify.mutations == []

    def test_resubmission_is_not_deduplicated(self, api, fake_shopify, sample_products_list):
        """Same command, same reply, unchanged snapshot: two mutations."""
        reply = json.dumps({
            "productTitle": "Gift Card",
            "newTitle": "Gift Card",
            "newDescription": "<p>The perfect gift for riders.</p>"
        })
        api.set_llm(make_llm_client(reply))

        first = submit(api, "improve the gift card description", sample_products_list)
        second = submit(api, "improve the gift card description", sample_products_list)

        assert first.status_code == second.status_code == 200
        assert first.json() == second.json()
        assert len(fake_shopify.mutations) == 2

    def test_rename_snowboard_twice_mutates_twice(self, api, fake_shopify, sample_products_list, snowboard_reply):
        """Scenario 1 resubmitted with the page-load snapshot: both succeed."""
        api.set_llm(make_llm_client(snowboard_reply))

        first = submit(api, "rename snowboard to Extreme Winter Glider", sample_products_list)
        second = submit(api, "rename snowboard to Extreme Winter Glider", sample_products_list)

        assert first.status_code == second.status_code == 200
        assert second.json()["updatedProduct"]["title"] == "Extreme Winter Glider"
        assert len(fake_shopify.mutations) == 2

    def test_shopify_user_errors_are_reported(self, api, fake_shopify, sample_products_list, snowboard_reply):
        fake_shopify.user_errors = [{"field": ["title"], "message": "Title is too long"}]
        api.set_llm(make_llm_client(snowboard_reply))

        response = submit(api, "rename snowboard", sample_products_list)

        assert response.status_code == 422
        assert response.json()["code"] == "SHOPIFY_USER_ERROR"
        assert "Title is too long" in response.json()["error"]


class TestCommandInput:
    """Form validation at the boundary."""

    def test_products_not_json(self, api, fake_shopify):
        response = submit(api, "rename snowboard", "not json")

        assert response.status_code == 422
        assert response.json()["code"] == "INVALID_PRODUCTS"
        api.llm.messages.create.assert_not_called()

    def test_products_not_array(self, api):
        response = submit(api, "rename snowboard", json.dumps({"title": "Snowboard"}))

        assert response.status_code == 422
        assert response.json()["code"] == "INVALID_PRODUCTS"

    def test_blank_command(self, api, sample_products_list):
        response = submit(api, "   ", sample_products_list)

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION_ERROR"
        api.llm.messages.create.assert_not_called()

    def test_missing_command_field(self, api):
        response = api.client.post("/api/commands", data={"products": "[]"})

        assert response.status_code == 422

    def test_unconfigured_store_keeps_command_error_shape(self, test_client, sample_products_list):
        """A failing dependency still answers with {error, code, stack}."""
        with patch("integrations.shopify.settings") as mock_settings:
            mock_settings.shopify_shop_domain = None
            mock_settings.shopify_access_token = None
            response = test_client.post(
                "/api/commands",
                data={"command": "rename snowboard", "products": json.dumps(sample_products_list)}
            )

        assert response.status_code == 500
        body = response.json()
        assert body["code"] == "CONFIGURATION_ERROR"
        assert isinstance(body["error"], str)
        assert "stack" in body


class TestErrorDiagnostics:
    """The stack block only crosses the boundary in debug mode."""

    @pytest.fixture
    def prose_api(self, api):
        api.set_llm(make_llm_client("not json"))
        return api

    def test_stack_included_in_debug(self, prose_api, sample_products_list):
        with patch("routes.commands.settings") as mock_settings:
            mock_settings.debug = True
            response = submit(prose_api, "rename snowboard", sample_products_list)

        assert response.json()["stack"]
        assert "MalformedModelResponseError" in response.json()["stack"]

    def test_stack_hidden_outside_debug(self, prose_api, sample_products_list):
        with patch("routes.commands.settings") as mock_settings:
            mock_settings.debug = False
            response = submit(prose_api, "rename snowboard", sample_products_list)

        assert response.status_code == 502
        assert response.json()["stack"] is None
        assert response.json()["code"] == "MALFORMED_MODEL_RESPONSE"


class TestHealth:

    def test_health_reports_integrations(self, test_client):
        response = test_client.get("/health")

        assert response.status_code == 200
        assert set(response.json()["integrations"]) == {"llm", "shopify"}
