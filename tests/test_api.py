"""
Tests for the storefront HTTP API
"""

from unittest.mock import MagicMock
from urllib.parse import quote

from fastapi.testclient import TestClient

from server.app import app
from server.dependencies import (
    get_catalog_fetcher,
    get_form_store,
    get_order_submitter,
    get_places_loader,
)
from storefront.address import PageHead, PlacesScriptLoader
from storefront.cart import FormStore
from storefront.catalog import normalize_product
from storefront.errors import TransportError
from storefront.shared.schemas import OrderResult

from helpers import product_node

VARIANT_ID = "gid://shopify/ProductVariant/11"
SCRIPT_URL = "https://maps.googleapis.com/maps/api/js?key=maps-key&libraries=places&loading=async"


class TestStorefrontApi:

    def setup_method(self):
        self.products = [
            normalize_product(product_node(variants=[(VARIANT_ID, "Default Title", "25.00", 3)])),
            normalize_product(product_node(
                product_id="gid://shopify/Product/2",
                title="Sold Out Tee",
                variants=[("gid://shopify/ProductVariant/21", "M", "20.00", 0)]
            )),
        ]
        self.store = FormStore()
        self.loader = PlacesScriptLoader(SCRIPT_URL, head=PageHead())
        self.submitter = MagicMock(return_value=OrderResult(success=True, data={"id": "gid://shopify/Order/1"}))
        self.fetcher = MagicMock(return_value=self.products)

        app.dependency_overrides[get_form_store] = lambda: self.store
        app.dependency_overrides[get_places_loader] = lambda: self.loader
        app.dependency_overrides[get_order_submitter] = lambda: self.submitter
        app.dependency_overrides[get_catalog_fetcher] = lambda: self.fetcher
        self.client = TestClient(app)

    def teardown_method(self):
        app.dependency_overrides.clear()

    def start_session(self):
        session_id = self.client.get("/api/session").json()["session_id"]
        self.client.get("/api/products", params={"session_id": session_id})
        return session_id

    def fill_fields(self, session_id):
        response = self.client.put(f"/api/form/{session_id}/fields", json={
            "first_name": "Ana",
            "last_name": "García",
            "email": "ana@example.com",
            "phone": "+34600000000",
            "address1": "Calle Mayor 1",
            "city": "Madrid",
            "zip": "28013",
        })
        assert response.status_code == 200

    def test_products_only_in_stock(self):
        response = self.client.get("/api/products")

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 1
        assert data["products"][0]["image"]["src"] == "https://cdn.shopify.com/tote.jpg"

    def test_products_search(self):
        assert self.client.get("/api/products", params={"search": "cap"}).json()["count"] == 0

    def test_catalog_transport_error_is_502(self):
        self.fetcher.side_effect = TransportError("HTTP error! status: 503", status_code=503)

        response = self.client.get("/api/products")

        assert response.status_code == 502

    def test_cart_stock_ceiling_is_409(self):
        session_id = self.start_session()
        url = f"/api/form/{session_id}/cart"

        first = self.client.post(url, json={"product_id": "gid://shopify/Product/1", "variant_id": VARIANT_ID, "quantity": 2})
        assert first.status_code == 200
        assert first.json()["item_count"] == 2
        assert first.json()["total"] == "54.00"

        second = self.client.post(url, json={"product_id": "gid://shopify/Product/1", "variant_id": VARIANT_ID, "quantity": 2})
        assert second.status_code == 409
        assert self.client.get(f"/api/form/{session_id}").json()["item_count"] == 2

    def test_set_quantity_and_remove(self):
        session_id = self.start_session()
        self.client.post(f"/api/form/{session_id}/cart", json={"product_id": "gid://shopify/Product/1", "variant_id": VARIANT_ID})

        updated = self.client.put(f"/api/form/{session_id}/cart/{quote(VARIANT_ID, safe='')}", json={"quantity": 3})
        assert updated.json()["item_count"] == 3

        removed = self.client.delete(f"/api/form/{session_id}/cart/{quote(VARIANT_ID, safe='')}")
        assert removed.json()["lines"] == []

    def test_submit_incomplete_form_is_422(self):
        session_id = self.start_session()

        response = self.client.post(f"/api/form/{session_id}/submit")

        assert response.status_code == 422
        self.submitter.assert_not_called()

    def test_submit_success(self):
        session_id = self.start_session()
        self.fill_fields(session_id)
        self.client.post(f"/api/form/{session_id}/cart", json={"product_id": "gid://shopify/Product/1", "variant_id": VARIANT_ID, "quantity": 2})

        response = self.client.post(f"/api/form/{session_id}/submit")

        assert response.status_code == 200
        data = response.json()
        assert data["result"]["success"] is True
        assert data["form"]["status"] == "success"
        order_input = self.submitter.call_args.args[0]
        assert order_input.line_items[0].quantity == 2

    def test_submit_failure_rendered_inline(self):
        self.submitter.return_value = OrderResult(success=False, error=[{"message": "x"}])
        session_id = self.start_session()
        self.fill_fields(session_id)
        self.client.post(f"/api/form/{session_id}/cart", json={"product_id": "gid://shopify/Product/1", "variant_id": VARIANT_ID})

        response = self.client.post(f"/api/form/{session_id}/submit")

        assert response.status_code == 200
        assert response.json()["form"]["status"] == "error"
        assert response.json()["form"]["error"] == "x"

    def test_submit_applies_fields_sent_with_request(self):
        session_id = self.start_session()
        self.fill_fields(session_id)
        self.client.put(f"/api/form/{session_id}/fields", json={"phone": ""})
        self.client.post(f"/api/form/{session_id}/cart", json={"product_id": "gid://shopify/Product/1", "variant_id": VARIANT_ID})

        response = self.client.post(f"/api/form/{session_id}/submit", json={"phone": "+34611111111"})

        assert response.status_code == 200
        assert response.json()["result"]["success"] is True
        order_input = self.submitter.call_args.args[0]
        assert order_input.contact.phone == "+34611111111"

    def test_quantity_update_uses_refetched_stock(self):
        session_id = self.start_session()
        self.client.post(f"/api/form/{session_id}/cart", json={"product_id": "gid://shopify/Product/1", "variant_id": VARIANT_ID})
        self.fetcher.return_value = [
            normalize_product(product_node(variants=[(VARIANT_ID, "Default Title", "25.00", 1)]))
        ]
        self.client.get("/api/products", params={"session_id": session_id})

        response = self.client.put(f"/api/form/{session_id}/cart/{quote(VARIANT_ID, safe='')}", json={"quantity": 3})

        assert response.status_code == 409
        assert self.client.get(f"/api/form/{session_id}").json()["item_count"] == 1

    def test_unknown_session_is_404(self):
        assert self.client.get("/api/form/nope").status_code == 404

    def test_unknown_session_cookie_gets_fresh_session(self):
        self.client.cookies.set("session_id", "client-chosen")

        data = self.client.get("/api/session").json()

        assert data["created"] is True
        assert data["session_id"] != "client-chosen"
        assert self.client.get("/api/form/client-chosen").status_code == 404

    def test_known_session_cookie_is_kept(self):
        session_id = self.client.get("/api/session").json()["session_id"]
        self.client.cookies.set("session_id", session_id)

        data = self.client.get("/api/session").json()

        assert data["session_id"] == session_id
        assert data["created"] is False

    def test_parse_place_applies_to_session(self):
        session_id = self.start_session()

        response = self.client.post("/api/address/parse", json={
            "session_id": session_id,
            "place": {"address_components": [
                {"long_name": "Gran Vía", "short_name": "Gran Vía", "types": ["route"]},
                {"long_name": "Madrid", "short_name": "Madrid", "types": ["locality"]},
                {"long_name": "28013", "short_name": "28013", "types": ["postal_code"]},
            ]},
        })

        assert response.json() == {
            "address": {"street": "Gran Vía", "city": "Madrid", "zip": "28013"},
            "applied": True,
        }
        fields = self.client.get(f"/api/form/{session_id}").json()["fields"]
        assert fields["city"] == "Madrid"

    def test_places_load_and_ready(self):
        first = self.client.post("/api/address/load").json()
        self.client.post("/api/address/load")

        assert first["state"] == "ready"
        assert first["options"]["componentRestrictions"] == {"country": "ES"}
        assert len(self.loader.head.scripts) == 1

        assert self.client.post("/api/address/ready").json()["ready"] is True

    def test_index_renders_places_script(self):
        self.loader.mark_ready()

        response = self.client.get("/")

        assert response.status_code == 200
        assert "maps.googleapis.com/maps/api/js" in response.text
        assert "<!-- HEAD_SCRIPTS -->" not in response.text
        assert '"placesReady": true' in response.text

    def test_wait_for_places_times_out_quietly(self):
        response = self.client.get("/api/address/ready", params={"timeout": 0.01})

        assert response.status_code == 200
        assert response.json()["ready"] is False
