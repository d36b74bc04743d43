"""
Tests for the catalog fetcher
"""

import pytest
import requests
from unittest.mock import patch

from storefront.catalog import filter_available_products, get_products, normalize_product
from storefront.config import StorefrontConfig
from storefront.errors import ConfigurationError, GraphQLQueryError, TransportError
from storefront.shopify import ShopifySession

from helpers import SHOP_URL, catalog_body, make_response, product_node


class TestNormalizeProduct:
    """Reshaping raw product nodes"""

    def test_image_src_from_first_image(self):
        node = product_node(images=["https://cdn/a.jpg", "https://cdn/b.jpg"])
        product = normalize_product(node)
        assert product.image.src == "https://cdn/a.jpg"

    def test_image_src_empty_without_images(self):
        product = normalize_product(product_node(images=[]))
        assert product.image.src == ""

    def test_variants_flattened_in_order(self):
        node = product_node(variants=[
            ("gid://shopify/ProductVariant/1", "S", "10.00", 0),
            ("gid://shopify/ProductVariant/2", "M", "12.50", 4),
        ])
        product = normalize_product(node)

        assert [v.title for v in product.variants] == ["S", "M"]
        assert product.variants[1].price == "12.50"
        assert product.variants[1].inventory_quantity == 4
        assert [v.title for v in product.in_stock_variants()] == ["M"]


class TestGetProducts:
    """Fetching the catalog through the Admin GraphQL API"""

    @patch("storefront.shopify.session.requests.post")
    def test_posts_query_with_token(self, mock_post, session):
        mock_post.return_value = make_response(catalog_body(product_node()))

        products = get_products(session)

        assert len(products) == 1
        args, kwargs = mock_post.call_args
        assert args[0] == f"{SHOP_URL}/admin/api/graphql.json"
        assert kwargs["headers"]["X-Shopify-Access-Token"] == "shpat_test"
        assert 'products(first: 250, query: "status:ACTIVE")' in kwargs["json"]["query"]

    @patch("storefront.shopify.session.requests.post")
    def test_mixed_products_normalized(self, mock_post, session):
        mock_post.return_value = make_response(catalog_body(
            product_node(product_id="gid://shopify/Product/1", images=["https://cdn/1.jpg"]),
            product_node(product_id="gid://shopify/Product/2", images=[]),
        ))

        products = get_products(session)

        assert [p.image.src for p in products] == ["https://cdn/1.jpg", ""]

    @patch("storefront.shopify.session.requests.post")
    def test_graphql_errors_raise(self, mock_post, session):
        mock_post.return_value = make_response({"errors": [{"message": "Throttled"}]})

        with pytest.raises(GraphQLQueryError) as exc_info:
            get_products(session)
        assert exc_info.value.errors == [{"message": "Throttled"}]

    @patch("storefront.shopify.session.requests.post")
    def test_http_error_raises_transport_error(self, mock_post, session):
        response = make_response({}, status_code=500)
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(response=response)
        mock_post.return_value = response

        with pytest.raises(TransportError) as exc_info:
            get_products(session)
        assert exc_info.value.status_code == 500

    @patch("storefront.shopify.session.requests.post")
    def test_network_error_raises_transport_error(self, mock_post, session):
        mock_post.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(TransportError):
            get_products(session)

    def test_missing_credentials_is_fatal(self):
        with pytest.raises(ConfigurationError):
            ShopifySession(StorefrontConfig(shop_url="", access_token=""))


class TestFilterAvailableProducts:

    def test_hides_products_without_stock_and_filters_title(self):
        products = [
            normalize_product(product_node(product_id="1", title="Tote Bag")),
            normalize_product(product_node(
                product_id="2",
                title="Sold Out Tee",
                variants=[("v2", "M", "20.00", 0)]
            )),
            normalize_product(product_node(product_id="3", title="Cap")),
        ]

        assert [p.id for p in filter_available_products(products)] == ["1", "3"]
        assert [p.id for p in filter_available_products(products, "TOTE")] == ["1"]
        assert filter_available_products(products, "tee") == []
