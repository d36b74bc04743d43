import pytest

from storefront.config import StorefrontConfig
from storefront.shopify import ShopifySession

from helpers import SHOP_URL


@pytest.fixture
def settings():
    return StorefrontConfig(
        shop_url=SHOP_URL,
        access_token="shpat_test",
        api_version="2025-01",
        request_timeout=None,
        google_maps_api_key="maps-key",
    )


@pytest.fixture
def session(settings):
    return ShopifySession(settings)
