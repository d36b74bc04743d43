"""
Configuration for the Pop Up storefront
"""

import os
from typing import Optional
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


def _optional_float(name: str) -> Optional[float]:
    value = os.getenv(name)
    return float(value) if value else None


@dataclass
class StorefrontConfig:
    """Central configuration for the storefront"""

    # Shopify Configuration
    shop_url: str = os.getenv("SHOPIFY_SHOP_URL", "").rstrip("/")
    access_token: str = os.getenv("SHOPIFY_ACCESS_TOKEN", "")
    api_version: str = os.getenv("SHOPIFY_API_VERSION", "2025-01")
    request_timeout: Optional[float] = _optional_float("SHOPIFY_TIMEOUT")

    # Google Places Configuration
    google_maps_api_key: str = os.getenv("GOOGLE_MAPS_API_KEY", "")
    places_ready_timeout: float = float(os.getenv("PLACES_READY_TIMEOUT", "10"))
    places_country: str = os.getenv("PLACES_COUNTRY", "ES")

    def get_catalog_url(self) -> str:
        """Unversioned Admin GraphQL endpoint used for catalog reads"""
        return f"{self.shop_url}/admin/api/graphql.json"

    def get_orders_url(self) -> str:
        """Versioned Admin GraphQL endpoint used for order creation"""
        return f"{self.shop_url}/admin/api/{self.api_version}/graphql.json"

    def get_places_script_url(self) -> str:
        return (
            "https://maps.googleapis.com/maps/api/js"
            f"?key={self.google_maps_api_key}&libraries=places&loading=async"
        )


# Global config instance
config = StorefrontConfig()
