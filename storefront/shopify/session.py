"""
Shopify Admin API session

Builds authenticated request headers from configuration and posts GraphQL
documents to the Admin API.
"""

import logging
from typing import Any, Dict, Optional

import requests

from storefront.config import StorefrontConfig, config
from storefront.errors import ConfigurationError, TransportError

logger = logging.getLogger(__name__)


class ShopifySession:
    """Authenticated Shopify Admin GraphQL client"""

    def __init__(self, settings: Optional[StorefrontConfig] = None):
        """
        Initialize the session from configuration

        Args:
            settings: Storefront configuration. Falls back to the global config

        Raises:
            ConfigurationError: if the shop URL or access token is missing
        """
        self.settings = settings or config

        if not self.settings.access_token or not self.settings.shop_url:
            raise ConfigurationError("Missing Shopify access token or shop URL")

        self.headers = {
            'X-Shopify-Access-Token': self.settings.access_token,
            'Content-Type': 'application/json'
        }

    def post_graphql(
        self,
        url: str,
        query: str,
        variables: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        POST a GraphQL document and return the decoded JSON body

        GraphQL-level errors are left in the body for the caller to classify.

        Raises:
            TransportError: on network failure or a non-success HTTP status
        """
        payload: Dict[str, Any] = {'query': query}
        if variables is not None:
            payload['variables'] = variables

        try:
            response = requests.post(
                url,
                headers=self.headers,
                json=payload,
                timeout=self.settings.request_timeout
            )
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            body = e.response.text if e.response is not None else None
            logger.error(f"Shopify HTTP error {status} for {url}")
            raise TransportError(f"HTTP error! status: {status}", status_code=status, body=body) from e
        except requests.exceptions.RequestException as e:
            logger.error(f"Shopify request failed for {url}: {e}")
            raise TransportError(f"Request to Shopify failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                "Shopify returned a non-JSON body",
                status_code=response.status_code,
                body=response.text
            ) from e


def create_session(settings: Optional[StorefrontConfig] = None) -> ShopifySession:
    """Create a session, failing fast when configuration is incomplete"""
    return ShopifySession(settings)
