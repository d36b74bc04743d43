"""Shopify Admin API access"""

from .session import ShopifySession, create_session

__all__ = [
    'ShopifySession',
    'create_session',
]
