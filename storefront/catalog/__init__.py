"""Product catalog"""

from .fetch_products import (
    get_products,
    normalize_product,
    filter_available_products,
    PRODUCTS_QUERY
)

__all__ = [
    'get_products',
    'normalize_product',
    'filter_available_products',
    'PRODUCTS_QUERY'
]
