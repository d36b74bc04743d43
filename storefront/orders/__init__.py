"""Order submission"""

from .provinces import get_province_code, SPANISH_PROVINCE_CODES
from .create_order import (
    create_order,
    build_order_variables,
    parse_order_response,
    SHIPPING_AMOUNT
)

__all__ = [
    'get_province_code',
    'SPANISH_PROVINCE_CODES',
    'create_order',
    'build_order_variables',
    'parse_order_response',
    'SHIPPING_AMOUNT'
]
