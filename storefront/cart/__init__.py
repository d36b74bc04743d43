"""Cart and order form state"""

from .cart import Cart
from .form import OrderForm, OrderFormData, FormStatus, describe_error
from .store import FormStore

__all__ = [
    'Cart',
    'OrderForm',
    'OrderFormData',
    'FormStatus',
    'FormStore',
    'describe_error',
]
