"""
Order form state machine

Holds the contact/address fields and the cart for one customer session and
drives submission through idle -> editing -> submitting -> success | error.
"""

import logging
import threading
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel

from storefront.cart.cart import Cart
from storefront.errors import FormValidationError, StorefrontError
from storefront.shared.schemas import (
    ContactDetails,
    OrderInput,
    OrderResult,
    ParsedAddress,
    Product,
    ShippingAddress,
)

logger = logging.getLogger(__name__)


class FormStatus(str, Enum):
    IDLE = "idle"
    EDITING = "editing"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


class OrderFormData(BaseModel):
    """Fields the customer fills in"""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    address1: str = ""
    city: str = ""
    zip: str = ""


REQUIRED_FIELDS = ("first_name", "last_name", "email", "phone", "address1", "city", "zip")

OrderSubmitter = Callable[[OrderInput], OrderResult]


def describe_error(error: Any) -> str:
    """Human readable message for an OrderResult error payload"""
    if isinstance(error, list):
        messages = [
            item.get("message", str(item)) if isinstance(item, dict) else str(item)
            for item in error
        ]
        return "; ".join(messages) or "An error occurred while creating the order"
    if error:
        return str(error)
    return "An error occurred while creating the order"


class OrderForm:
    """Form and cart state for one customer"""

    def __init__(self):
        self.data = OrderFormData()
        self.cart = Cart()
        self.catalog: Dict[str, Product] = {}
        self.status = FormStatus.IDLE
        self.error: Optional[str] = None
        self.last_result: Optional[OrderResult] = None
        self._lock = threading.Lock()

    def load_catalog(self, products: List[Product]) -> None:
        """
        Remember the inventory snapshot the customer is looking at

        Lines already in the cart are re-checked against the new stock.
        """
        self.catalog = {product.id: product for product in products}

        for line in self.cart.lines:
            product = self.catalog.get(line.product_id)
            variant = product.find_variant(line.variant_id) if product else None
            if variant is not None:
                self.cart.refresh_variant(variant)

    def find_product(self, product_id: str) -> Product:
        product = self.catalog.get(product_id)
        if product is None:
            raise FormValidationError(f"Unknown product {product_id}", ["product"])
        return product

    def _touch(self) -> None:
        if self.status is not FormStatus.SUBMITTING:
            self.status = FormStatus.EDITING

    def _ensure_editable(self) -> None:
        if self.status is FormStatus.SUBMITTING:
            raise FormValidationError("The order is being submitted")

    def update_field(self, name: str, value: str) -> None:
        if name not in OrderFormData.model_fields:
            raise FormValidationError(f"Unknown field {name}", [name])
        self._ensure_editable()
        setattr(self.data, name, value)
        self._touch()

    def apply_address(self, address: ParsedAddress) -> None:
        """Fill street, city and zip from an autocomplete selection"""
        self._ensure_editable()
        self.data.address1 = address.street
        self.data.city = address.city
        self.data.zip = address.zip
        self._touch()

    def add_item(self, product: Product, variant_id: str, quantity: int = 1) -> None:
        self._ensure_editable()
        self.cart.add(product, variant_id, quantity)
        self._touch()

    def set_quantity(self, variant_id: str, quantity: int) -> None:
        self._ensure_editable()
        self.cart.set_quantity(variant_id, quantity)
        self._touch()

    def remove_item(self, variant_id: str) -> None:
        self._ensure_editable()
        self.cart.remove(variant_id)
        self._touch()

    def missing_fields(self) -> List[str]:
        return [name for name in REQUIRED_FIELDS if not getattr(self.data, name).strip()]

    def validate(self) -> None:
        missing = self.missing_fields()
        if missing:
            raise FormValidationError(f"Missing required fields: {', '.join(missing)}", missing)
        if self.cart.is_empty():
            raise FormValidationError("Select at least one product", ["cart"])

    def build_order_input(self) -> OrderInput:
        return OrderInput(
            contact=ContactDetails(
                first_name=self.data.first_name,
                last_name=self.data.last_name,
                email=self.data.email,
                phone=self.data.phone,
            ),
            address=ShippingAddress(
                address1=self.data.address1,
                city=self.data.city,
                zip=self.data.zip,
            ),
            line_items=self.cart.to_line_items(),
        )

    def reset(self) -> None:
        self.data = OrderFormData()
        self.cart.clear()

    def submit(self, submitter: OrderSubmitter) -> OrderResult:
        """
        Submit the order once

        Validation problems raise FormValidationError before anything is
        sent. Failure results and storefront errors from the submitter are
        caught here and leave the form in the ERROR state with a message.
        """
        with self._lock:
            self._ensure_editable()
            self.validate()
            order_input = self.build_order_input()
            self.status = FormStatus.SUBMITTING
            self.error = None

        try:
            result = submitter(order_input)
        except StorefrontError as e:
            logger.error(f"Order submission failed: {e}")
            result = OrderResult(success=False, error=str(e))
        except Exception:
            self.status = FormStatus.ERROR
            self.error = "An error occurred while creating the order"
            raise

        self.last_result = result
        if result.success:
            self.status = FormStatus.SUCCESS
            self.reset()
        else:
            self.status = FormStatus.ERROR
            self.error = describe_error(result.error)
        return result
