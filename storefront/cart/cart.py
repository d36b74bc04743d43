"""
Cart held for a single storefront session
"""

import logging
from decimal import Decimal
from typing import Dict, List, Optional

from storefront.errors import FormValidationError, StockLimitExceeded
from storefront.orders.create_order import SHIPPING_AMOUNT
from storefront.shared.schemas import CartLine, OrderLineItem, Product, Variant

logger = logging.getLogger(__name__)


class Cart:
    """
    Selected line items keyed by variant

    Every change is checked against the variant's last known inventory
    before it is applied, so a rejected change leaves the cart untouched.
    Totals are derived from the current lines on every call.
    """

    def __init__(self):
        self._lines: Dict[str, CartLine] = {}
        self._variants: Dict[str, Variant] = {}
        self._titles: Dict[str, str] = {}

    @staticmethod
    def _check_stock(variant: Variant, quantity: int) -> None:
        if quantity > variant.inventory_quantity:
            raise StockLimitExceeded(variant.id, quantity, variant.inventory_quantity)

    def add(self, product: Product, variant_id: str, quantity: int = 1) -> CartLine:
        """Add units of a variant, merging with any existing line"""
        if quantity < 1:
            raise FormValidationError("Quantity must be at least 1", ["quantity"])

        variant = product.find_variant(variant_id)
        if variant is None:
            raise FormValidationError(f"Unknown variant {variant_id}", ["variant"])

        existing = self._lines.get(variant_id)
        new_quantity = (existing.quantity if existing else 0) + quantity
        self._check_stock(variant, new_quantity)

        line = CartLine(product_id=product.id, variant_id=variant_id, quantity=new_quantity)
        self._lines[variant_id] = line
        self._variants[variant_id] = variant
        self._titles[variant_id] = product.title
        return line

    def set_quantity(self, variant_id: str, quantity: int) -> Optional[CartLine]:
        """Set a line's quantity; zero or less removes the line"""
        existing = self._lines.get(variant_id)
        if existing is None:
            raise FormValidationError(f"Variant {variant_id} is not in the cart", ["variant"])

        if quantity <= 0:
            self.remove(variant_id)
            return None

        self._check_stock(self._variants[variant_id], quantity)
        line = existing.model_copy(update={"quantity": quantity})
        self._lines[variant_id] = line
        return line

    def refresh_variant(self, variant: Variant) -> Optional[CartLine]:
        """
        Replace the inventory snapshot for a variant already in the cart

        A line holding more units than the new stock is cut down to it, and
        a line whose variant sold out is dropped.
        """
        existing = self._lines.get(variant.id)
        if existing is None:
            return None

        self._variants[variant.id] = variant
        if existing.quantity <= variant.inventory_quantity:
            return existing

        logger.warning(
            f"Stock for {variant.id} dropped to {variant.inventory_quantity}, "
            f"cart held {existing.quantity}"
        )
        if variant.inventory_quantity <= 0:
            self.remove(variant.id)
            return None

        line = existing.model_copy(update={"quantity": variant.inventory_quantity})
        self._lines[variant.id] = line
        return line

    def remove(self, variant_id: str) -> None:
        self._lines.pop(variant_id, None)
        self._variants.pop(variant_id, None)
        self._titles.pop(variant_id, None)

    def clear(self) -> None:
        self._lines.clear()
        self._variants.clear()
        self._titles.clear()

    @property
    def lines(self) -> List[CartLine]:
        return list(self._lines.values())

    def is_empty(self) -> bool:
        return not self._lines

    def quantity_of(self, variant_id: str) -> int:
        line = self._lines.get(variant_id)
        return line.quantity if line else 0

    def variant(self, variant_id: str) -> Variant:
        return self._variants[variant_id]

    def title_of(self, variant_id: str) -> str:
        return self._titles.get(variant_id, "")

    def line_total(self, variant_id: str) -> Decimal:
        line = self._lines[variant_id]
        return Decimal(self._variants[variant_id].price) * line.quantity

    def item_count(self) -> int:
        return sum(line.quantity for line in self._lines.values())

    def subtotal(self) -> Decimal:
        return sum((self.line_total(variant_id) for variant_id in self._lines), Decimal("0"))

    def total(self, shipping: Decimal = SHIPPING_AMOUNT) -> Decimal:
        """Grand total including the fixed shipping charge"""
        return self.subtotal() + shipping

    def to_line_items(self) -> List[OrderLineItem]:
        return [
            OrderLineItem(
                product_id=line.product_id,
                variant_id=line.variant_id,
                quantity=line.quantity
            )
            for line in self._lines.values()
        ]
