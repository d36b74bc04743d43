"""
Shared Pydantic schemas for the storefront
These models are the single source of truth for the catalog, the order
submitter and the JSON API consumed by the page
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional, Union


class Variant(BaseModel):
    """A purchasable SKU of a product"""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Shopify variant GID")
    title: str = Field(description="Variant title")
    price: str = Field(description="Price as returned by Shopify (decimal as text)")
    inventory_quantity: int = Field(
        0,
        alias="inventoryQuantity",
        description="Available inventory, may be zero"
    )


class ProductImage(BaseModel):
    """Representative product image; src is empty when the product has none"""
    src: str = ""


class Product(BaseModel):
    """Catalog product with its first image and variants"""
    id: str = Field(description="Shopify product GID")
    title: str
    handle: str = ""
    description: str = ""
    image: ProductImage = Field(default_factory=ProductImage)
    variants: List[Variant] = Field(default_factory=list)

    def in_stock_variants(self) -> List[Variant]:
        return [v for v in self.variants if v.inventory_quantity > 0]

    def has_stock(self) -> bool:
        return any(v.inventory_quantity > 0 for v in self.variants)

    def find_variant(self, variant_id: str) -> Optional[Variant]:
        for variant in self.variants:
            if variant.id == variant_id:
                return variant
        return None


class CartLine(BaseModel):
    """A (variant, quantity) pair held in the cart"""
    product_id: str
    variant_id: str
    quantity: int = Field(ge=1)


class ContactDetails(BaseModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""


class ShippingAddress(BaseModel):
    address1: str = ""
    city: str = ""
    zip: str = ""


class OrderLineItem(BaseModel):
    product_id: str
    variant_id: str
    quantity: int = Field(1, ge=1)


class OrderInput(BaseModel):
    """Everything the order submitter needs to create an order"""
    contact: ContactDetails
    address: ShippingAddress
    line_items: List[OrderLineItem] = Field(min_length=1)


class OrderResult(BaseModel):
    """Outcome of an order submission"""
    success: bool
    data: Optional[Dict[str, Any]] = Field(None, description="Created order on success")
    error: Optional[Union[List[Any], str]] = Field(
        None,
        description="userErrors / GraphQL errors or a message on failure"
    )


class ParsedAddress(BaseModel):
    """Street, city and postal code extracted from a selected place"""
    street: str = ""
    city: str = ""
    zip: str = ""
