"""
Pydantic models for API requests and responses
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from datetime import datetime

from storefront.shared.schemas import OrderResult, ParsedAddress, Product


class ProductsResponse(BaseModel):
    products: List[Product]
    count: int


class SessionResponse(BaseModel):
    session_id: str
    created: bool
    expires_at: datetime


class FieldsUpdate(BaseModel):
    """Partial edit of contact/address fields"""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address1: Optional[str] = None
    city: Optional[str] = None
    zip: Optional[str] = None


class AddToCartRequest(BaseModel):
    product_id: str
    variant_id: str
    quantity: int = Field(1, ge=1)


class QuantityUpdate(BaseModel):
    quantity: int = Field(..., ge=0)


class CartLineView(BaseModel):
    product_id: str
    variant_id: str
    title: str
    variant_title: str
    price: str
    quantity: int
    available: int
    line_total: str


class FormView(BaseModel):
    """Everything the page needs to render the form and cart"""
    session_id: str
    status: str
    error: Optional[str] = None
    fields: Dict[str, str]
    lines: List[CartLineView]
    item_count: int
    subtotal: str
    shipping: str
    total: str


class SubmitResponse(BaseModel):
    result: OrderResult
    form: FormView


class PlacePayload(BaseModel):
    """Raw place_changed payload forwarded by the page"""
    place: Dict[str, Any]
    session_id: Optional[str] = None


class ParsedAddressResponse(BaseModel):
    address: Optional[ParsedAddress] = None
    applied: bool = False


class PlacesScriptResponse(BaseModel):
    state: str
    script: str
    options: Dict[str, Any]
    ready: bool


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[Any] = None
    timestamp: datetime = Field(default_factory=datetime.now)
