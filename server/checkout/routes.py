"""
Catalog, cart and order form API routes
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from fastapi import APIRouter, Cookie, Depends, Query, Response

from server.config import server_config
from server.dependencies import (
    get_catalog_fetcher,
    get_form_store,
    get_order_submitter,
    get_session_form,
)
from server.models import (
    AddToCartRequest,
    CartLineView,
    FieldsUpdate,
    FormView,
    ProductsResponse,
    QuantityUpdate,
    SessionResponse,
    SubmitResponse,
)
from storefront.cart import FormStore, OrderForm
from storefront.cart.form import OrderSubmitter
from storefront.catalog import filter_available_products
from storefront.orders import SHIPPING_AMOUNT
from storefront.shared.schemas import Product

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["checkout"])


def build_form_view(session_id: str, form: OrderForm) -> FormView:
    """Snapshot of form fields, cart lines and derived totals"""
    cart = form.cart
    lines = []
    for line in cart.lines:
        variant = cart.variant(line.variant_id)
        lines.append(CartLineView(
            product_id=line.product_id,
            variant_id=line.variant_id,
            title=cart.title_of(line.variant_id),
            variant_title=variant.title,
            price=variant.price,
            quantity=line.quantity,
            available=variant.inventory_quantity,
            line_total=str(cart.line_total(line.variant_id))
        ))

    return FormView(
        session_id=session_id,
        status=form.status.value,
        error=form.error,
        fields=form.data.model_dump(),
        lines=lines,
        item_count=cart.item_count(),
        subtotal=str(cart.subtotal()),
        shipping=str(SHIPPING_AMOUNT),
        total=str(cart.total())
    )


@router.get("/session", response_model=SessionResponse)
def create_or_get_session(
    response: Response,
    session_id: Optional[str] = Cookie(None),
    store: FormStore = Depends(get_form_store)
):
    """Keep the cookie's session when it is still live, otherwise issue a new one"""
    resolved_id, _, created = store.get_or_create(session_id)

    response.set_cookie(
        key="session_id",
        value=resolved_id,
        max_age=server_config.SESSION_TIMEOUT_MINUTES * 60,
        httponly=True,
        samesite="lax"
    )

    return SessionResponse(
        session_id=resolved_id,
        created=created,
        expires_at=datetime.now() + timedelta(minutes=server_config.SESSION_TIMEOUT_MINUTES)
    )


@router.get("/products", response_model=ProductsResponse)
def get_available_products(
    search: str = Query("", description="Case-insensitive title filter"),
    session_id: Optional[str] = Query(None),
    fetch_products: Callable[[], List[Product]] = Depends(get_catalog_fetcher),
    store: FormStore = Depends(get_form_store)
):
    """
    Fetch the live catalog and return products with stock

    When a session is given its form keeps this catalog as the inventory
    snapshot used to guard cart quantities.
    """
    products = fetch_products()

    if session_id:
        form = store.get(session_id)
        if form is not None:
            form.load_catalog(products)

    available = filter_available_products(products, search)
    return ProductsResponse(products=available, count=len(available))


@router.get("/form/{session_id}", response_model=FormView)
def get_form(session_id: str, form: OrderForm = Depends(get_session_form)):
    return build_form_view(session_id, form)


@router.put("/form/{session_id}/fields", response_model=FormView)
def update_fields(
    session_id: str,
    update: FieldsUpdate,
    form: OrderForm = Depends(get_session_form)
):
    for name, value in update.model_dump(exclude_none=True).items():
        form.update_field(name, value)
    return build_form_view(session_id, form)


@router.post("/form/{session_id}/cart", response_model=FormView)
def add_to_cart(
    session_id: str,
    request: AddToCartRequest,
    form: OrderForm = Depends(get_session_form)
):
    """Add units of a variant; 409 when it would exceed known stock"""
    product = form.find_product(request.product_id)
    form.add_item(product, request.variant_id, request.quantity)
    return build_form_view(session_id, form)


@router.put("/form/{session_id}/cart/{variant_id:path}", response_model=FormView)
def set_cart_quantity(
    session_id: str,
    variant_id: str,
    update: QuantityUpdate,
    form: OrderForm = Depends(get_session_form)
):
    form.set_quantity(variant_id, update.quantity)
    return build_form_view(session_id, form)


@router.delete("/form/{session_id}/cart/{variant_id:path}", response_model=FormView)
def remove_from_cart(
    session_id: str,
    variant_id: str,
    form: OrderForm = Depends(get_session_form)
):
    form.remove_item(variant_id)
    return build_form_view(session_id, form)


@router.post("/form/{session_id}/submit", response_model=SubmitResponse)
def submit_order(
    session_id: str,
    update: Optional[FieldsUpdate] = None,
    form: OrderForm = Depends(get_session_form),
    submitter: OrderSubmitter = Depends(get_order_submitter)
):
    """
    Create the order in Shopify

    Backend failures come back as a failure result with the form in the
    error state; only incomplete forms are rejected with 422. Field values
    sent with the request are applied before validation.
    """
    if update is not None:
        for name, value in update.model_dump(exclude_none=True).items():
            form.update_field(name, value)
    result = form.submit(submitter)
    logger.info(f"Order submission for session {session_id}: success={result.success}")
    return SubmitResponse(result=result, form=build_form_view(session_id, form))
