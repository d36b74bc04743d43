"""
Shared resources injected into the routes
"""

from typing import Callable, List

from fastapi import Depends, HTTPException

from server.config import server_config

from storefront.address import PageHead, PlacesScriptLoader
from storefront.cart import FormStore, OrderForm
from storefront.catalog import get_products
from storefront.config import config
from storefront.orders import create_order
from storefront.shared.schemas import Product
from storefront.cart.form import OrderSubmitter


# Process-wide instances
page_head = PageHead()
places_loader = PlacesScriptLoader(
    config.get_places_script_url(),
    head=page_head,
    country=config.places_country
)
form_store = FormStore(timeout_minutes=server_config.SESSION_TIMEOUT_MINUTES)


def get_places_loader() -> PlacesScriptLoader:
    return places_loader


def get_form_store() -> FormStore:
    return form_store


def get_catalog_fetcher() -> Callable[[], List[Product]]:
    """Fetches a fresh catalog; credentials are checked on the first call"""
    return get_products


def get_order_submitter() -> OrderSubmitter:
    return create_order


def get_session_form(session_id: str, store: FormStore = Depends(get_form_store)) -> OrderForm:
    """Dependency resolving the form for a path session id"""
    form = store.get(session_id)
    if form is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return form
