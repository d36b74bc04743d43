"""
Address autocomplete API routes
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from server.dependencies import get_form_store, get_places_loader
from server.models import ParsedAddressResponse, PlacePayload, PlacesScriptResponse
from storefront.address import PlacesScriptLoader, ScriptTag, parse_place
from storefront.cart import FormStore
from storefront.config import config

router = APIRouter(prefix="/api/address", tags=["address"])


def _script_response(loader: PlacesScriptLoader) -> PlacesScriptResponse:
    return PlacesScriptResponse(
        state=loader.state.value,
        script=ScriptTag(src=loader.script_url).render(),
        options=loader.widget_options(),
        ready=loader.is_widget_ready
    )


@router.post("/load", response_model=PlacesScriptResponse)
async def load_places_script(loader: PlacesScriptLoader = Depends(get_places_loader)):
    """Make sure the Places script is in the page head (injected once)"""
    await loader.load()
    return _script_response(loader)


@router.post("/ready", response_model=PlacesScriptResponse)
async def mark_places_ready(loader: PlacesScriptLoader = Depends(get_places_loader)):
    """Called by the page once google.maps.places.Autocomplete exists"""
    loader.mark_ready()
    return _script_response(loader)


@router.get("/ready", response_model=PlacesScriptResponse)
async def wait_for_places(
    timeout: Optional[float] = Query(None, ge=0, description="Seconds to wait, defaults to PLACES_READY_TIMEOUT"),
    loader: PlacesScriptLoader = Depends(get_places_loader)
):
    """Wait for the widget to report ready; `ready` is false after the timeout"""
    if timeout is None:
        timeout = config.places_ready_timeout
    await loader.wait_until_ready(timeout)
    return _script_response(loader)


@router.post("/parse", response_model=ParsedAddressResponse)
async def parse_selected_place(
    payload: PlacePayload,
    store: FormStore = Depends(get_form_store)
):
    """
    Parse a selected place and, for a known session, fill its address fields
    """
    address = parse_place(payload.place)
    if address is None:
        return ParsedAddressResponse(address=None, applied=False)

    applied = False
    if payload.session_id:
        form = store.get(payload.session_id)
        if form is not None:
            form.apply_address(address)
            applied = True

    return ParsedAddressResponse(address=address, applied=applied)
