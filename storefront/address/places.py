"""
Translate a selected Google Places result into a shipping address
"""

import logging
from typing import Any, Dict, Optional

from storefront.shared.schemas import ParsedAddress

logger = logging.getLogger(__name__)


STREET_TYPES = ("route", "street_number")
CITY_TYPES = ("locality", "administrative_area_level_2")
POSTAL_CODE_TYPE = "postal_code"


def parse_place(place: Optional[Dict[str, Any]]) -> Optional[ParsedAddress]:
    """
    Extract street, city and postal code from a place_changed payload

    Street components are joined with a space in the order the widget lists
    them. When no street can be derived the formatted address is used.
    Missing city or zip come back as empty strings.

    Args:
        place: The object returned by Autocomplete.getPlace()

    Returns:
        ParsedAddress, or None when the place carries no address_components list
    """
    if not place or place.get("address_components") is None:
        return None

    street = ""
    city = ""
    zip_code = ""

    for component in place["address_components"]:
        types = component.get("types") or []
        long_name = component.get("long_name") or ""

        if any(t in types for t in STREET_TYPES):
            street = f"{street} {long_name}" if street else long_name
        if any(t in types for t in CITY_TYPES):
            city = long_name
        if POSTAL_CODE_TYPE in types:
            zip_code = long_name

    if not street and place.get("formatted_address"):
        street = place["formatted_address"]

    parsed = ParsedAddress(street=street, city=city, zip=zip_code)
    logger.debug(f"Parsed address: {parsed}")
    return parsed
