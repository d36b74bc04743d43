"""Address autocomplete"""

from .loader import LoaderState, PageHead, PlacesScriptLoader, ScriptTag, PLACES_SCRIPT_MARKER
from .places import parse_place

__all__ = [
    'LoaderState',
    'PageHead',
    'PlacesScriptLoader',
    'ScriptTag',
    'PLACES_SCRIPT_MARKER',
    'parse_place',
]
