"""
Spanish province codes required by Shopify's address schema
"""

import unicodedata
from typing import Dict


SPANISH_PROVINCE_CODES: Dict[str, str] = {
    "Álava": "VI",
    "Albacete": "AB",
    "Alicante": "A",
    "Almería": "AL",
    "Asturias": "O",
    "Ávila": "AV",
    "Badajoz": "BA",
    "Barcelona": "B",
    "Burgos": "BU",
    "Cáceres": "CC",
    "Cádiz": "CA",
    "Cantabria": "S",
    "Castellón": "CS",
    "Ciudad Real": "CR",
    "Córdoba": "CO",
    "La Coruña": "C",
    "Cuenca": "CU",
    "Gerona": "GI",
    "Granada": "GR",
    "Guadalajara": "GU",
    "Guipúzcoa": "SS",
    "Huelva": "H",
    "Huesca": "HU",
    "Islas Baleares": "PM",
    "Jaén": "J",
    "León": "LE",
    "Lérida": "L",
    "Lugo": "LU",
    "Madrid": "M",
    "Málaga": "MA",
    "Murcia": "MU",
    "Navarra": "NA",
    "Orense": "OR",
    "Palencia": "P",
    "Las Palmas": "GC",
    "Pontevedra": "PO",
    "La Rioja": "LO",
    "Salamanca": "SA",
    "Santa Cruz de Tenerife": "TF",
    "Segovia": "SG",
    "Sevilla": "SE",
    "Soria": "SO",
    "Tarragona": "T",
    "Teruel": "TE",
    "Toledo": "TO",
    "Valencia": "V",
    "Valladolid": "VA",
    "Vizcaya": "BI",
    "Zamora": "ZA",
    "Zaragoza": "Z",
}


def normalize_name(name: str) -> str:
    """Strip accents and upper-case a place name"""
    decomposed = unicodedata.normalize("NFD", name)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).upper()


_CODES_BY_NORMALIZED_NAME = {
    normalize_name(name): code for name, code in SPANISH_PROVINCE_CODES.items()
}


def get_province_code(province_name: str) -> str:
    """
    Look up the province code for a free-text name

    Matching ignores accents and case. Names that are not in the table are
    returned unchanged.
    """
    return _CODES_BY_NORMALIZED_NAME.get(normalize_name(province_name), province_name)
