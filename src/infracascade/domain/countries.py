"""Country codes and display names.

Catalogs mix ISO 3166-1 alpha-2 codes with free-form names ("USA",
"China (SAR)", "UK (Gibraltar)").  :func:`normalize_country_code` maps the
known variants onto ISO2; anything else passes through unchanged and is
rejected by :func:`is_country_code` if it is not two uppercase letters.
"""

from __future__ import annotations

import re

COUNTRY_NAMES: dict[str, str] = {
    "US": "United States", "GB": "United Kingdom", "ES": "Spain", "FR": "France",
    "DE": "Germany", "IT": "Italy", "PT": "Portugal", "NO": "Norway", "DK": "Denmark",
    "NL": "Netherlands", "BE": "Belgium", "SE": "Sweden", "FI": "Finland", "IE": "Ireland",
    "AT": "Austria", "CH": "Switzerland", "GR": "Greece", "CZ": "Czech Republic",
    "JP": "Japan", "CN": "China", "TW": "Taiwan", "HK": "Hong Kong", "SG": "Singapore",
    "KR": "South Korea", "AU": "Australia", "NZ": "New Zealand", "IN": "India",
    "PK": "Pakistan", "AE": "UAE", "SA": "Saudi Arabia", "EG": "Egypt", "KW": "Kuwait",
    "BH": "Bahrain", "OM": "Oman", "QA": "Qatar", "IR": "Iran", "IQ": "Iraq",
    "TR": "Turkey", "IL": "Israel", "JO": "Jordan", "LB": "Lebanon", "SY": "Syria",
    "YE": "Yemen", "NG": "Nigeria", "ZA": "South Africa", "KE": "Kenya", "TZ": "Tanzania",
    "MZ": "Mozambique", "MG": "Madagascar", "SN": "Senegal", "GH": "Ghana",
    "CI": "Ivory Coast", "AO": "Angola", "ET": "Ethiopia", "UG": "Uganda",
    "BR": "Brazil", "AR": "Argentina", "CL": "Chile", "PE": "Peru", "CO": "Colombia",
    "MX": "Mexico", "PA": "Panama", "VE": "Venezuela", "IS": "Iceland",
    "FO": "Faroe Islands", "FJ": "Fiji", "ID": "Indonesia", "VN": "Vietnam",
    "TH": "Thailand", "MY": "Malaysia", "PH": "Philippines", "RU": "Russia",
    "UA": "Ukraine", "PL": "Poland", "RO": "Romania", "HU": "Hungary", "CA": "Canada",
    "DJ": "Djibouti", "BD": "Bangladesh", "LK": "Sri Lanka", "MM": "Myanmar",
    "AZ": "Azerbaijan", "GE": "Georgia", "KZ": "Kazakhstan", "BG": "Bulgaria",
    "AL": "Albania", "DZ": "Algeria", "LY": "Libya", "MA": "Morocco", "TN": "Tunisia",
}  # fmt: skip

_ALIASES: dict[str, str] = {
    "USA": "US",
    "United States": "US",
    "Canada": "CA",
    "China": "CN",
    "China (SAR)": "CN",
    "Taiwan": "TW",
    "South Korea": "KR",
    "Netherlands": "NL",
    "Belgium": "BE",
    "Malaysia": "MY",
    "Thailand": "TH",
    "Greece": "GR",
    "Saudi Arabia": "SA",
    "Iran": "IR",
    "Qatar": "QA",
    "Russia": "RU",
    "Egypt": "EG",
    "UK (Gibraltar)": "GB",
    "UK": "GB",
    "Djibouti": "DJ",
    "Yemen": "YE",
    "Panama": "PA",
    "Spain": "ES",
    "Pakistan": "PK",
    "Sri Lanka": "LK",
    "Japan": "JP",
    "France": "FR",
    "Brazil": "BR",
    "India": "IN",
    "Singapore": "SG",
    "Germany": "DE",
    "UAE": "AE",
    "Oman": "OM",
    "Turkey": "TR",
    "Azerbaijan": "AZ",
    "Georgia": "GE",
    "Kazakhstan": "KZ",
}

_ISO2 = re.compile(r"^[A-Z]{2}$")


def normalize_country_code(country: str) -> str:
    """Map a catalog country value onto an ISO2 code where one is known.

    Examples:
        >>> normalize_country_code("USA")
        'US'
        >>> normalize_country_code("UK (Gibraltar)")
        'GB'
        >>> normalize_country_code("JP")
        'JP'
    """
    value = country.strip()
    return _ALIASES.get(value, value)


def is_country_code(code: str) -> bool:
    """True when *code* is two uppercase ASCII letters."""
    return _ISO2.match(code) is not None


def country_name(code: str, overrides: dict[str, str] | None = None, *, fallback: str = "") -> str:
    """Display name for *code*: overrides first, then the built-in table."""
    if overrides and code in overrides:
        return overrides[code]
    return COUNTRY_NAMES.get(code) or fallback or code
