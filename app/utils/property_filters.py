"""
Property filter construction from flat query-string parameters.

Each facet is optional and independent. Facets combine with AND; values
inside one facet's comma-separated list combine with OR.
"""

from typing import List, Optional
import re

from app.config import settings

ANY_PREFERENCE = "Any"
FAMILY_PREFERENCE = "Family"

_NON_DIGITS = re.compile(r"\D")
_TYPE_PREFIX = re.compile(r"^\+ ")


class PropertyFilter:
    """Structured filter produced by :func:`build_property_filter`."""

    def __init__(
        self,
        bhk: Optional[List[int]] = None,
        property_types: Optional[List[str]] = None,
        preference: Optional[str] = None,
        gender_preference: Optional[str] = None,
        house_types: Optional[List[str]] = None,
        city: Optional[str] = None,
        page: int = 1,
        limit: int = 10
    ):
        self.bhk = bhk
        self.property_types = property_types
        self.preference = preference
        self.gender_preference = gender_preference
        self.house_types = house_types
        self.city = city
        self.page = page
        self.limit = limit

    @property
    def skip(self) -> int:
        """Number of matching records before the requested page."""
        return (self.page - 1) * self.limit

    def __repr__(self) -> str:
        facets = {
            key: value for key, value in vars(self).items()
            if value is not None and key not in ("page", "limit")
        }
        return f"<PropertyFilter({facets}, page={self.page}, limit={self.limit})>"


def _split(value: str) -> List[str]:
    return value.split(",")


def parse_bhk_values(value: str) -> List[int]:
    """
    Parse a comma-separated bhk list such as ``"2 BHK,3BHK,4"``.

    Non-digit characters are stripped from every token. Tokens with no
    digits left cannot match any listing and are dropped.
    """
    values = []
    for token in _split(value):
        digits = _NON_DIGITS.sub("", token)
        if digits:
            values.append(int(digits))
    return values


def parse_type_tags(value: str) -> List[str]:
    """Split a type list, stripping a leading ``"+ "`` from each tag."""
    return [_TYPE_PREFIX.sub("", token) for token in _split(value)]


def build_property_filter(
    bhk: Optional[str] = None,
    residential: Optional[str] = None,
    commercial: Optional[str] = None,
    preference_housing: Optional[str] = None,
    gender_preference: Optional[str] = None,
    house_type: Optional[str] = None,
    city: Optional[str] = None,
    page: Optional[int] = None,
    limit: Optional[int] = None
) -> PropertyFilter:
    """
    Translate filter query parameters into a :class:`PropertyFilter`.

    Args:
        bhk: Comma-separated bhk values
        residential: Comma-separated residential property types
        commercial: Comma-separated commercial property types
        preference_housing: Tenant preference, ``"Any"`` disables the facet
        gender_preference: Gender preference, ignored for family listings
        house_type: Comma-separated house types
        city: Exact city name
        page: 1-based page number
        limit: Page size

    Returns:
        PropertyFilter ready for the property repository
    """
    result = PropertyFilter(
        page=page or settings.default_page,
        limit=limit or settings.default_page_size
    )

    if bhk:
        result.bhk = parse_bhk_values(bhk)

    # Residential and commercial share one membership filter
    if residential:
        result.property_types = parse_type_tags(residential)
    if commercial:
        result.property_types = (result.property_types or []) + parse_type_tags(commercial)

    if preference_housing and preference_housing != ANY_PREFERENCE:
        result.preference = preference_housing

    if gender_preference and preference_housing != FAMILY_PREFERENCE:
        result.gender_preference = gender_preference

    if house_type:
        result.house_types = _split(house_type)

    if city:
        result.city = city

    return result
