# turfbook/services/search.py
"""
Venue search: filter by criteria, then sort by a selectable key.

A venue survives the filter iff every check passes (checked in order,
short-circuit). A numeric/text check whose venue field is absent passes,
so partially-loaded records are not hidden. Input lists are never
mutated; results are new lists.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any, Callable, Iterable, Optional

from pydantic import ValidationError

from ..schemas.venues import SearchCriteria
from .records import as_number, get_field, is_record, is_sequence
from .slots.selection import has_available_slots

logger = logging.getLogger(__name__)

DEFAULT_YEAR = 1900

_YEAR_RE = re.compile(r"\d{4}")


# ============================================================
# FILTER
# ============================================================

def filter_venues(venues: Any, criteria: Optional[SearchCriteria | Mapping] = None) -> list:
    """Venues matching all criteria, in input order."""
    if not is_sequence(venues):
        return []
    criteria = coerce_criteria(criteria)
    checks = _checks(criteria)
    return [v for v in venues if is_record(v) and all(check(v) for check in checks)]


def _checks(c: SearchCriteria) -> list[Callable[[Any], bool]]:
    surface = (c.surface or "all").lower()
    query = (c.query or "").strip().lower()
    wanted = [a.lower() for a in c.amenities if a]

    def distance_ok(v) -> bool:
        distance = as_number(get_field(v, "distance"))
        return not distance or distance <= c.max_distance

    def price_ok(v) -> bool:
        price = as_number(get_field(v, "price"))
        return not price or c.min_price <= price <= c.max_price

    def rating_ok(v) -> bool:
        rating = as_number(get_field(v, "rating"))
        return not rating or rating >= c.min_rating

    def surface_ok(v) -> bool:
        if surface == "all":
            return True
        venue_surface = get_field(v, "surface")
        return not venue_surface or str(venue_surface).lower() == surface

    def weather_ok(v) -> bool:
        if c.weather_dependent == "all":
            return True
        flag = get_field(v, "weatherDependent", "weather_dependent")
        return flag is None or flag is (c.weather_dependent == "true")

    def amenities_ok(v) -> bool:
        if not wanted:
            return True
        amenities = get_field(v, "amenities")
        if not is_sequence(amenities):
            return True
        have = [str(a).lower() for a in amenities if a]
        return all(any(w in h for h in have) for w in wanted)

    def availability_ok(v) -> bool:
        if c.availability != "available":
            return True
        return has_available_slots(get_field(v, "timeSlots", "time_slots"))

    def query_ok(v) -> bool:
        if not query:
            return True
        return any(query in field.lower() for field in _searchable_fields(v))

    return [
        distance_ok,
        price_ok,
        rating_ok,
        surface_ok,
        weather_ok,
        amenities_ok,
        availability_ok,
        query_ok,
    ]


def _searchable_fields(venue: Any) -> list[str]:
    fields = [
        get_field(venue, "name"),
        get_field(venue, "address"),
        get_field(venue, "description"),
    ]
    amenities = get_field(venue, "amenities")
    if is_sequence(amenities):
        fields.extend(amenities)
    return [f for f in fields if isinstance(f, str) and f]


# ============================================================
# SORT
# ============================================================

def _established_year(venue: Any) -> int:
    value = get_field(venue, "established")
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        match = _YEAR_RE.search(value)
        if match:
            return int(match.group())
    return DEFAULT_YEAR


SORT_KEYS: dict[str, Callable[[Any], float]] = {
    "distance": lambda v: as_number(get_field(v, "distance")),
    "price": lambda v: as_number(get_field(v, "price")),
    "rating": lambda v: -as_number(get_field(v, "rating")),
    "popularity": lambda v: -as_number(get_field(v, "reviews", "reviewCount", "review_count")),
    "newest": lambda v: -_established_year(v),
}


def sort_venues(venues: Any, key: Optional[str]) -> list:
    """
    Stable sort into a new list.

    distance / price ascending, rating / popularity / newest descending;
    missing values sort as 0 (year 1900 for newest). Unknown key keeps
    input order.
    """
    if not is_sequence(venues):
        return []
    sort_key = SORT_KEYS.get((key or "").lower())
    if sort_key is None:
        return list(venues)
    return sorted(venues, key=sort_key)


# ============================================================
# SEARCH
# ============================================================

def search_venues(venues: Any, criteria: Optional[SearchCriteria | Mapping] = None) -> list:
    """sort_venues(filter_venues(venues, criteria), criteria.sort_by)."""
    criteria = coerce_criteria(criteria)
    result = sort_venues(filter_venues(venues, criteria), criteria.sort_by)
    logger.debug(
        "Search matched %d of %d venues (sort=%s)",
        len(result),
        len(venues) if is_sequence(venues) else 0,
        criteria.sort_by,
    )
    return result


def coerce_criteria(criteria: Optional[SearchCriteria | Mapping]) -> SearchCriteria:
    """SearchCriteria from a model, a filter-panel dict, or None (defaults)."""
    if isinstance(criteria, SearchCriteria):
        return criteria
    if isinstance(criteria, Mapping):
        try:
            return SearchCriteria.from_filters(criteria, criteria.get("query") or "")
        except ValidationError as e:
            logger.warning("Invalid search criteria, using defaults: %s", e)
    return SearchCriteria()


def reset_criteria() -> SearchCriteria:
    return SearchCriteria()


def surfaces(venues: Iterable[Any]) -> list[str]:
    """Distinct surfaces present in `venues`, for the surface filter options."""
    if not is_sequence(venues):
        return []
    seen: dict[str, str] = {}
    for venue in venues:
        surface = get_field(venue, "surface")
        if isinstance(surface, str) and surface and surface.lower() not in seen:
            seen[surface.lower()] = surface
    return list(seen.values())
