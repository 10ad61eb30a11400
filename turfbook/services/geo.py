# turfbook/services/geo.py
"""
Great-circle distance between venues and the user.

A missing coordinate is reported as None rather than as a math error:
upstream venue records often arrive without a geocode.
"""

import math
from typing import Any, Iterable, Optional

EARTH_RADIUS_KM = 6371


def distance_km(lat1: Any, lon1: Any, lat2: Any, lon2: Any) -> Optional[float]:
    """
    Haversine distance in kilometres, rounded to one decimal.

    Returns None if any coordinate is falsy (0, NaN, None) or not numeric.
    """
    coords = [_coord(c) for c in (lat1, lon1, lat2, lon2)]
    if any(c is None for c in coords):
        return None
    lat1, lon1, lat2, lon2 = coords

    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)

    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    # Half-up rounding, not banker's
    return math.floor(EARTH_RADIUS_KM * c * 10 + 0.5) / 10


def with_distances(venues: Iterable[Any], lat: Any, lon: Any) -> list[dict]:
    """
    Copy venue records and set "distance" from (lat, lon).

    Venues without coordinates keep whatever distance they already had.
    """
    if venues is None:
        return []

    result = []
    for venue in venues:
        record = _as_dict(venue)
        if record is None:
            continue
        v_lat = record.get("latitude", record.get("lat"))
        v_lon = record.get("longitude", record.get("lng"))
        d = distance_km(lat, lon, v_lat, v_lon)
        if d is not None:
            record["distance"] = d
        result.append(record)
    return result


# ── Helpers ──────────────────────────────────────────────────────────────


def _coord(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not value:
        return None
    try:
        value = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(value) or value == 0:
        return None
    return value


def _as_dict(venue: Any) -> Optional[dict]:
    if isinstance(venue, dict):
        return dict(venue)
    if hasattr(venue, "model_dump"):
        return venue.model_dump(by_alias=True)
    return None
