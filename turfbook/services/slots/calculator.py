# turfbook/services/slots/calculator.py
"""
Daily slot grid generation.

The grid is synthesized per viewed date, never stored: one slot per
hour, all at the venue's base price, with the hours present in the
booked-hour set marked unavailable.

Contains:
✓ hourly grid for the configured opening hours
✓ availability from the booked-hour set
✓ base price per slot

Does NOT contain:
✗ Per-hour price variation
✗ Booking persistence (see redis_store)
"""

import logging
from datetime import date
from typing import Any, Iterable, Optional

from ...schemas.slots import TimeSlot
from ..records import as_number
from .config import SlotGridConfig, get_slot_grid_config

logger = logging.getLogger(__name__)


def generate_daily_slots(
    day: Optional[date],
    base_price: Any,
    booked_hours: Optional[Iterable[Any]] = None,
    config: SlotGridConfig | None = None,
) -> list[TimeSlot]:
    """
    Generate the slot grid for a venue on `day`.

    Returns:
        One TimeSlot per hour (24 with the default config). A slot is
        unavailable iff its start hour is in `booked_hours`.
    """
    config = config or get_slot_grid_config()
    price = as_number(base_price)
    booked = normalize_booked_hours(booked_hours)

    return [
        TimeSlot(
            day=day,
            hour=hour,
            label=config.format_slot_label(hour),
            start_time=config.format_hour(hour),
            end_time=config.format_hour(hour + 1),
            available=hour not in booked,
            price=price,
        )
        for hour in config.hours
    ]


def normalize_booked_hours(booked_hours: Any) -> frozenset[int]:
    """Booked-hour input as a set of ints; unusable entries are dropped."""
    if booked_hours is None or isinstance(booked_hours, (str, bytes)):
        return frozenset()
    try:
        items = list(booked_hours)
    except TypeError:
        logger.debug("Ignoring non-iterable booked hours: %r", booked_hours)
        return frozenset()

    hours = set()
    for item in items:
        try:
            if isinstance(item, bytes):
                item = item.decode()
            hours.add(int(item))
        except (TypeError, ValueError):
            logger.debug("Ignoring booked hour %r", item)
    return frozenset(hours)
