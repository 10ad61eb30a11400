# turfbook/services/slots/__init__.py
"""
Slot availability module.

Grid: synthesized hourly slots for a venue/day (calculator)
Selection: multi-slot toggling, pricing and booking handoff (selection, draft)
Storage: booked-hour sets in Redis (redis_store)
"""

from .config import SlotGridConfig, get_slot_grid_config
from .calculator import generate_daily_slots, normalize_booked_hours
from .selection import (
    build_booking_handoff,
    compute_total,
    get_available_slot_count,
    grid_day,
    has_available_slots,
    is_consecutive,
    is_slot_in_past,
    is_slot_selectable,
    select_date,
    select_range,
    selected_labels,
    selection_time_range,
    toggle_slot_selection,
)
from .draft import BookingDraft
from .pricing import cart_total, format_price
from .redis_store import BookedHoursStore, load_daily_slots

__all__ = [
    "SlotGridConfig",
    "get_slot_grid_config",
    "generate_daily_slots",
    "normalize_booked_hours",
    "build_booking_handoff",
    "compute_total",
    "get_available_slot_count",
    "grid_day",
    "has_available_slots",
    "is_consecutive",
    "is_slot_in_past",
    "is_slot_selectable",
    "select_date",
    "select_range",
    "selected_labels",
    "selection_time_range",
    "toggle_slot_selection",
    "BookingDraft",
    "cart_total",
    "format_price",
    "BookedHoursStore",
    "load_daily_slots",
]
