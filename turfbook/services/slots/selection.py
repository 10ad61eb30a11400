# turfbook/services/slots/selection.py
"""
Multi-slot selection and pricing over a daily grid.

A selection is a tuple of slot indices in insertion order. Every
function returns a new value; nothing here mutates its input.

Slot states:
  Available -> Selected -> Available   (toggle)
  Booked                               (imposed upstream, never selectable)
"""

import logging
from datetime import date, datetime, timedelta
from typing import Any, Iterable, Optional, Sequence

from ...schemas.slots import BookingHandoff, DateSelection, TimeSlot
from ..records import as_number, get_field, is_sequence

logger = logging.getLogger(__name__)

Selection = tuple[int, ...]


# ── Slot predicates ──────────────────────────────────────────────────────


def is_slot_selectable(slot: Any) -> bool:
    """available is not False and not booked."""
    if slot is None:
        return False
    if isinstance(slot, TimeSlot):
        return slot.is_selectable
    return get_field(slot, "available") is not False and not get_field(slot, "booked")


def is_slot_in_past(slot: Any, now: datetime) -> bool:
    """True if the slot's start is not after `now`. Slots without a day never are."""
    day = get_field(slot, "day", "date")
    hour = get_field(slot, "hour")
    if not isinstance(day, date) or hour is None:
        return False
    if isinstance(day, datetime):
        day = day.date()
    start = datetime.combine(day, datetime.min.time()) + timedelta(hours=int(hour))
    return start <= now


def get_available_slot_count(slots: Any) -> int:
    """Number of selectable slots; 0 for anything that is not a list."""
    if not is_sequence(slots):
        return 0
    return sum(1 for slot in slots if is_slot_selectable(slot))


def has_available_slots(slots: Any) -> bool:
    if not is_sequence(slots):
        return False
    return any(is_slot_selectable(slot) for slot in slots)


# ── Selection ────────────────────────────────────────────────────────────


def toggle_slot_selection(
    selection: Optional[Iterable[int]],
    index: int,
    slots: Sequence[Any],
    *,
    require_consecutive: bool = False,
    now: Optional[datetime] = None,
) -> Selection:
    """
    Deselect `index` if selected, otherwise select it.

    Selecting is a no-op (the selection comes back unchanged) when the
    slot is missing, booked, unavailable, already started (with `now`),
    or, with `require_consecutive`, would break a contiguous run.
    Deselecting is always allowed.
    """
    current = _as_selection(selection)

    if index in current:
        return tuple(i for i in current if i != index)

    slot = _slot_at(slots, index)
    if slot is None or not is_slot_selectable(slot):
        logger.debug("Slot %r is not selectable", index)
        return current

    if now is not None and is_slot_in_past(slot, now):
        logger.debug("Slot %r has already started", index)
        return current

    candidate = current + (index,)
    if require_consecutive and current and not _is_contiguous(candidate):
        logger.debug("Slot %r would break a consecutive selection", index)
        return current

    return candidate


def is_consecutive(selection: Optional[Iterable[int]], slots: Sequence[Any]) -> bool:
    """True if the selected slots form one contiguous run of hours."""
    current = _as_selection(selection)
    if not current:
        return True
    hours = []
    for index in current:
        slot = _slot_at(slots, index)
        hour = get_field(slot, "hour")
        hours.append(index if hour is None else hour)
    return _is_contiguous(hours)


def compute_total(selection: Optional[Iterable[int]], slots: Sequence[Any]) -> float:
    """
    Sum of the selected slots' prices, 0 for an empty selection.

    Summed in index order so the result does not depend on the order in
    which slots were picked.
    """
    total = 0
    for index in sorted(set(_as_selection(selection))):
        slot = _slot_at(slots, index)
        if slot is None:
            continue
        total += as_number(get_field(slot, "price"))
    return total


def selected_labels(selection: Optional[Iterable[int]], slots: Sequence[Any]) -> list[str]:
    """Labels of the selected slots in chronological order."""
    labels = []
    for index in sorted(set(_as_selection(selection))):
        slot = _slot_at(slots, index)
        if slot is not None:
            labels.append(get_field(slot, "label", "time", "displayTime", default=""))
    return labels


def selection_time_range(selection: Optional[Iterable[int]], slots: Sequence[Any]) -> str:
    """
    "HH:00 - HH:00" spanning the first to the last selected slot.

    A single slot gives its own label; an empty selection gives "".
    """
    chosen = [
        _slot_at(slots, i) for i in sorted(set(_as_selection(selection)))
    ]
    chosen = [s for s in chosen if s is not None]
    if not chosen:
        return ""
    if len(chosen) == 1:
        return get_field(chosen[0], "label", "time", "displayTime", default="")
    start = get_field(chosen[0], "start_time", "startTime", default="")
    end = get_field(chosen[-1], "end_time", "endTime", default="")
    return f"{start} - {end}"


# ── Date / range ─────────────────────────────────────────────────────────


def select_date(current: Optional[DateSelection], day: date) -> DateSelection:
    """Pick a single day; any active range is cleared."""
    return DateSelection(day=day)


def select_range(
    current: Optional[DateSelection],
    start: date,
    end: Optional[date] = None,
) -> DateSelection:
    """
    Pick a [start, end] range; any single day is cleared.

    A half-picked range (no end yet) spans the start day only.
    """
    end = end or start
    if end < start:
        start, end = end, start
    return DateSelection(date_range=(start, end))


def grid_day(dates: Optional[DateSelection]) -> Optional[date]:
    """Day whose slot grid is shown: the single day, or the range start."""
    if dates is None:
        return None
    if dates.is_range:
        return dates.date_range[0]
    return dates.day


# ── Booking handoff ──────────────────────────────────────────────────────


def build_booking_handoff(
    venue: Any,
    selection: Optional[Iterable[int]],
    slots: Sequence[Any],
    dates: Optional[DateSelection],
) -> BookingHandoff:
    """
    Payload for the payment stage.

    A date range is priced as a single day: the total is the sum of the
    selected slots, not multiplied by the number of days.
    """
    return BookingHandoff(
        venue_id=get_field(venue, "id", "_id"),
        venue_name=get_field(venue, "name", default=""),
        total_price=compute_total(selection, slots),
        date_description=dates.describe() if dates is not None else "",
        slot_time_labels=selected_labels(selection, slots),
    )


# ── Helpers ──────────────────────────────────────────────────────────────


def _as_selection(selection: Any) -> Selection:
    if not selection:
        return ()
    if isinstance(selection, (str, bytes)):
        return ()
    try:
        return tuple(i for i in selection if isinstance(i, int) and not isinstance(i, bool))
    except TypeError:
        return ()


def _slot_at(slots: Any, index: Any) -> Any:
    if not is_sequence(slots) or not isinstance(index, int) or isinstance(index, bool):
        return None
    if 0 <= index < len(slots):
        return slots[index]
    return None


def _is_contiguous(values: Iterable[int]) -> bool:
    ordered = sorted(values)
    return all(b == a + 1 for a, b in zip(ordered, ordered[1:]))
