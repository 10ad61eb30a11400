# turfbook/services/slots/draft.py
"""
Booking draft: the state a booking screen carries between interactions.

The presentation layer owns the draft and replaces it with the value
returned by each transition.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Iterable, Optional

from ...config import get_settings
from ...schemas.slots import BookingHandoff, DateSelection, TimeSlot
from ..records import get_field
from .calculator import generate_daily_slots
from .config import SlotGridConfig
from .selection import (
    Selection,
    build_booking_handoff,
    compute_total,
    grid_day,
    select_date,
    select_range,
    selection_time_range,
    toggle_slot_selection,
)


@dataclass(frozen=True)
class BookingDraft:
    venue: Any
    dates: DateSelection
    slots: tuple[TimeSlot, ...]
    selection: Selection = ()
    require_consecutive: bool = False
    config: Optional[SlotGridConfig] = None

    @classmethod
    def open(
        cls,
        venue: Any,
        day: date,
        booked_hours: Optional[Iterable[int]] = None,
        *,
        require_consecutive: bool = False,
        config: Optional[SlotGridConfig] = None,
    ) -> "BookingDraft":
        dates = select_date(None, day)
        return cls(
            venue=venue,
            dates=dates,
            slots=cls._grid(venue, day, booked_hours, config),
            require_consecutive=require_consecutive,
            config=config,
        )

    # ── Transitions ──────────────────────────────────────────────────────

    def with_date(self, day: date, booked_hours: Optional[Iterable[int]] = None) -> "BookingDraft":
        """Switch to a single day: range cleared, grid regenerated, selection cleared."""
        return replace(
            self,
            dates=select_date(self.dates, day),
            slots=self._grid(self.venue, day, booked_hours, self.config),
            selection=(),
        )

    def with_range(
        self,
        start: date,
        end: Optional[date] = None,
        booked_hours: Optional[Iterable[int]] = None,
    ) -> "BookingDraft":
        """Switch to a range: single day cleared, grid of the start day, selection cleared."""
        dates = select_range(self.dates, start, end)
        return replace(
            self,
            dates=dates,
            slots=self._grid(self.venue, grid_day(dates), booked_hours, self.config),
            selection=(),
        )

    def toggle(self, index: int, now: Optional[datetime] = None) -> "BookingDraft":
        selection = toggle_slot_selection(
            self.selection,
            index,
            self.slots,
            require_consecutive=self.require_consecutive,
            now=now,
        )
        if selection == self.selection:
            return self
        return replace(self, selection=selection)

    # ── Views ────────────────────────────────────────────────────────────

    @property
    def total_price(self) -> float:
        return compute_total(self.selection, self.slots)

    @property
    def time_range(self) -> str:
        return selection_time_range(self.selection, self.slots)

    @property
    def hours(self) -> int:
        return len(self.selection)

    def handoff(self) -> BookingHandoff:
        return build_booking_handoff(self.venue, self.selection, self.slots, self.dates)

    @staticmethod
    def _grid(venue, day, booked_hours, config) -> tuple[TimeSlot, ...]:
        price = get_field(venue, "price", "pricePerHour", "price_per_hour")
        if price is None:
            price = get_settings().default_slot_price
        return tuple(generate_daily_slots(day, price, booked_hours, config))
