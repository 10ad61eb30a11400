# turfbook/schemas/slots.py
"""
Pydantic schemas for the daily slot grid and the booking handoff.
"""

from datetime import date
from typing import Optional
from urllib.parse import urlencode

from pydantic import BaseModel, model_validator


class TimeSlot(BaseModel):
    """One bookable hour of a venue on a given date."""
    day: Optional[date] = None
    hour: Optional[int] = None
    label: str = ""  # "HH:00 - HH:00"
    start_time: str = ""  # "HH:00"
    end_time: str = ""
    available: bool = True
    booked: bool = False
    price: float = 0

    model_config = {"from_attributes": True, "frozen": True}

    @property
    def is_selectable(self) -> bool:
        return self.available is not False and not self.booked


class DateSelection(BaseModel):
    """
    Active date of the booking flow: a single day or a [start, end] range.

    The two are mutually exclusive; picking one clears the other.
    """
    day: Optional[date] = None
    date_range: Optional[tuple[date, date]] = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _exclusive(self):
        if self.day is not None and self.date_range is not None:
            raise ValueError("day and date_range are mutually exclusive")
        return self

    @property
    def is_range(self) -> bool:
        return self.date_range is not None

    def describe(self) -> str:
        """Human-readable date, e.g. "16/10/2026" or "16/10/2026 - 18/10/2026"."""
        if self.is_range:
            start, end = self.date_range
            return f"{_fmt(start)} - {_fmt(end)}"
        if self.day is not None:
            return _fmt(self.day)
        return ""


def _fmt(d: date) -> str:
    return d.strftime("%d/%m/%Y")


class BookingHandoff(BaseModel):
    """Payload handed to the payment stage on booking confirmation."""
    venue_id: Optional[str | int] = None
    venue_name: str = ""
    total_price: float = 0
    date_description: str = ""
    slot_time_labels: list[str] = []

    model_config = {"frozen": True}

    def to_query_string(self) -> str:
        """Query string consumed by the payment page: tid, name, price, date, slots."""
        price = self.total_price
        if float(price).is_integer():
            price = int(price)
        return urlencode({
            "tid": "" if self.venue_id is None else self.venue_id,
            "name": self.venue_name,
            "price": price,
            "date": self.date_description,
            "slots": ", ".join(self.slot_time_labels),
        })
