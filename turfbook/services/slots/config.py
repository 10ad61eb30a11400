# turfbook/services/slots/config.py
"""
Slot grid configuration.
"""

from dataclasses import dataclass
from functools import lru_cache

from ...exceptions import ConfigurationError


@dataclass(frozen=True)
class SlotGridConfig:
    """
    Configuration of the daily slot grid.

    Attributes:
        open_hour: First bookable hour (inclusive)
        close_hour: End of the last bookable hour (exclusive, max 24)
        expire_buffer_seconds: Extra lifetime of cached day keys past midnight
    """
    open_hour: int = 0
    close_hour: int = 24
    expire_buffer_seconds: int = 60

    def __post_init__(self):
        """Validate configuration."""
        if not 0 <= self.open_hour < self.close_hour <= 24:
            raise ConfigurationError(
                f"expected 0 <= open_hour < close_hour <= 24, "
                f"got {self.open_hour}..{self.close_hour}"
            )

    @property
    def slots_per_day(self) -> int:
        """Number of one-hour slots in a day (24 for the full-day grid)."""
        return self.close_hour - self.open_hour

    @property
    def hours(self) -> range:
        return range(self.open_hour, self.close_hour)

    def format_hour(self, hour: int) -> str:
        """Hour as "HH:00"."""
        return f"{hour:02d}:00"

    def format_slot_label(self, hour: int) -> str:
        """Slot label "HH:00 - HH:00" (24-hour, zero-padded)."""
        return f"{self.format_hour(hour)} - {self.format_hour(hour + 1)}"


@lru_cache
def get_slot_grid_config() -> SlotGridConfig:
    """Full-day grid: 24 slots, 00:00 through 24:00."""
    return SlotGridConfig()
