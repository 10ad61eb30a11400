# turfbook/services/slots/redis_store.py
"""
Redis storage for booked hours.

Key format: slots:booked:{venue_id}:{date}
Value: Set of booked start hours ("8", "9", ...).

Sentinel: "__empty__" marks "known day, nothing booked" so that a miss
(key absent) can be told apart from an empty day.
"""

import logging
from datetime import date, datetime
from typing import Any, Iterable

from redis import Redis

from ...schemas.slots import TimeSlot
from .calculator import generate_daily_slots, normalize_booked_hours
from .config import SlotGridConfig, get_slot_grid_config

logger = logging.getLogger(__name__)

EMPTY_SENTINEL = "__empty__"


class BookedHoursStore:
    """Redis wrapper holding the booked-hour set of each venue/day."""

    KEY_PREFIX = "slots:booked"

    def __init__(self, redis: Redis, config: SlotGridConfig | None = None):
        self.redis = redis
        self.config = config or get_slot_grid_config()

    def _key(self, venue_id: Any, dt: date) -> str:
        return f"{self.KEY_PREFIX}:{venue_id}:{dt.isoformat()}"

    def _expire_at(self, dt: date) -> int:
        end_of_day = datetime.combine(dt, datetime.max.time())
        return int(end_of_day.timestamp()) + self.config.expire_buffer_seconds

    # ── Write ────────────────────────────────────────────────────────────

    def store_day(self, venue_id: Any, dt: date, hours: Iterable[int]) -> None:
        """
        Replace the booked hours of a day.

        Empty hours → sentinel is stored.
        """
        key = self._key(venue_id, dt)
        members = [str(h) for h in sorted(normalize_booked_hours(hours))]

        pipe = self.redis.pipeline()
        pipe.delete(key)
        pipe.sadd(key, *(members or [EMPTY_SENTINEL]))
        pipe.expireat(key, self._expire_at(dt))
        pipe.execute()

    def mark_booked(self, venue_id: Any, dt: date, hours: Iterable[int]) -> None:
        """Add hours to the day's booked set."""
        members = [str(h) for h in sorted(normalize_booked_hours(hours))]
        if not members:
            return

        key = self._key(venue_id, dt)
        pipe = self.redis.pipeline()
        pipe.srem(key, EMPTY_SENTINEL)
        pipe.sadd(key, *members)
        pipe.expireat(key, self._expire_at(dt))
        pipe.execute()
        logger.info("Booked %s for venue=%s date=%s", members, venue_id, dt.isoformat())

    def release(self, venue_id: Any, dt: date, hours: Iterable[int]) -> None:
        """Remove hours from the day's booked set (cancellation)."""
        members = [str(h) for h in sorted(normalize_booked_hours(hours))]
        if not members:
            return

        key = self._key(venue_id, dt)
        pipe = self.redis.pipeline()
        pipe.srem(key, *members)
        pipe.scard(key)
        _, remaining = pipe.execute()

        if remaining == 0:
            # Keep the day known after the last booking is released
            self.store_day(venue_id, dt, [])
        logger.info("Released %s for venue=%s date=%s", members, venue_id, dt.isoformat())

    def invalidate(self, venue_id: Any, dt: date) -> None:
        self.redis.delete(self._key(venue_id, dt))

    # ── Read ─────────────────────────────────────────────────────────────

    def get_booked_hours(self, venue_id: Any, dt: date) -> frozenset[int] | None:
        """
        Booked hours of a day.

        Returns:
            Set of hours, or None on cache miss.
        """
        key = self._key(venue_id, dt)
        if not self.redis.exists(key):
            return None

        sentinels = (EMPTY_SENTINEL, EMPTY_SENTINEL.encode())
        members = self.redis.smembers(key)
        return normalize_booked_hours(m for m in members if m not in sentinels)


def load_daily_slots(
    store: BookedHoursStore,
    venue_id: Any,
    dt: date,
    base_price: Any,
) -> list[TimeSlot]:
    """Slot grid for a venue/day with availability taken from the store."""
    booked = store.get_booked_hours(venue_id, dt)
    if booked is None:
        logger.debug("No booked-hour data for venue=%s date=%s", venue_id, dt.isoformat())
        booked = frozenset()
    return generate_daily_slots(dt, base_price, booked, store.config)
