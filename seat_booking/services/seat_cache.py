"""
Cache-aside reads for seat data.

Two kinds of entries live in Redis:
  seats:{screen_id}            JSON list of {"seat_id", "status"}, TTL bound
  seat:{screen_id}:{seat_id}   status string, TTL bound on read-through,
                               no expiry once written as "reserved"

The screen catalog entry is never touched by reservations. It refreshes when
its TTL runs out, so it can show a reserved seat as available for at most
`ttl_seconds`.
"""
import json
import logging
from typing import Any, Dict, List, Optional

from seat_booking.core.exceptions import ScreenSeatsNotFoundError
from seat_booking.database.models import SeatStatus
from seat_booking.services.kv_store import RedisKeyValueStore
from seat_booking.services.seat_store import SqlSeatStore

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL_SECONDS = 60 * 5

_KNOWN_STATUSES = {s.value for s in SeatStatus}


def screen_seats_key(screen_id: int) -> str:
    return f"seats:{screen_id}"


def seat_status_key(screen_id: int, seat_id: str) -> str:
    return f"seat:{screen_id}:{seat_id}"


class SeatCache:
    def __init__(
        self,
        store: RedisKeyValueStore,
        seat_store: SqlSeatStore,
        ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._store = store
        self._seat_store = seat_store
        self.ttl_seconds = ttl_seconds

    async def get_seats_for_screen(self, screen_id: int) -> List[Dict[str, Any]]:
        key = screen_seats_key(screen_id)
        cached = await self._store.get(key)
        if cached is not None:
            try:
                seats = json.loads(cached)
            except ValueError:
                seats = None
            if not isinstance(seats, list):
                logger.warning(f"Discarding unreadable cache entry {key}")
            else:
                logger.info(f"Seats for screen {screen_id} found in Redis.")
                return seats

        logger.info(f"Seats for screen {screen_id} not found in Redis. Fetching from database...")
        seats = await self._seat_store.query_screen_seats(screen_id)
        if not seats:
            raise ScreenSeatsNotFoundError()

        await self._store.set(key, json.dumps(seats), ttl_seconds=self.ttl_seconds)
        logger.info(f"Seats for screen {screen_id} cached in Redis.")
        return seats

    async def get_seat_status(self, screen_id: int, seat_id: str) -> Optional[str]:
        """
        Read-through lookup of one seat's status.
        Returns None when the seat does not exist in the database.
        """
        key = seat_status_key(screen_id, seat_id)
        status = await self._store.get(key)
        if status in _KNOWN_STATUSES:
            return status
        if status is not None:
            logger.warning(f"Ignoring unexpected cached status {status!r} for {key}")

        logger.info(f"Seat {seat_id} for screen {screen_id} not found in Redis. Fetching from database...")
        row = await self._seat_store.query_one_seat(screen_id, seat_id)
        if row is None:
            return None

        await self._store.set(key, row["status"], ttl_seconds=self.ttl_seconds)
        return row["status"]

    async def mark_reserved(self, screen_id: int, seat_id: str) -> None:
        """Write-through after a committed reservation; never expires."""
        await self._store.set(seat_status_key(screen_id, seat_id), SeatStatus.reserved.value)

    async def forget_seat_status(self, screen_id: int, seat_id: str) -> None:
        await self._store.delete(seat_status_key(screen_id, seat_id))
