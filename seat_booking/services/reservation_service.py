"""
Single-seat reservation: lock, read status, validate, commit, release.

For one (screen_id, seat_id) the lock lets at most one request run the
read/validate/commit sequence at a time. Losers are rejected immediately with
SeatLockConflictError instead of waiting; callers retry if they want to.

Commit writes the database first and the cache second. The database is the
source of truth, so a failed database write leaves the cache untouched, and a
failed cache write after a successful database write only costs a cache miss.

The lock is released in a `finally` block once it has been acquired, whatever
happens in between.
"""
import logging
from typing import Any, Dict

from seat_booking.core.exceptions import (
    SeatAlreadyReservedError,
    SeatLockConflictError,
    SeatNotFoundError,
    UpstreamUnavailableError,
)
from seat_booking.database.models import SeatStatus
from seat_booking.services.lock_service import SeatLock
from seat_booking.services.seat_cache import SeatCache
from seat_booking.services.seat_store import SqlSeatStore

logger = logging.getLogger(__name__)


class ReservationService:
    def __init__(
        self,
        lock: SeatLock,
        cache: SeatCache,
        seat_store: SqlSeatStore,
        strict_release: bool = True,
    ):
        self._lock = lock
        self._cache = cache
        self._seat_store = seat_store
        self._strict_release = strict_release

    async def reserve(self, screen_id: int, seat_id: str, client_id: str) -> Dict[str, Any]:
        """
        Reserve one seat for `client_id`.

        Raises:
            SeatLockConflictError: another client is reserving this seat right now
            SeatNotFoundError: no such seat on this screen
            SeatAlreadyReservedError: the seat is already taken
            UpstreamUnavailableError: Redis or the database failed
        """
        if not await self._lock.acquire(screen_id, seat_id, client_id):
            raise SeatLockConflictError()

        try:
            status = await self._cache.get_seat_status(screen_id, seat_id)
            if status is None:
                logger.info(f"Reservation rejected: seat {seat_id} on screen {screen_id} does not exist")
                raise SeatNotFoundError()
            if status == SeatStatus.reserved.value:
                logger.info(f"Reservation rejected: seat {seat_id} on screen {screen_id} already reserved")
                raise SeatAlreadyReservedError()

            await self._commit(screen_id, seat_id)
            logger.info(f"Seat {seat_id} on screen {screen_id} reserved by {client_id}")
            return {"message": "Seat reserved successfully", "screen_id": screen_id, "seat_id": seat_id}
        finally:
            await self._release(screen_id, seat_id, client_id)

    async def _commit(self, screen_id: int, seat_id: str) -> None:
        try:
            await self._seat_store.update_seat_status(screen_id, seat_id, SeatStatus.reserved.value)
        except SeatAlreadyReservedError:
            # cache said available but the database disagrees; bring the cache in line
            await self._refresh_cache(screen_id, seat_id)
            raise

        try:
            await self._cache.mark_reserved(screen_id, seat_id)
        except UpstreamUnavailableError:
            logger.error(
                f"Seat {seat_id} on screen {screen_id} committed but cache write failed; dropping cached status",
                exc_info=True,
            )
            try:
                await self._cache.forget_seat_status(screen_id, seat_id)
            except UpstreamUnavailableError:
                logger.error(f"Could not drop cached status for seat {seat_id} on screen {screen_id}")

    async def _refresh_cache(self, screen_id: int, seat_id: str) -> None:
        try:
            await self._cache.mark_reserved(screen_id, seat_id)
        except UpstreamUnavailableError:
            logger.error(f"Could not refresh cached status for seat {seat_id} on screen {screen_id}")

    async def _release(self, screen_id: int, seat_id: str, client_id: str) -> None:
        # A failed release must not hide the reservation outcome; the lock expiry frees the seat.
        try:
            if self._strict_release:
                await self._lock.release_if_held(screen_id, seat_id, client_id)
            else:
                await self._lock.release(screen_id, seat_id)
        except UpstreamUnavailableError:
            logger.error(
                f"Failed to release lock for seat {seat_id} on screen {screen_id}; "
                f"it expires in {self._lock.ttl_ms}ms"
            )
