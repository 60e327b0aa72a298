import logging

from seat_booking.services.kv_store import RedisKeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TTL_MS = 100_000


def lock_key(screen_id: int, seat_id: str) -> str:
    """Generate consistent Redis key for a seat lock."""
    return f"lock:seat:{screen_id}:{seat_id}"


class SeatLock:
    """
    Per-seat mutual exclusion on top of SET NX PX.

    Acquisition never waits: a contended seat is reported as not acquired
    right away. Every lock is created with an expiry so a crashed holder
    frees the seat on its own.
    """

    def __init__(self, store: RedisKeyValueStore, ttl_ms: int = DEFAULT_LOCK_TTL_MS):
        if ttl_ms <= 0:
            raise ValueError("ttl_ms must be positive")
        self._store = store
        self.ttl_ms = ttl_ms

    async def acquire(self, screen_id: int, seat_id: str, holder_id: str) -> bool:
        """
        Returns True when `holder_id` now owns the seat lock, False when another
        holder already does. UpstreamUnavailableError propagates, so an
        unreachable store never reads as an acquired lock.
        """
        key = lock_key(screen_id, seat_id)
        acquired = await self._store.set_if_absent(key, holder_id, self.ttl_ms)
        if acquired:
            logger.debug(f"Acquired lock {key} for {holder_id} (ttl={self.ttl_ms}ms)")
        else:
            logger.info(f"Lock {key} is held by another client; rejecting {holder_id}")
        return acquired

    async def release(self, screen_id: int, seat_id: str) -> None:
        """Unconditional delete of the lock key."""
        key = lock_key(screen_id, seat_id)
        await self._store.delete(key)
        logger.debug(f"Released lock {key}")

    async def release_if_held(self, screen_id: int, seat_id: str, holder_id: str) -> bool:
        """Delete the lock only while `holder_id` still owns it."""
        key = lock_key(screen_id, seat_id)
        released = await self._store.delete_if_value(key, holder_id)
        if released:
            logger.debug(f"Released lock {key} held by {holder_id}")
        else:
            logger.warning(f"Lock {key} no longer held by {holder_id} (expired or taken over); left untouched")
        return released
