"""
Key-value store adapter over an async Redis client.

Only the primitives the lock and the caches need are exposed. Every Redis
failure is re-raised as UpstreamUnavailableError so callers never have to know
about redis exceptions.
"""
import logging
from typing import Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from seat_booking.core.exceptions import UpstreamUnavailableError

logger = logging.getLogger(__name__)

# Delete the key only while it still holds the expected value
DELETE_IF_VALUE_LUA = """
if redis.call('GET', KEYS[1]) == ARGV[1] then
    return redis.call('DEL', KEYS[1])
end
return 0
"""


class RedisKeyValueStore:
    def __init__(self, redis: Redis):
        self._redis = redis

    async def set_if_absent(self, key: str, value: str, ttl_ms: int) -> bool:
        """
        SET key value NX PX ttl_ms, as a single atomic command.

        A timeout can hide a SET that Redis already applied. In that case the
        key is read back and the acquire counts as won when it holds `value`.
        """
        try:
            result = await self._redis.set(key, value, nx=True, px=ttl_ms)
        except RedisTimeoutError as e:
            logger.warning(f"Redis SET NX timed out for {key}, checking holder")
            if await self._holds(key, value):
                return True
            raise UpstreamUnavailableError("Key-value store unavailable") from e
        except RedisError as e:
            logger.error(f"Redis SET NX failed for {key}: {e}")
            raise UpstreamUnavailableError("Key-value store unavailable") from e
        return bool(result)

    async def _holds(self, key: str, value: str) -> bool:
        try:
            return await self._redis.get(key) == value
        except RedisError as e:
            logger.error(f"Redis GET failed for {key}: {e}")
            return False

    async def get(self, key: str) -> Optional[str]:
        try:
            return await self._redis.get(key)
        except RedisError as e:
            logger.error(f"Redis GET failed for {key}: {e}")
            raise UpstreamUnavailableError("Key-value store unavailable") from e

    async def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> None:
        """Plain SET; expiry only when ttl_seconds is given."""
        try:
            if ttl_seconds is None:
                await self._redis.set(key, value)
            else:
                await self._redis.set(key, value, ex=ttl_seconds)
        except RedisError as e:
            logger.error(f"Redis SET failed for {key}: {e}")
            raise UpstreamUnavailableError("Key-value store unavailable") from e

    async def delete(self, key: str) -> None:
        try:
            await self._redis.delete(key)
        except RedisError as e:
            logger.error(f"Redis DEL failed for {key}: {e}")
            raise UpstreamUnavailableError("Key-value store unavailable") from e

    async def delete_if_value(self, key: str, value: str) -> bool:
        try:
            deleted = await self._redis.eval(DELETE_IF_VALUE_LUA, 1, key, value)
        except RedisError as e:
            logger.error(f"Redis compare-and-delete failed for {key}: {e}")
            raise UpstreamUnavailableError("Key-value store unavailable") from e
        return int(deleted) == 1
