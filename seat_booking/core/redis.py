"""
Async Redis client lifecycle (created once at startup, closed at shutdown)
"""
import logging
import time
from typing import Any, Dict, Optional
from urllib.parse import quote, unquote, urlparse

import redis.asyncio as aioredis

from seat_booking.core.config import (
    REDIS_SOCKET_CONNECT_TIMEOUT,
    REDIS_SOCKET_TIMEOUT,
    REDIS_URL,
)

logger = logging.getLogger(__name__)


def _parse_redis_url(url: str) -> str:
    """
    Normalize a REDIS_URL so the password is URL-encoded exactly once.
    Already percent-encoded passwords are unquoted and quoted again.
    """
    if not url:
        return url

    p = urlparse(url)
    if p.scheme not in ("redis", "rediss") or "@" not in p.netloc:
        return url

    password = p.password or ""
    if not password:
        return url

    host_port = p.netloc.split("@")[-1]
    password_quoted = quote(unquote(password), safe="")
    if p.username:
        netloc = f"{p.username}:{password_quoted}@{host_port}"
    else:
        netloc = f":{password_quoted}@{host_port}"

    normalized = f"{p.scheme}://{netloc}{p.path or ''}"
    if p.query:
        normalized += f"?{p.query}"
    return normalized


def _redacted(url: str) -> str:
    return url.split("@")[-1] if "@" in url else url


async def create_redis(url: Optional[str] = None) -> aioredis.Redis:
    """Build the shared async Redis client and verify it with a PING."""
    url = _parse_redis_url(url or REDIS_URL)
    if not url:
        raise RuntimeError("REDIS_URL not set")

    client = aioredis.from_url(
        url,
        encoding="utf-8",
        decode_responses=True,
        socket_timeout=REDIS_SOCKET_TIMEOUT,
        socket_connect_timeout=REDIS_SOCKET_CONNECT_TIMEOUT,
        # SET NX is not idempotent; a resent acquire would see its own lock as taken
        retry_on_timeout=False,
        health_check_interval=30,
    )
    try:
        await client.ping()
    except Exception as exc:
        await client.aclose()
        msg = str(exc)
        if "WRONGPASS" in msg or "NOAUTH" in msg or "invalid username-password" in msg:
            logger.error("Redis auth failure: %s", msg)
            raise RuntimeError("Redis authentication failed. Check REDIS_URL credentials.") from exc
        logger.error("Redis ping/connect error: %s", msg)
        raise RuntimeError(f"Redis connection failed: {msg}") from exc

    logger.info("Connected to Redis at %s", _redacted(url))
    return client


async def close_redis(client: Optional[aioredis.Redis]) -> None:
    if client is None:
        return
    await client.aclose()
    logger.info("Redis connection closed")


async def health_check_redis(client: Optional[aioredis.Redis]) -> Dict[str, Any]:
    """
    Health check for Redis.
    Returns connection status and latency.
    """
    if client is None:
        return {"status": "unhealthy", "error": "Redis client is not initialized"}
    try:
        start = time.perf_counter()
        await client.ping()
        latency_ms = (time.perf_counter() - start) * 1000
        return {"status": "healthy", "latency_ms": round(latency_ms, 2)}
    except Exception as e:
        return {"status": "unhealthy", "error": str(e)}
