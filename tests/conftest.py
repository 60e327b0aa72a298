"""
Shared fixtures: a SQLite database seeded with a few seats and an in-memory
stand-in for the Redis key-value adapter with controllable time.
"""
from typing import Dict, Optional, Set, Tuple

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from seat_booking.core.exceptions import UpstreamUnavailableError
from seat_booking.database import models
from seat_booking.database.database import Base
from seat_booking.main import create_app
from seat_booking.services.lock_service import SeatLock
from seat_booking.services.reservation_service import ReservationService
from seat_booking.services.seat_cache import SeatCache
from seat_booking.services.seat_store import SqlSeatStore

LOCK_TTL_MS = 100_000
CACHE_TTL_SECONDS = 300


class FakeClock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class InMemoryKeyValueStore:
    """
    Same interface as RedisKeyValueStore, plus ttl/exists/put for inspection
    and setup. No awaits happen between the existence check and the write, so
    set_if_absent is atomic on the event loop.
    """

    def __init__(self, clock: FakeClock):
        self._clock = clock
        self._data: Dict[str, Tuple[str, Optional[float]]] = {}
        self.failing: Set[str] = set()
        self.calls = []

    def _check(self, op: str, key: str) -> None:
        self.calls.append((op, key))
        if op in self.failing:
            raise UpstreamUnavailableError("Key-value store unavailable")

    def _live(self, key: str) -> Optional[Tuple[str, Optional[float]]]:
        entry = self._data.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if expires_at is not None and expires_at <= self._clock():
            del self._data[key]
            return None
        return entry

    async def set_if_absent(self, key: str, value: str, ttl_ms: int) -> bool:
        self._check("set_if_absent", key)
        if self._live(key) is not None:
            return False
        self._data[key] = (value, self._clock() + ttl_ms / 1000)
        return True

    async def get(self, key: str) -> Optional[str]:
        self._check("get", key)
        entry = self._live(key)
        return entry[0] if entry else None

    async def set(self, key: str, value: str, ttl_seconds: Optional[int] = None) -> None:
        self._check("set", key)
        expires_at = self._clock() + ttl_seconds if ttl_seconds is not None else None
        self._data[key] = (value, expires_at)

    async def delete(self, key: str) -> None:
        self._check("delete", key)
        self._data.pop(key, None)

    async def delete_if_value(self, key: str, value: str) -> bool:
        self._check("delete_if_value", key)
        entry = self._live(key)
        if entry is None or entry[0] != value:
            return False
        del self._data[key]
        return True

    async def ttl(self, key: str) -> int:
        entry = self._live(key)
        if entry is None:
            return -2
        if entry[1] is None:
            return -1
        return int(entry[1] - self._clock())

    def exists(self, key: str) -> bool:
        return self._live(key) is not None

    def put(self, key: str, value: str) -> None:
        self._data[key] = (value, None)


class CountingSeatStore(SqlSeatStore):
    def __init__(self, session_factory):
        super().__init__(session_factory)
        self.counts = {"query_screen_seats": 0, "query_one_seat": 0, "update_seat_status": 0}

    async def query_screen_seats(self, screen_id):
        self.counts["query_screen_seats"] += 1
        return await super().query_screen_seats(screen_id)

    async def query_one_seat(self, screen_id, seat_id):
        self.counts["query_one_seat"] += 1
        return await super().query_one_seat(screen_id, seat_id)

    async def update_seat_status(self, screen_id, seat_id, new_status):
        self.counts["update_seat_status"] += 1
        return await super().update_seat_status(screen_id, seat_id, new_status)


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'seats.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    db = factory()
    movie = models.Movie(id=1, title="The Great Adventure", genre="Adventure", duration=120)
    screen = models.Screen(id=5, hall="Hall 1")
    screen.seats = [
        models.Seat(seat_id="A1", status="available"),
        models.Seat(seat_id="A2", status="available"),
        models.Seat(seat_id="B1", status="reserved"),
    ]
    movie.screens.append(screen)
    db.add(movie)
    db.add(models.Movie(id=2, title="Comedy Night", genre="Comedy", duration=95))
    db.commit()
    db.close()

    yield factory
    engine.dispose()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def kv_store(clock):
    return InMemoryKeyValueStore(clock)


@pytest.fixture
def seat_store(session_factory):
    return CountingSeatStore(session_factory)


@pytest.fixture
def seat_cache(kv_store, seat_store):
    return SeatCache(kv_store, seat_store, ttl_seconds=CACHE_TTL_SECONDS)


@pytest.fixture
def seat_lock(kv_store):
    return SeatLock(kv_store, ttl_ms=LOCK_TTL_MS)


@pytest.fixture
def reservation_service(seat_lock, seat_cache, seat_store):
    return ReservationService(seat_lock, seat_cache, seat_store, strict_release=True)


@pytest.fixture
def db_status(session_factory):
    """Read a seat status straight from the database."""

    def read(screen_id, seat_id):
        db = session_factory()
        try:
            seat = db.query(models.Seat).filter_by(screen_id=screen_id, seat_id=seat_id).first()
            return seat.status if seat is not None else None
        finally:
            db.close()

    return read


@pytest.fixture
def app(seat_store, seat_cache, reservation_service):
    app = create_app()
    app.state.redis = None
    app.state.seat_store = seat_store
    app.state.seat_cache = seat_cache
    app.state.reservation_service = reservation_service
    return app


@pytest.fixture
def client(app):
    # no context manager: the lifespan (real Redis connection) is not started
    return TestClient(app, raise_server_exceptions=False)
