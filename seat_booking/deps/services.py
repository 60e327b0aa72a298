# seat_booking/deps/services.py
"""
FastAPI dependencies for the adapters and services built in the app lifespan.
"""
from fastapi import Request

from seat_booking.core.exceptions import UpstreamUnavailableError
from seat_booking.services.reservation_service import ReservationService
from seat_booking.services.seat_cache import SeatCache
from seat_booking.services.seat_store import SqlSeatStore


def _from_state(request: Request, name: str):
    service = getattr(request.app.state, name, None)
    if service is None:
        raise UpstreamUnavailableError(f"{name} is not initialized")
    return service


def get_seat_store(request: Request) -> SqlSeatStore:
    return _from_state(request, "seat_store")


def get_seat_cache(request: Request) -> SeatCache:
    return _from_state(request, "seat_cache")


def get_reservation_service(request: Request) -> ReservationService:
    return _from_state(request, "reservation_service")


def get_redis(request: Request):
    return getattr(request.app.state, "redis", None)
