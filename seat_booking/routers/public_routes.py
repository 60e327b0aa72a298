# seat_booking/routers/public_routes.py
import logging
from typing import List

from fastapi import APIRouter, Depends

from seat_booking.database import schemas
from seat_booking.deps.services import get_reservation_service, get_seat_cache, get_seat_store
from seat_booking.services import movie_service
from seat_booking.services.reservation_service import ReservationService
from seat_booking.services.seat_cache import SeatCache
from seat_booking.services.seat_store import SqlSeatStore

logger = logging.getLogger(__name__)

# Router: DO NOT include "/api" here, main.py mounts this router under "/api"
router = APIRouter(tags=["Public"])

_ERROR_RESPONSES = {
    404: {"model": schemas.ErrorResponse, "description": "Seat or screen does not exist"},
    503: {"model": schemas.ErrorResponse, "description": "Redis or database unavailable, retry later"},
}


# -------------------------
# GET /movies
# -------------------------
@router.get("/movies", response_model=List[schemas.MovieResponse])
async def list_movies(seat_store: SqlSeatStore = Depends(get_seat_store)):
    return await movie_service.list_movies(seat_store)


# -------------------------
# GET /screens/{movie_id}
# -------------------------
@router.get("/screens/{movie_id}", response_model=List[schemas.ScreenResponse])
async def list_screens(movie_id: int, seat_store: SqlSeatStore = Depends(get_seat_store)):
    return await movie_service.list_screens_for_movie(seat_store, movie_id)


# -------------------------
# GET /seats/{screen_id}
# -------------------------
@router.get("/seats/{screen_id}", response_model=List[schemas.SeatResponse], responses=_ERROR_RESPONSES)
async def get_seats(screen_id: int, seat_cache: SeatCache = Depends(get_seat_cache)):
    """
    Seats of a screen, served from Redis when cached.
    The listing may lag behind reservations by up to the cache TTL.
    """
    return await seat_cache.get_seats_for_screen(screen_id)


# -------------------------
# POST /seats/reserve
# -------------------------
@router.post(
    "/seats/reserve",
    response_model=schemas.ReserveSeatResponse,
    responses={
        **_ERROR_RESPONSES,
        409: {"model": schemas.ErrorResponse, "description": "Seat already reserved"},
        423: {"model": schemas.ErrorResponse, "description": "Seat is being reserved by another user, retry later"},
    },
)
async def reserve_seat(
    payload: schemas.ReserveSeatRequest,
    reservation_service: ReservationService = Depends(get_reservation_service),
):
    return await reservation_service.reserve(payload.screen_id, payload.seat_id, payload.client_id)
