"""
Durable store adapter: seat rows and catalog listings through SQLAlchemy.

Session work is blocking, so every public method hands it to the threadpool
and the event loop stays free while the database answers.
"""
import logging
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from seat_booking.core.exceptions import (
    InvalidSeatTransitionError,
    SeatAlreadyReservedError,
    SeatNotFoundError,
    UpstreamUnavailableError,
)
from seat_booking.database import models
from seat_booking.database.models import SeatStatus

logger = logging.getLogger(__name__)


def _seat_row(seat: models.Seat) -> Dict[str, Any]:
    return {"seat_id": seat.seat_id, "status": seat.status}


class SqlSeatStore:
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    async def _run(self, fn: Callable[[Session], Any]) -> Any:
        def work():
            db = self._session_factory()
            try:
                return fn(db)
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Database error: {e}", exc_info=True)
                raise UpstreamUnavailableError("Database unavailable") from e
            finally:
                db.close()

        return await run_in_threadpool(work)

    # -------------------------
    # Seats
    # -------------------------
    async def query_screen_seats(self, screen_id: int) -> List[Dict[str, Any]]:
        def fn(db: Session):
            seats = (
                db.query(models.Seat)
                .filter(models.Seat.screen_id == screen_id)
                .order_by(models.Seat.seat_id)
                .all()
            )
            return [_seat_row(s) for s in seats]

        return await self._run(fn)

    async def query_one_seat(self, screen_id: int, seat_id: str) -> Optional[Dict[str, Any]]:
        def fn(db: Session):
            seat = (
                db.query(models.Seat)
                .filter(models.Seat.screen_id == screen_id, models.Seat.seat_id == seat_id)
                .first()
            )
            return _seat_row(seat) if seat is not None else None

        return await self._run(fn)

    async def update_seat_status(self, screen_id: int, seat_id: str, new_status: str) -> None:
        """
        Conditionally move a seat to `new_status`.

        The UPDATE never matches a reserved row, so a reserved seat cannot be
        moved back to available and two commits cannot both reserve it.
        Raises SeatNotFoundError, SeatAlreadyReservedError or
        InvalidSeatTransitionError when nothing was updated.
        """
        new_status = SeatStatus(new_status).value

        def fn(db: Session):
            updated = (
                db.query(models.Seat)
                .filter(
                    models.Seat.screen_id == screen_id,
                    models.Seat.seat_id == seat_id,
                    models.Seat.status != SeatStatus.reserved.value,
                )
                .update({models.Seat.status: new_status}, synchronize_session=False)
            )
            if updated:
                db.commit()
                return

            db.rollback()
            seat = (
                db.query(models.Seat)
                .filter(models.Seat.screen_id == screen_id, models.Seat.seat_id == seat_id)
                .first()
            )
            if seat is None:
                raise SeatNotFoundError()
            if new_status == SeatStatus.reserved.value:
                raise SeatAlreadyReservedError()
            raise InvalidSeatTransitionError(
                f"Seat {seat_id} on screen {screen_id} is reserved and cannot become {new_status}"
            )

        await self._run(fn)

    # -------------------------
    # Catalog listings
    # -------------------------
    async def list_movies(self) -> List[models.Movie]:
        def fn(db: Session):
            movies = db.query(models.Movie).order_by(models.Movie.id).all()
            db.expunge_all()
            return movies

        return await self._run(fn)

    async def list_screens(self, movie_id: int) -> List[models.Screen]:
        def fn(db: Session):
            screens = (
                db.query(models.Screen)
                .filter(models.Screen.movie_id == movie_id)
                .order_by(models.Screen.id)
                .all()
            )
            db.expunge_all()
            return screens

        return await self._run(fn)
