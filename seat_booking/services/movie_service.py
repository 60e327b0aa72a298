"""
Movie and screen listings. Plain reads, no caching or locking involved.
"""
import logging
from typing import Any, Dict, List

from seat_booking.services.seat_store import SqlSeatStore

logger = logging.getLogger(__name__)


async def list_movies(seat_store: SqlSeatStore) -> List[Dict[str, Any]]:
    movies = await seat_store.list_movies()
    return [
        {
            "id": m.id,
            "title": m.title,
            "genre": m.genre,
            "duration": m.duration,
            "release_date": m.release_date.isoformat() if m.release_date is not None else None,
        }
        for m in movies
    ]


async def list_screens_for_movie(seat_store: SqlSeatStore, movie_id: int) -> List[Dict[str, Any]]:
    screens = await seat_store.list_screens(movie_id)
    logger.debug(f"Found {len(screens)} screen(s) for movie {movie_id}")
    return [
        {
            "id": s.id,
            "movie_id": s.movie_id,
            "hall": s.hall,
            "start_time": s.start_time.isoformat() if s.start_time is not None else None,
        }
        for s in screens
    ]
