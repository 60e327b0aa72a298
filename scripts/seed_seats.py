"""Seed the database with example movies, screens and seats.

Run from the repository root:
python scripts/seed_seats.py
"""
from datetime import datetime, timedelta

from seat_booking.database import models
from seat_booking.database.database import Base, SessionLocal, engine

ROWS = "ABCDE"
SEATS_PER_ROW = 10


def seed():
    # ensure tables exist
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        existing = db.query(models.Movie).count()
        if existing:
            print(f"DB already has {existing} movie(s); skipping seeding.")
            return

        samples = [
            {"title": "The Great Adventure", "genre": "Adventure", "duration": 120},
            {"title": "Comedy Night", "genre": "Comedy", "duration": 95},
            {"title": "Sci-Fi Saga", "genre": "Sci-Fi", "duration": 140},
        ]
        first_show = datetime.now().replace(minute=0, second=0, microsecond=0) + timedelta(days=1)
        for i, s in enumerate(samples):
            movie = models.Movie(**s)
            for j, hall in enumerate(("Hall 1", "Hall 2")):
                screen = models.Screen(hall=hall, start_time=first_show + timedelta(hours=3 * i + j))
                screen.seats = [
                    models.Seat(seat_id=f"{row}{num}", status=models.SeatStatus.available.value)
                    for row in ROWS
                    for num in range(1, SEATS_PER_ROW + 1)
                ]
                movie.screens.append(screen)
            db.add(movie)
        db.commit()
        print("Seeded movies, screens and seats successfully.")
    finally:
        db.close()


if __name__ == '__main__':
    seed()
