# seat_booking/database/models.py
import enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from seat_booking.database.database import Base


class SeatStatus(str, enum.Enum):
    available = "available"
    reserved = "reserved"


# ==========================
# MOVIE MODEL
# ==========================
class Movie(Base):
    __tablename__ = "movies"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(150), nullable=False)
    genre = Column(String(100), nullable=True)
    duration = Column(Integer, nullable=True)
    release_date = Column(DateTime, nullable=True)

    screens = relationship("Screen", back_populates="movie", cascade="all, delete")


# ==========================
# SCREEN MODEL (one screening of a movie)
# ==========================
class Screen(Base):
    __tablename__ = "screens"

    id = Column(Integer, primary_key=True, index=True)
    movie_id = Column(Integer, ForeignKey("movies.id"), nullable=False, index=True)
    hall = Column(String(50), nullable=True)
    start_time = Column(DateTime, nullable=True)

    movie = relationship("Movie", back_populates="screens")
    seats = relationship("Seat", back_populates="screen", cascade="all, delete")


# ==========================
# SEAT MODEL - keyed by (screen_id, seat_id)
# ==========================
class Seat(Base):
    __tablename__ = "seats"

    screen_id = Column(Integer, ForeignKey("screens.id"), primary_key=True)
    seat_id = Column(String(10), primary_key=True)
    status = Column(String(20), nullable=False, default=SeatStatus.available.value)

    screen = relationship("Screen", back_populates="seats")
