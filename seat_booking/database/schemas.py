# =========================================================
# Seat Booking Schemas (Pydantic v2)
# =========================================================
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ConfigModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# =========================================================
# Movie / Screen Schemas
# =========================================================
class MovieResponse(ConfigModel):
    id: int
    title: str
    genre: Optional[str] = None
    duration: Optional[int] = None
    release_date: Optional[datetime] = None


class ScreenResponse(ConfigModel):
    id: int
    movie_id: int
    hall: Optional[str] = None
    start_time: Optional[datetime] = None


# =========================================================
# Seat Schemas
# =========================================================
class SeatResponse(ConfigModel):
    seat_id: str
    status: str


class ReserveSeatRequest(BaseModel):
    """
    Request to reserve a single seat.
    Accepts both snake_case and the camelCase names used by the web client.
    """
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {"screenId": 5, "seatId": "A1", "clientId": "550e8400-e29b-41d4-a716-446655440000"}
        },
    )

    screen_id: int = Field(..., alias="screenId", description="Screen identifier")
    seat_id: str = Field(..., alias="seatId", min_length=1, max_length=10, description="Seat label, e.g. A1")
    client_id: str = Field(..., alias="clientId", min_length=1, description="Identifier of the reserving client")


class ReserveSeatResponse(BaseModel):
    """Responses use snake_case like every other body; camelCase is request-only."""
    message: str = "Seat reserved successfully"
    screen_id: int
    seat_id: str


class ErrorResponse(BaseModel):
    error: str
    code: str
    retryable: bool
