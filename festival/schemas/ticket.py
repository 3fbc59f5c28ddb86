"""Ticket and checkout schemas."""

from datetime import datetime

from pydantic import Field, field_validator

from festival.models.enums import TicketStatus
from festival.schemas.common import CamelModel, ensure_utc
from festival.schemas.film import FilmResponse


class CheckoutRequest(CamelModel):
    """Ticket purchase request."""

    film_id: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)
    session_time: datetime
    payment_method: str | None = Field(None, max_length=50)

    @field_validator("session_time")
    @classmethod
    def session_time_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)


class TicketResponse(CamelModel):
    """Ticket response."""

    id: str
    film_id: str
    buyer_id: str
    price: float
    quantity: int
    purchase_date: datetime
    status: TicketStatus
    session_time: datetime


class TicketWithFilm(TicketResponse):
    """Ticket enriched with its film and a scannable code."""

    film: FilmResponse | None = None
    qr_code: str = ""


class CheckoutResponse(CamelModel):
    """Result of a completed purchase."""

    ticket: TicketResponse
    film: FilmResponse
    total_price: float
    message: str = "Purchase successful!"
