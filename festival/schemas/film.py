"""Film schemas."""

from datetime import datetime
from typing import Any

from pydantic import Field

from festival.models.enums import FilmStatus
from festival.schemas.common import CamelModel

NULLABLE_FILM_FIELDS = frozenset({"trailer_url", "poster_url"})


class FilmCreate(CamelModel):
    """Submit a new film. Status is always set by the server."""

    title: str = Field(..., min_length=1, max_length=255)
    director: str = Field(..., min_length=1, max_length=255)
    synopsis: str = Field(..., min_length=1)
    duration: int = Field(..., gt=0)
    genre: str = Field(..., min_length=1, max_length=100)
    trailer_url: str | None = Field(None, max_length=2048)
    poster_url: str | None = Field(None, max_length=2048)


class FilmUpdate(CamelModel):
    """Update a film. Unknown fields are ignored."""

    title: str | None = Field(None, min_length=1, max_length=255)
    director: str | None = Field(None, min_length=1, max_length=255)
    synopsis: str | None = Field(None, min_length=1)
    duration: int | None = Field(None, gt=0)
    genre: str | None = Field(None, min_length=1, max_length=100)
    trailer_url: str | None = Field(None, max_length=2048)
    poster_url: str | None = Field(None, max_length=2048)
    status: FilmStatus | None = None

    def to_updates(self) -> dict[str, Any]:
        """Fields the client actually sent; null only clears optional URLs."""
        return {
            key: value
            for key, value in self.model_dump(exclude_unset=True).items()
            if value is not None or key in NULLABLE_FILM_FIELDS
        }


class FilmStatusUpdate(CamelModel):
    """Admin review decision."""

    status: FilmStatus


class FilmResponse(CamelModel):
    """Film response."""

    id: str
    title: str
    director: str
    synopsis: str
    duration: int
    genre: str
    submitter_id: str
    status: FilmStatus
    submission_date: datetime
    trailer_url: str | None = None
    poster_url: str | None = None


class SalesStatsResponse(CamelModel):
    """Ticket sales for a film."""

    total_tickets_sold: int = 0
    total_revenue: float = 0.0


class FilmWithStats(FilmResponse):
    """Film enriched with its ticket sales."""

    stats: SalesStatsResponse = Field(default_factory=SalesStatsResponse)


class SubmitterSummary(CamelModel):
    """Public identity of a film's submitter."""

    id: str
    name: str
    email: str


class AdminFilmResponse(FilmWithStats):
    """Film with submitter identity and sales, for the admin view."""

    submitter: SubmitterSummary | None = None
