"""Admin statistics schemas."""

from festival.schemas.common import CamelModel
from festival.schemas.film import FilmResponse


class FilmCounts(CamelModel):
    total: int
    pending: int
    approved: int
    rejected: int


class TicketTotals(CamelModel):
    total_sold: int
    total_revenue: float
    average_tickets_per_film: int


class FilmWithRevenue(FilmResponse):
    revenue: float = 0.0


class AdminStatsResponse(CamelModel):
    """Festival-wide statistics."""

    films: FilmCounts
    tickets: TicketTotals
    genres: dict[str, int]
    top_films: list[FilmWithRevenue]
