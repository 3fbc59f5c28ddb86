"""Ticket sales statistics for films and the festival as a whole."""

import math
from collections import Counter
from dataclasses import dataclass, field

from festival.models.enums import FilmStatus
from festival.models.film import Film
from festival.models.ticket import Ticket
from festival.services.store import EntityStore

TOP_FILMS_LIMIT = 5


@dataclass
class SalesStats:
    """Tickets sold and revenue over a set of tickets."""

    total_tickets_sold: int = 0
    total_revenue: float = 0.0

    @classmethod
    def from_tickets(cls, tickets: list[Ticket]) -> "SalesStats":
        return cls(
            total_tickets_sold=sum(t.quantity for t in tickets),
            total_revenue=sum(t.total_price for t in tickets),
        )


@dataclass
class FestivalStats:
    """Festival-wide aggregates for the admin dashboard."""

    film_counts: dict[str, int]
    total_sold: int
    total_revenue: float
    average_tickets_per_film: int
    genres: dict[str, int]
    top_films: list[tuple[Film, float]] = field(default_factory=list)


def film_sales(store: EntityStore, film_id: str) -> SalesStats:
    """Aggregate ticket sales for one film."""
    return SalesStats.from_tickets(store.get_tickets_by_film(film_id))


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def festival_stats(store: EntityStore) -> FestivalStats:
    """Compute film counts by status, ticket totals, genre counts and top films.

    Only tickets for existing films are counted. Top films are ranked by
    revenue, highest first, keeping submission order among ties.
    """
    films = store.get_films()
    tickets_by_film = {film.id: store.get_tickets_by_film(film.id) for film in films}
    all_tickets = [t for tickets in tickets_by_film.values() for t in tickets]

    statuses = Counter(film.status for film in films)
    film_counts = {"total": len(films)}
    film_counts.update({status.value: statuses.get(status, 0) for status in FilmStatus})

    overall = SalesStats.from_tickets(all_tickets)
    average = _round_half_up(overall.total_tickets_sold / len(films)) if films else 0

    revenues = [
        (film, SalesStats.from_tickets(tickets_by_film[film.id]).total_revenue) for film in films
    ]
    top_films = sorted(revenues, key=lambda pair: pair[1], reverse=True)[:TOP_FILMS_LIMIT]

    return FestivalStats(
        film_counts=film_counts,
        total_sold=overall.total_tickets_sold,
        total_revenue=overall.total_revenue,
        average_tickets_per_film=average,
        genres=dict(Counter(film.genre for film in films)),
        top_films=top_films,
    )
