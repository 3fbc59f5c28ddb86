"""Admin portal endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from festival.api.dependencies import get_store, require_permission, require_role
from festival.api.films import get_film_or_404, update_film
from festival.models.enums import FilmStatus, Permission, Role
from festival.schemas.film import (
    AdminFilmResponse,
    FilmResponse,
    FilmStatusUpdate,
    FilmUpdate,
    SalesStatsResponse,
    SubmitterSummary,
)
from festival.schemas.stats import (
    AdminStatsResponse,
    FilmCounts,
    FilmWithRevenue,
    TicketTotals,
)
from festival.services.auth import AuthContext
from festival.services.stats import festival_stats, film_sales
from festival.services.store import EntityStore

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/films", response_model=list[AdminFilmResponse])
def get_all_films(
    context: Annotated[AuthContext, Depends(require_role(Role.ADMIN))],
    store: Annotated[EntityStore, Depends(get_store)],
    film_status: Annotated[FilmStatus | None, Query(alias="status")] = None,
):
    """Get all films with submitter identity and ticket sales."""
    result = []
    for film in store.get_films(status=film_status):
        film_response = AdminFilmResponse.model_validate(film)
        film_response.stats = SalesStatsResponse.model_validate(film_sales(store, film.id))

        submitter = store.get_user_by_id(film.submitter_id)
        if submitter:
            film_response.submitter = SubmitterSummary.model_validate(submitter)

        result.append(film_response)

    return result


@router.patch("/films/{film_id}", response_model=FilmResponse)
def review_film(
    film_id: str,
    review: FilmStatusUpdate,
    context: Annotated[AuthContext, Depends(require_role(Role.ADMIN))],
    store: Annotated[EntityStore, Depends(get_store)],
):
    """Approve or reject a film."""
    film = get_film_or_404(store, film_id)
    return update_film(store, context, film, FilmUpdate(status=review.status))


@router.get("/stats", response_model=AdminStatsResponse)
def get_stats(
    context: Annotated[AuthContext, Depends(require_permission(Permission.REPORTS_READ))],
    store: Annotated[EntityStore, Depends(get_store)],
):
    """Get festival statistics."""
    stats = festival_stats(store)

    top_films = []
    for film, revenue in stats.top_films:
        film_response = FilmWithRevenue.model_validate(film)
        film_response.revenue = revenue
        top_films.append(film_response)

    return AdminStatsResponse(
        films=FilmCounts(**stats.film_counts),
        tickets=TicketTotals(
            total_sold=stats.total_sold,
            total_revenue=stats.total_revenue,
            average_tickets_per_film=stats.average_tickets_per_film,
        ),
        genres=stats.genres,
        top_films=top_films,
    )
