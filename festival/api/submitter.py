"""Filmmaker portal endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from festival.api.dependencies import get_store, require_role
from festival.api.films import submit_film
from festival.models.enums import Role
from festival.schemas.film import FilmCreate, FilmResponse, FilmWithStats, SalesStatsResponse
from festival.services.auth import AuthContext
from festival.services.stats import film_sales
from festival.services.store import EntityStore

router = APIRouter(prefix="/api/submitter", tags=["submitter"])


@router.get("/films", response_model=list[FilmWithStats])
def get_my_films(
    context: Annotated[AuthContext, Depends(require_role(Role.SUBMITTER))],
    store: Annotated[EntityStore, Depends(get_store)],
):
    """Get the submitter's own films with ticket sales."""
    result = []
    for film in store.get_films(submitter_id=context.user.id):
        film_response = FilmWithStats.model_validate(film)
        film_response.stats = SalesStatsResponse.model_validate(film_sales(store, film.id))
        result.append(film_response)

    return result


@router.post("/films", response_model=FilmResponse, status_code=status.HTTP_201_CREATED)
def create_my_film(
    film_data: FilmCreate,
    context: Annotated[AuthContext, Depends(require_role(Role.SUBMITTER))],
    store: Annotated[EntityStore, Depends(get_store)],
):
    """Submit a new film from the filmmaker portal."""
    return submit_film(store, context.user, film_data)
