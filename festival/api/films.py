"""Film API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from festival.api.dependencies import get_auth_context, get_store, require_role
from festival.exceptions import AuthorizationError, NotFoundError
from festival.models.enums import FilmStatus, Permission, Role
from festival.models.film import EDITABLE_FILM_FIELDS, Film
from festival.models.user import User
from festival.schemas.film import FilmCreate, FilmResponse, FilmUpdate
from festival.services.auth import AuthContext
from festival.services.store import EntityStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/films", tags=["films"])


def get_film_or_404(store: EntityStore, film_id: str) -> Film:
    """Get a film by id or raise NotFoundError."""
    film = store.get_film_by_id(film_id)
    if not film:
        raise NotFoundError("Film not found")
    return film


def submit_film(store: EntityStore, submitter: User, film_data: FilmCreate) -> Film:
    """Create a film owned by the submitter. New films always start pending."""
    film = store.create_film(
        **film_data.model_dump(),
        submitter_id=submitter.id,
        status=FilmStatus.PENDING,
    )
    logger.info(f"Film {film.id} submitted by {submitter.id}")
    return film


def update_film(
    store: EntityStore, context: AuthContext, film: Film, film_data: FilmUpdate
) -> Film:
    """Apply an edit, stripping status unless the caller may change it."""
    may_change_status = context.can(Permission.FILMS_STATUS)
    updates = {
        key: value
        for key, value in film_data.to_updates().items()
        if key in EDITABLE_FILM_FIELDS or (key == "status" and may_change_status)
    }

    updated = store.update_film(film.id, updates)
    if updated is None:
        raise NotFoundError("Film not found")

    if updated.status != film.status:
        logger.info(f"Film {film.id} status {film.status} -> {updated.status} by {context.user.id}")
    return updated


@router.get("", response_model=list[FilmResponse])
def get_films(
    store: Annotated[EntityStore, Depends(get_store)],
    film_status: Annotated[FilmStatus | None, Query(alias="status")] = None,
    submitter_id: Annotated[str | None, Query(alias="submitterId")] = None,
):
    """Get all films, optionally filtered by status and submitter."""
    return store.get_films(status=film_status, submitter_id=submitter_id)


@router.post("", response_model=FilmResponse, status_code=status.HTTP_201_CREATED)
def create_film(
    film_data: FilmCreate,
    context: Annotated[AuthContext, Depends(require_role(Role.SUBMITTER))],
    store: Annotated[EntityStore, Depends(get_store)],
):
    """Submit a new film (submitters only)."""
    return submit_film(store, context.user, film_data)


@router.get("/{film_id}", response_model=FilmResponse)
def get_film(
    film_id: str,
    store: Annotated[EntityStore, Depends(get_store)],
):
    """Get a specific film."""
    return get_film_or_404(store, film_id)


@router.patch("/{film_id}", response_model=FilmResponse)
def patch_film(
    film_id: str,
    film_data: FilmUpdate,
    context: Annotated[AuthContext, Depends(get_auth_context)],
    store: Annotated[EntityStore, Depends(get_store)],
):
    """Update a film (admin, or the submitter who owns it)."""
    film = get_film_or_404(store, film_id)

    is_owner = film.submitter_id == context.user.id and context.can(Permission.FILMS_WRITE_OWN)
    if not (context.can(Permission.FILMS_WRITE) or is_owner):
        raise AuthorizationError("Insufficient permissions")

    return update_film(store, context, film, film_data)
