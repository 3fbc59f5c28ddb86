"""Ticket purchase and buyer ticket endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from festival.api.dependencies import get_app_settings, get_store, require_role
from festival.api.films import get_film_or_404
from festival.config import Settings
from festival.exceptions import NotFoundError, ValidationError
from festival.models.enums import FilmStatus, Role, TicketStatus
from festival.models.ticket import Ticket
from festival.schemas.film import FilmResponse
from festival.schemas.ticket import (
    CheckoutRequest,
    CheckoutResponse,
    TicketResponse,
    TicketWithFilm,
)
from festival.services.auth import AuthContext
from festival.services.store import EntityStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["tickets"])


def qr_code_for(ticket: Ticket) -> str:
    """Scannable code printed on a ticket."""
    return f"BHFF-{ticket.id}"


def enrich_ticket(store: EntityStore, ticket: Ticket) -> TicketWithFilm:
    """Attach the ticket's film (None if it no longer exists) and its code."""
    ticket_response = TicketWithFilm.model_validate(ticket)
    film = store.get_film_by_id(ticket.film_id)
    if film:
        ticket_response.film = FilmResponse.model_validate(film)
    ticket_response.qr_code = qr_code_for(ticket)
    return ticket_response


def get_buyer_tickets(store: EntityStore, buyer_id: str) -> list[TicketWithFilm]:
    """Buyer's tickets with film data, earliest screening first."""
    tickets = sorted(store.get_tickets_by_buyer(buyer_id), key=lambda t: t.session_time)
    return [enrich_ticket(store, ticket) for ticket in tickets]


@router.post("/checkout", response_model=CheckoutResponse)
def checkout(
    order: CheckoutRequest,
    context: Annotated[AuthContext, Depends(require_role(Role.BUYER))],
    store: Annotated[EntityStore, Depends(get_store)],
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    """Purchase tickets for an approved film. Payment is simulated."""
    film = get_film_or_404(store, order.film_id)
    if film.status != FilmStatus.APPROVED:
        raise ValidationError("Film is not available for ticketing")

    ticket = store.create_ticket(
        film_id=film.id,
        buyer_id=context.user.id,
        price=settings.ticket_unit_price,
        quantity=order.quantity,
        session_time=order.session_time,
        status=TicketStatus.CONFIRMED,
    )
    if order.payment_method:
        logger.info(f"Processing payment of ${ticket.total_price:.2f} via {order.payment_method}")
    logger.info(
        f"Ticket {ticket.id}: {order.quantity} x film {film.id} for buyer {context.user.id}"
    )

    return CheckoutResponse(
        ticket=TicketResponse.model_validate(ticket),
        film=FilmResponse.model_validate(film),
        total_price=ticket.total_price,
    )


@router.get("/tickets", response_model=list[TicketWithFilm])
def get_tickets(
    context: Annotated[AuthContext, Depends(require_role(Role.BUYER))],
    store: Annotated[EntityStore, Depends(get_store)],
):
    """Get the current buyer's tickets."""
    return get_buyer_tickets(store, context.user.id)


@router.get("/buyer/tickets", response_model=list[TicketWithFilm])
def get_buyer_portal_tickets(
    context: Annotated[AuthContext, Depends(require_role(Role.BUYER))],
    store: Annotated[EntityStore, Depends(get_store)],
):
    """Get the current buyer's tickets for the buyer portal."""
    return get_buyer_tickets(store, context.user.id)


@router.get("/buyer/tickets/{ticket_id}", response_model=TicketWithFilm)
def get_buyer_ticket(
    ticket_id: str,
    context: Annotated[AuthContext, Depends(require_role(Role.BUYER))],
    store: Annotated[EntityStore, Depends(get_store)],
):
    """Get one of the current buyer's tickets."""
    ticket = store.get_ticket_by_id(ticket_id)
    if not ticket or ticket.buyer_id != context.user.id:
        raise NotFoundError("Ticket not found")
    return enrich_ticket(store, ticket)
