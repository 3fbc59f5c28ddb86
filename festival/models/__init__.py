"""SQLAlchemy models."""

from festival.models.auth_session import AuthSession
from festival.models.enums import FilmStatus, Permission, Role, TicketStatus
from festival.models.film import Film
from festival.models.ticket import Ticket
from festival.models.user import User

__all__ = [
    "User",
    "Film",
    "Ticket",
    "AuthSession",
    "Role",
    "Permission",
    "FilmStatus",
    "TicketStatus",
]
