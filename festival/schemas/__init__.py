"""Pydantic schemas for API requests and responses."""

from festival.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse, UserUpdate
from festival.schemas.common import ErrorResponse
from festival.schemas.film import (
    AdminFilmResponse,
    FilmCreate,
    FilmResponse,
    FilmStatusUpdate,
    FilmUpdate,
    FilmWithStats,
)
from festival.schemas.stats import AdminStatsResponse
from festival.schemas.ticket import CheckoutRequest, CheckoutResponse, TicketWithFilm

__all__ = [
    "UserRegister",
    "UserLogin",
    "UserUpdate",
    "UserResponse",
    "AuthResponse",
    "ErrorResponse",
    "FilmCreate",
    "FilmUpdate",
    "FilmStatusUpdate",
    "FilmResponse",
    "FilmWithStats",
    "AdminFilmResponse",
    "AdminStatsResponse",
    "CheckoutRequest",
    "CheckoutResponse",
    "TicketWithFilm",
]
