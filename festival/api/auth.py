"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from festival.api.dependencies import (
    get_app_settings,
    get_auth_context,
    get_current_user,
    get_session_manager,
    get_store,
    get_token,
)
from festival.config import Settings
from festival.exceptions import AuthenticationError, NotFoundError
from festival.models.user import User
from festival.schemas.auth import AuthResponse, UserLogin, UserRegister, UserResponse, UserUpdate
from festival.services.auth import AuthContext, authenticate_user, register_user
from festival.services.sessions import SessionManager
from festival.services.store import EntityStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def set_auth_cookie(response: Response, token: str, settings: Settings) -> None:
    """Attach the session token as an HTTP-only cookie."""
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        max_age=settings.session_ttl_hours * 60 * 60,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
    )


def clear_auth_cookie(response: Response, settings: Settings) -> None:
    """Expire the session cookie on the client."""
    response.set_cookie(
        key=settings.auth_cookie_name,
        value="",
        max_age=0,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        path="/",
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user_data: UserRegister,
    response: Response,
    store: Annotated[EntityStore, Depends(get_store)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    """Register a new submitter or buyer and log them in."""
    user = register_user(store, user_data.email, user_data.password, user_data.name, user_data.role)

    session = sessions.create_session(user.id)
    set_auth_cookie(response, session.token, settings)

    return AuthResponse(user=UserResponse.model_validate(user), token=session.token)


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: UserLogin,
    response: Response,
    store: Annotated[EntityStore, Depends(get_store)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    settings: Annotated[Settings, Depends(get_app_settings)],
):
    """Login with email and password."""
    user = authenticate_user(store, credentials.email, credentials.password)

    if not user:
        logger.info(f"Failed login attempt for {credentials.email}")
        raise AuthenticationError("Invalid email or password")

    session = sessions.create_session(user.id)
    set_auth_cookie(response, session.token, settings)
    logger.info(f"User {user.id} logged in as {user.role}")

    return AuthResponse(user=UserResponse.model_validate(user), token=session.token)


@router.post("/logout")
def logout(
    response: Response,
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    settings: Annotated[Settings, Depends(get_app_settings)],
    token: Annotated[str | None, Depends(get_token)],
):
    """Logout: drop the session if there is one and always clear the cookie."""
    if token:
        sessions.delete_session(token)

    clear_auth_cookie(response, settings)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user


@router.patch("/me", response_model=UserResponse)
def update_me(
    user_data: UserUpdate,
    context: Annotated[AuthContext, Depends(get_auth_context)],
    store: Annotated[EntityStore, Depends(get_store)],
):
    """Update the current user's display name."""
    user = store.update_user(context.user.id, {"name": user_data.name})
    if user is None:
        raise NotFoundError("User not found")
    return user
