"""FastAPI dependencies for the store, sessions and authentication."""

from collections.abc import Callable
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from festival.config import Settings
from festival.models.enums import Permission, Role
from festival.models.user import User
from festival.services.auth import AuthContext, authenticate, authorize
from festival.services.sessions import SessionManager
from festival.services.store import EntityStore

security = HTTPBearer(auto_error=False)


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was built with."""
    return request.app.state.settings


def get_store(request: Request) -> EntityStore:
    """Entity store owned by the running app."""
    return request.app.state.store


def get_session_manager(request: Request) -> SessionManager:
    return request.app.state.sessions


def get_token(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> str | None:
    """Session token from the auth cookie, falling back to a bearer header."""
    token = request.cookies.get(settings.auth_cookie_name)
    if token:
        return token
    if credentials is not None:
        return credentials.credentials
    return None


def get_auth_context(
    store: Annotated[EntityStore, Depends(get_store)],
    sessions: Annotated[SessionManager, Depends(get_session_manager)],
    token: Annotated[str | None, Depends(get_token)],
) -> AuthContext:
    """Require an authenticated user, any role."""
    return authenticate(store, sessions, token)


def get_current_user(
    context: Annotated[AuthContext, Depends(get_auth_context)],
) -> User:
    """Get the current authenticated user."""
    return context.user


def require_role(role: Role) -> Callable[..., AuthContext]:
    """Dependency factory: authenticated user whose role is exactly ``role``."""

    def dependency(
        store: Annotated[EntityStore, Depends(get_store)],
        sessions: Annotated[SessionManager, Depends(get_session_manager)],
        token: Annotated[str | None, Depends(get_token)],
    ) -> AuthContext:
        return authenticate(store, sessions, token, required_role=role)

    return dependency


def require_permission(permission: Permission) -> Callable[..., AuthContext]:
    """Dependency factory: authenticated user whose role grants ``permission``."""

    def dependency(
        context: Annotated[AuthContext, Depends(get_auth_context)],
    ) -> AuthContext:
        return authorize(context, permission)

    return dependency
