"""Authentication service: password handling, login and request gating."""

import logging
from dataclasses import dataclass

from passlib.context import CryptContext

from festival.config import get_settings
from festival.exceptions import AuthenticationError, AuthorizationError, ValidationError
from festival.models.enums import Permission, Role
from festival.models.user import User
from festival.services.sessions import SessionManager
from festival.services.store import EntityStore

logger = logging.getLogger(__name__)
settings = get_settings()

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


@dataclass(frozen=True)
class AuthContext:
    """Authenticated identity for the remainder of a request."""

    user: User
    token: str

    @property
    def role(self) -> Role:
        return self.user.role

    def can(self, permission: Permission) -> bool:
        """Check if the authenticated user's role grants a permission."""
        return self.role.has_permission(permission)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def authenticate_user(store: EntityStore, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = store.get_user_by_email(email)
    if not user:
        # Same bcrypt cost as verify_password
        pwd_context.dummy_verify()
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def register_user(store: EntityStore, email: str, password: str, name: str, role: Role) -> User:
    """Create a new user after checking the email is free.

    Raises:
        ValidationError: If the email is taken or the role cannot self-register.
    """
    if not role.self_registrable:
        raise ValidationError(f"Cannot register with role '{role}'")

    # Hash outside the store lock; the email check and insert are one transaction
    password_hash = get_password_hash(password)
    user = store.create_user_if_absent(
        email=email,
        password_hash=password_hash,
        role=role,
        name=name,
    )
    if user is None:
        raise ValidationError("Email already registered")
    logger.info(f"Registered {role} user {user.id}")
    return user


def authenticate(
    store: EntityStore,
    sessions: SessionManager,
    token: str | None,
    required_role: Role | None = None,
) -> AuthContext:
    """Resolve a bearer token into an authenticated context.

    The role check is strict equality; there is no role hierarchy.

    Raises:
        AuthenticationError: No token, unknown or expired session, or the
            session's user no longer exists.
        AuthorizationError: The user does not hold ``required_role``.
    """
    if not token:
        raise AuthenticationError("Authentication required")

    session = sessions.get_session(token)
    if session is None:
        raise AuthenticationError("Invalid or expired session")

    user = store.get_user_by_id(session.user_id)
    if user is None:
        raise AuthenticationError("User not found")

    if required_role is not None and user.role != required_role:
        raise AuthorizationError(f"{required_role.capitalize()} access required")

    return AuthContext(user=user, token=token)


def authorize(context: AuthContext, permission: Permission) -> AuthContext:
    """Ensure the authenticated user holds a permission.

    Raises:
        AuthorizationError: If the user's role does not grant it.
    """
    if not context.can(permission):
        raise AuthorizationError("Insufficient permissions")
    return context
