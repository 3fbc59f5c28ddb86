"""Session manager: issues, resolves and expires bearer tokens."""

import asyncio
import logging
import secrets
from datetime import UTC, datetime, timedelta

from festival.models.auth_session import AuthSession
from festival.services.store import EntityStore

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL = timedelta(hours=24)
TOKEN_BYTES = 32


def generate_token() -> str:
    """Generate an unguessable opaque session token."""
    return secrets.token_urlsafe(TOKEN_BYTES)


class SessionManager:
    """Issues and validates session tokens backed by the entity store.

    Expired sessions are removed on the first lookup past their expiry, and
    ``sweep_expired`` reclaims the ones nobody looks up again.
    """

    def __init__(self, store: EntityStore, ttl: timedelta = DEFAULT_SESSION_TTL):
        self.store = store
        self.ttl = ttl

    def create_session(self, user_id: str) -> AuthSession:
        """Create a session for a user, valid for the configured TTL."""
        expires_at = datetime.now(UTC) + self.ttl
        return self.store.create_session(user_id, generate_token(), expires_at)

    def get_session(self, token: str) -> AuthSession | None:
        """Resolve a token, evicting it if it has expired."""
        session = self.store.get_session(token)
        if session is None:
            return None
        if session.is_expired(datetime.now(UTC)):
            self.store.delete_session(token)
            logger.debug(f"Evicted expired session for user {session.user_id}")
            return None
        return session

    def delete_session(self, token: str) -> None:
        """Delete a session. Deleting an unknown token is not an error."""
        self.store.delete_session(token)

    def sweep_expired(self) -> int:
        """Delete all expired sessions and return how many were removed."""
        removed = self.store.delete_expired_sessions(datetime.now(UTC))
        if removed:
            logger.info(f"Swept {removed} expired session(s)")
        return removed


async def run_session_sweeper(manager: SessionManager, interval_seconds: float) -> None:
    """Periodically sweep expired sessions until cancelled."""
    logger.info(f"Session sweeper started (interval={interval_seconds}s)")
    try:
        while True:
            await asyncio.sleep(interval_seconds)
            try:
                # Blocks on the store lock
                await asyncio.to_thread(manager.sweep_expired)
            except Exception as e:
                # Keep sweeping; the next run may succeed
                logger.exception(f"Session sweep failed: {e}")
    finally:
        logger.info("Session sweeper stopped")
