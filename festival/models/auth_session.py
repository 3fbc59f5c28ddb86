"""Authentication session model."""

from datetime import datetime

from sqlalchemy import Column, ForeignKey, String

from festival.database import Base, UTCDateTime
from festival.models.mixins import IdentityMixin


class AuthSession(Base, IdentityMixin):
    """Bearer token issued at login, valid until expires_at."""

    __tablename__ = "sessions"

    user_id = Column(String(32), ForeignKey("users.id"), nullable=False, index=True)
    token = Column(String(128), unique=True, nullable=False, index=True)
    # Indexed so expired sessions can be swept by range
    expires_at = Column(UTCDateTime, nullable=False, index=True)

    def is_expired(self, now: datetime) -> bool:
        """A session is expired once its expiry is at or before now."""
        return self.expires_at <= now
