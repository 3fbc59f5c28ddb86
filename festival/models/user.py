"""User model."""

from sqlalchemy import Column, Enum, String

from festival.database import Base
from festival.models.enums import Role
from festival.models.mixins import IdentityMixin, TimestampMixin


class User(Base, IdentityMixin, TimestampMixin):
    """User model for authentication and ownership."""

    __tablename__ = "users"

    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(Enum(Role, values_callable=lambda e: [m.value for m in e]), nullable=False)
    name = Column(String(255), nullable=False)
