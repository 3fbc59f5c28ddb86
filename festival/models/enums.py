"""Enums for model fields."""

from enum import StrEnum


class Permission(StrEnum):
    """Capabilities granted to roles."""

    USERS_READ = "users.read"
    FILMS_READ = "films.read"
    FILMS_READ_OWN = "films.read.own"
    FILMS_WRITE = "films.write"
    FILMS_WRITE_OWN = "films.write.own"
    FILMS_STATUS = "films.status"
    FILMS_SUBMIT = "films.submit"
    TICKETS_READ = "tickets.read"
    TICKETS_READ_OWN = "tickets.read.own"
    TICKETS_PURCHASE = "tickets.purchase"
    REPORTS_READ = "reports.read"


class Role(StrEnum):
    """User roles. Each maps to a fixed permission set."""

    ADMIN = "admin"
    SUBMITTER = "submitter"
    BUYER = "buyer"

    @property
    def permissions(self) -> frozenset[Permission]:
        return ROLE_PERMISSIONS[self]

    def has_permission(self, permission: Permission) -> bool:
        """Check if this role grants the given permission."""
        return permission in self.permissions

    @property
    def self_registrable(self) -> bool:
        """Roles that may be created through public registration."""
        return self in (Role.SUBMITTER, Role.BUYER)


ROLE_PERMISSIONS: dict[Role, frozenset[Permission]] = {
    Role.ADMIN: frozenset(
        {
            Permission.USERS_READ,
            Permission.FILMS_READ,
            Permission.FILMS_WRITE,
            Permission.FILMS_STATUS,
            Permission.TICKETS_READ,
            Permission.REPORTS_READ,
        }
    ),
    Role.SUBMITTER: frozenset(
        {
            Permission.FILMS_READ_OWN,
            Permission.FILMS_WRITE_OWN,
            Permission.FILMS_SUBMIT,
        }
    ),
    Role.BUYER: frozenset(
        {
            Permission.TICKETS_PURCHASE,
            Permission.TICKETS_READ_OWN,
        }
    ),
}


class FilmStatus(StrEnum):
    """Review state of a submitted film."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class TicketStatus(StrEnum):
    """Ticket lifecycle status."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
