"""Entity store for users, films, tickets and sessions."""

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session, sessionmaker

from festival.database import create_db_engine, init_db
from festival.models.auth_session import AuthSession
from festival.models.enums import FilmStatus, Role, TicketStatus
from festival.models.film import Film
from festival.models.ticket import Ticket
from festival.models.user import User


class EntityStore:
    """In-process storage for all entities.

    Every instance owns its own engine, so tests can build isolated stores.
    A single lock serializes all operations; each operation runs in its own
    transaction. Lookups return ``None`` when nothing matches and never raise.
    Returned instances are detached; write changes back through the store.
    """

    def __init__(self, database_url: str = "sqlite://") -> None:
        self.engine = create_db_engine(database_url)
        init_db(self.engine)
        self._sessionmaker = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)
        self._lock = threading.RLock()

    @contextmanager
    def _transaction(self) -> Iterator[Session]:
        with self._lock, self._sessionmaker.begin() as db:
            yield db

    def _add(self, obj: Any) -> Any:
        with self._transaction() as db:
            db.add(obj)
            db.flush()
            db.refresh(obj)
        return obj

    def dispose(self) -> None:
        """Release the underlying database connections."""
        self.engine.dispose()

    # Users

    def create_user(self, email: str, password_hash: str, role: Role, name: str) -> User:
        """Insert a user. Email uniqueness must be checked by the caller."""
        return self._add(User(email=email, password_hash=password_hash, role=role, name=name))

    def create_user_if_absent(
        self, email: str, password_hash: str, role: Role, name: str
    ) -> User | None:
        """Insert a user unless the email is taken; the lookup and insert are atomic.

        Returns None when a user with this email already exists.
        """
        with self._transaction() as db:
            if db.scalars(select(User.id).where(User.email == email)).first() is not None:
                return None
            user = User(email=email, password_hash=password_hash, role=role, name=name)
            db.add(user)
            db.flush()
            db.refresh(user)
            return user

    def get_user_by_email(self, email: str) -> User | None:
        with self._transaction() as db:
            return db.scalars(select(User).where(User.email == email)).first()

    def get_user_by_id(self, user_id: str) -> User | None:
        with self._transaction() as db:
            return db.get(User, user_id)

    def update_user(self, user_id: str, updates: dict[str, Any]) -> User | None:
        with self._transaction() as db:
            user = db.get(User, user_id)
            if user is None:
                return None
            for key, value in updates.items():
                setattr(user, key, value)
            db.flush()
            db.refresh(user)
            return user

    def count_users(self) -> int:
        with self._transaction() as db:
            return db.scalar(select(func.count()).select_from(User))

    # Films

    def create_film(
        self,
        *,
        title: str,
        director: str,
        synopsis: str,
        duration: int,
        genre: str,
        submitter_id: str,
        status: FilmStatus = FilmStatus.PENDING,
        trailer_url: str | None = None,
        poster_url: str | None = None,
    ) -> Film:
        """Insert a film with the status the caller supplies."""
        return self._add(
            Film(
                title=title,
                director=director,
                synopsis=synopsis,
                duration=duration,
                genre=genre,
                submitter_id=submitter_id,
                status=status,
                trailer_url=trailer_url,
                poster_url=poster_url,
            )
        )

    def get_films(
        self,
        status: FilmStatus | str | None = None,
        submitter_id: str | None = None,
    ) -> list[Film]:
        """Return films matching every supplied filter."""
        query = select(Film)
        if status:
            query = query.where(Film.status == FilmStatus(status))
        if submitter_id:
            query = query.where(Film.submitter_id == submitter_id)
        with self._transaction() as db:
            return list(db.scalars(query.order_by(Film.submission_date, Film.id)))

    def get_film_by_id(self, film_id: str) -> Film | None:
        with self._transaction() as db:
            return db.get(Film, film_id)

    def update_film(self, film_id: str, updates: dict[str, Any]) -> Film | None:
        """Shallow-merge column values into a film.

        No authorization happens here; callers decide which fields may change.
        """
        columns = Film.__table__.columns.keys()
        unknown = set(updates) - set(columns)
        if unknown:
            raise ValueError(f"Unknown film fields: {sorted(unknown)}")

        with self._transaction() as db:
            film = db.get(Film, film_id)
            if film is None:
                return None
            for key, value in updates.items():
                setattr(film, key, value)
            db.flush()
            db.refresh(film)
            return film

    # Tickets

    def create_ticket(
        self,
        *,
        film_id: str,
        buyer_id: str,
        price: float,
        quantity: int,
        session_time: datetime,
        status: TicketStatus = TicketStatus.PENDING,
    ) -> Ticket:
        """Insert a ticket. Quantity and film checks belong to the caller."""
        return self._add(
            Ticket(
                film_id=film_id,
                buyer_id=buyer_id,
                price=price,
                quantity=quantity,
                session_time=session_time,
                status=status,
            )
        )

    def get_ticket_by_id(self, ticket_id: str) -> Ticket | None:
        with self._transaction() as db:
            return db.get(Ticket, ticket_id)

    def get_tickets_by_buyer(self, buyer_id: str) -> list[Ticket]:
        with self._transaction() as db:
            return list(db.scalars(select(Ticket).where(Ticket.buyer_id == buyer_id)))

    def get_tickets_by_film(self, film_id: str) -> list[Ticket]:
        with self._transaction() as db:
            return list(db.scalars(select(Ticket).where(Ticket.film_id == film_id)))

    # Sessions

    def create_session(self, user_id: str, token: str, expires_at: datetime) -> AuthSession:
        return self._add(AuthSession(user_id=user_id, token=token, expires_at=expires_at))

    def get_session(self, token: str) -> AuthSession | None:
        """Raw lookup by token; expiry is the session manager's concern."""
        with self._transaction() as db:
            return db.scalars(select(AuthSession).where(AuthSession.token == token)).first()

    def delete_session(self, token: str) -> None:
        """Remove a session. Unknown tokens are ignored."""
        with self._transaction() as db:
            db.execute(delete(AuthSession).where(AuthSession.token == token))

    def delete_expired_sessions(self, now: datetime) -> int:
        """Remove every session whose expiry is at or before now."""
        with self._transaction() as db:
            result = db.execute(delete(AuthSession).where(AuthSession.expires_at <= now))
            return result.rowcount or 0

    def count_sessions(self) -> int:
        with self._transaction() as db:
            return db.scalar(select(func.count()).select_from(AuthSession))
