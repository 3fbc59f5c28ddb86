"""Tests for the entity store."""

from datetime import UTC, datetime, timedelta

import pytest

from festival.models.enums import FilmStatus, Role, TicketStatus
from festival.services.store import EntityStore


class TestUsers:
    """Tests for user storage."""

    def test_create_user_assigns_id_and_timestamp(self, store):
        user = store.create_user("jane@example.com", "hash", Role.BUYER, "Jane")

        assert user.id
        assert user.created_at is not None
        assert user.created_at.tzinfo is not None
        assert user.role == Role.BUYER

    def test_get_user_by_email_and_id(self, store):
        user = store.create_user("jane@example.com", "hash", Role.BUYER, "Jane")

        assert store.get_user_by_email("jane@example.com").id == user.id
        assert store.get_user_by_id(user.id).email == "jane@example.com"

    def test_create_user_if_absent(self, store):
        user = store.create_user_if_absent("jane@example.com", "hash", Role.BUYER, "Jane")

        assert user is not None
        assert store.get_user_by_email("jane@example.com").id == user.id
        assert store.create_user_if_absent("jane@example.com", "hash2", Role.SUBMITTER, "J") is None
        assert store.count_users() == 1

    def test_missing_user_returns_none(self, store):
        assert store.get_user_by_email("nobody@example.com") is None
        assert store.get_user_by_id("missing") is None

    def test_stores_are_isolated(self, store):
        store.create_user("jane@example.com", "hash", Role.BUYER, "Jane")
        other = EntityStore("sqlite://")
        try:
            assert other.get_user_by_email("jane@example.com") is None
            assert other.count_users() == 0
        finally:
            other.dispose()


class TestFilms:
    """Tests for film storage and filtering."""

    def test_create_film_assigns_submission_date(self, store, make_film):
        film = make_film("submitter-1", status=FilmStatus.PENDING)

        assert film.id
        assert film.submission_date is not None
        assert film.status == FilmStatus.PENDING

    def test_get_films_filters_are_combined(self, store, make_film):
        make_film("submitter-1", status=FilmStatus.APPROVED, title="A")
        make_film("submitter-1", status=FilmStatus.PENDING, title="B")
        make_film("submitter-2", status=FilmStatus.APPROVED, title="C")

        assert len(store.get_films()) == 3
        assert {f.title for f in store.get_films(status=FilmStatus.APPROVED)} == {"A", "C"}
        assert {f.title for f in store.get_films(submitter_id="submitter-1")} == {"A", "B"}
        approved_own = store.get_films(status="approved", submitter_id="submitter-1")
        assert [f.title for f in approved_own] == ["A"]

    def test_update_film_merges_fields(self, store, make_film):
        film = make_film("submitter-1", status=FilmStatus.PENDING)

        updated = store.update_film(film.id, {"title": "New Title"})

        assert updated.title == "New Title"
        assert updated.director == film.director
        assert updated.status == FilmStatus.PENDING
        assert store.get_film_by_id(film.id).title == "New Title"

    def test_update_unknown_film_returns_none(self, store):
        assert store.update_film("missing", {"title": "Nope"}) is None

    def test_update_film_rejects_unknown_fields(self, store, make_film):
        film = make_film("submitter-1")

        with pytest.raises(ValueError):
            store.update_film(film.id, {"rating": 5})


class TestTickets:
    """Tests for ticket storage."""

    def test_tickets_by_buyer_and_film(self, store, make_film):
        film_a = make_film("submitter-1")
        film_b = make_film("submitter-1")
        session_time = datetime(2026, 11, 1, 19, 0, tzinfo=UTC)

        store.create_ticket(
            film_id=film_a.id, buyer_id="buyer-1", price=25.0, quantity=2,
            session_time=session_time, status=TicketStatus.CONFIRMED,
        )
        store.create_ticket(
            film_id=film_b.id, buyer_id="buyer-1", price=25.0, quantity=1,
            session_time=session_time,
        )
        store.create_ticket(
            film_id=film_a.id, buyer_id="buyer-2", price=25.0, quantity=3,
            session_time=session_time,
        )

        assert len(store.get_tickets_by_buyer("buyer-1")) == 2
        assert len(store.get_tickets_by_film(film_a.id)) == 2
        assert store.get_tickets_by_buyer("buyer-3") == []

    def test_ticket_round_trips_session_time_as_utc(self, store, make_film):
        film = make_film("submitter-1")
        session_time = datetime(2026, 11, 1, 19, 0, tzinfo=UTC)

        ticket = store.create_ticket(
            film_id=film.id, buyer_id="buyer-1", price=25.0, quantity=1,
            session_time=session_time,
        )

        loaded = store.get_ticket_by_id(ticket.id)
        assert loaded.session_time == session_time
        assert loaded.purchase_date.tzinfo is not None
        assert loaded.total_price == 25.0


class TestSessionStorage:
    """Tests for raw session persistence."""

    def test_delete_expired_sessions_only_removes_expired(self, store):
        now = datetime.now(UTC)
        store.create_session("user-1", "old", now - timedelta(minutes=1))
        store.create_session("user-1", "fresh", now + timedelta(hours=1))

        removed = store.delete_expired_sessions(now)

        assert removed == 1
        assert store.get_session("old") is None
        assert store.get_session("fresh") is not None

    def test_delete_session_unknown_token(self, store):
        store.delete_session("never-issued")
        assert store.count_sessions() == 0
