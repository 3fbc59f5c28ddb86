"""API endpoint tests: health and authentication."""

from datetime import UTC, datetime, timedelta

from fastapi.testclient import TestClient

from festival.models.enums import Role


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "timestamp" in data


def test_register_user(client):
    """Test user registration logs the user in."""
    response = client.post(
        "/api/auth/register",
        json={"email": "newuser@example.com", "password": "password123", "name": "New User"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["token"]
    assert data["user"]["email"] == "newuser@example.com"
    assert data["user"]["role"] == "buyer"
    assert response.cookies.get("auth-token") == data["token"]


def test_register_submitter(client):
    """Test registering through the filmmaker portal."""
    response = client.post(
        "/api/auth/register",
        json={
            "email": "maker@example.com",
            "password": "password123",
            "name": "Maker",
            "role": "submitter",
        },
    )
    assert response.status_code == 201
    assert response.json()["user"]["role"] == "submitter"


def test_register_duplicate_email(client, buyer_headers):
    """Test registration with duplicate email fails."""
    response = client.post(
        "/api/auth/register",
        json={"email": buyer_headers.email, "password": "password123", "name": "Duplicate"},
    )
    assert response.status_code == 400
    assert "already registered" in response.json()["error"]


def test_register_admin_rejected(client):
    """Test that the admin role cannot be self-assigned."""
    response = client.post(
        "/api/auth/register",
        json={
            "email": "boss@example.com",
            "password": "password123",
            "name": "Boss",
            "role": "admin",
        },
    )
    assert response.status_code == 400


def test_register_invalid_body(client):
    """Test validation errors are reported as 400 with an error message."""
    response = client.post("/api/auth/register", json={"email": "not-an-email"})
    assert response.status_code == 400
    assert "error" in response.json()


def test_login(client, buyer_headers):
    """Test user login sets the auth cookie."""
    response = client.post(
        "/api/auth/login", json={"email": buyer_headers.email, "password": "testpass123"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["user"]["id"] == buyer_headers.user_id
    assert data["token"]

    set_cookie = response.headers["set-cookie"]
    assert "auth-token=" in set_cookie
    assert "HttpOnly" in set_cookie
    assert "samesite=lax" in set_cookie.lower()


def test_login_wrong_password(client, buyer_headers):
    """Test login with wrong password."""
    response = client.post(
        "/api/auth/login", json={"email": buyer_headers.email, "password": "wrongpass"}
    )
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid email or password"}
    assert "auth-token" not in response.cookies


def test_login_unknown_email(client):
    """Test login for an email that was never registered."""
    response = client.post(
        "/api/auth/login", json={"email": "ghost@example.com", "password": "whatever"}
    )
    assert response.status_code == 401


def test_get_current_user_with_bearer(client, submitter_headers):
    """Test getting current user info with a bearer token."""
    response = client.get("/api/auth/me", headers=submitter_headers)
    assert response.status_code == 200
    assert response.json() == {
        "id": submitter_headers.user_id,
        "email": submitter_headers.email,
        "name": "Test Submitter",
        "role": "submitter",
    }


def test_get_current_user_with_cookie(client, buyer_headers):
    """Test the cookie set at login authenticates later requests."""
    client.post("/api/auth/login", json={"email": buyer_headers.email, "password": "testpass123"})

    response = client.get("/api/auth/me")
    assert response.status_code == 200
    assert response.json()["email"] == buyer_headers.email


def test_get_current_user_unauthenticated(client):
    """Test that /me requires authentication."""
    response = client.get("/api/auth/me")
    assert response.status_code == 401
    assert "error" in response.json()
    assert response.headers["www-authenticate"] == "Bearer"


def test_get_current_user_invalid_token(client):
    """Test an unknown token is rejected."""
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_get_current_user_expired_session(client, store, make_user):
    """Test an expired session is rejected and evicted."""
    user = make_user(Role.BUYER)
    store.create_session(user.id, "stale-token", datetime.now(UTC) - timedelta(minutes=5))

    response = client.get("/api/auth/me", headers={"Authorization": "Bearer stale-token"})
    assert response.status_code == 401
    assert store.get_session("stale-token") is None


def test_update_current_user(client, buyer_headers):
    """Test updating the display name."""
    response = client.patch("/api/auth/me", headers=buyer_headers, json={"name": "Renamed"})
    assert response.status_code == 200
    assert response.json()["name"] == "Renamed"


def test_logout(client, buyer_headers):
    """Test logout invalidates the session and clears the cookie."""
    response = client.post("/api/auth/logout", headers=buyer_headers)
    assert response.status_code == 200
    assert response.json()["message"] == "Logged out successfully"

    set_cookie = response.headers["set-cookie"]
    assert "auth-token=" in set_cookie
    assert "Max-Age=0" in set_cookie

    response = client.get("/api/auth/me", headers=buyer_headers)
    assert response.status_code == 401


def test_logout_with_cookie(client, buyer_headers):
    """Test logout using the cookie session."""
    login = client.post(
        "/api/auth/login", json={"email": buyer_headers.email, "password": "testpass123"}
    )
    token = login.json()["token"]

    client.post("/api/auth/logout")
    client.cookies.clear()

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_logout_without_session(client):
    """Test logout succeeds even without a session."""
    response = client.post("/api/auth/logout")
    assert response.status_code == 200
    assert "Max-Age=0" in response.headers["set-cookie"]

    # Logging out twice is harmless
    response = client.post("/api/auth/logout", headers={"Authorization": "Bearer gone"})
    assert response.status_code == 200


def test_unexpected_error_is_hidden(app, store, monkeypatch):
    """Test an unhandled exception becomes a generic 500."""

    def broken(*args, **kwargs):
        raise RuntimeError("secret detail")

    monkeypatch.setattr(store, "get_films", broken)

    with TestClient(app, raise_server_exceptions=False) as test_client:
        response = test_client.get("/api/films")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert "secret detail" not in response.text
