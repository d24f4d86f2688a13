"""API endpoint tests."""

from idea_pool import __version__


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_index(client):
    """Test the API banner."""
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": f"Idea Pool API v{__version__}"}


def test_response_headers(client):
    """Test that every response carries the standard headers."""
    response = client.get("/")
    assert response.headers["x-frame-options"] == "SAMEORIGIN"
    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["cache-control"] == "private, must-revalidate, max-age=0"
    assert response.headers["vary"] == "Accept-Encoding, Origin"
    assert response.headers["x-request-id"]
    assert float(response.headers["x-runtime"]) >= 0
    assert response.headers["content-type"] == "application/json"


def test_request_id_is_echoed(client):
    """Test that a caller-supplied request id is returned."""
    response = client.get("/health", headers={"X-Request-Id": "abc-123"})
    assert response.headers["x-request-id"] == "abc-123"


def test_unknown_route(client):
    """Test that unknown routes use the error envelope."""
    response = client.get("/nope")
    assert response.status_code == 404
    assert response.json() == {"msg": "Not Found"}


def test_get_current_user(client, signup):
    """Test getting current user information."""
    headers = signup(email=" Someone@Test.com ", name=" ada lovelace ")

    response = client.get("/me", headers=headers)
    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "someone@test.com"
    assert data["name"] == "Ada Lovelace"
    assert data["avatar_url"] == "https://www.gravatar.com/avatar/5c728bd5967305f5e0e70001f8c5e7b3"
    assert "password" not in data
    assert "password_hash" not in data


def test_get_current_user_invalid_tokens(client, auth_headers):
    """Test that /me rejects missing, empty and tampered tokens alike."""
    token = auth_headers["X-Access-Token"]
    for headers in ({}, {"X-Access-Token": ""}, {"X-Access-Token": token[:-1]}):
        response = client.get("/me", headers=headers)
        assert response.status_code == 401
        assert response.json() == {"msg": "Unauthorized"}


def test_get_current_user_deleted(client, auth_headers, db):
    """Test that a token for a user who no longer exists is rejected."""
    from idea_pool.models.user import User

    db.query(User).filter(User.id == auth_headers.user_id).delete()
    db.commit()

    response = client.get("/me", headers=auth_headers)
    assert response.status_code == 401
