from datetime import timedelta

import pytest

from app.core.security import create_access_token


@pytest.mark.parametrize(
    "header",
    [
        "",
        "Bearer",
        "bearer {token}",
        "Token {token}",
        "Bearer {token} extra",
        "Bearer  {token}",
        "Bearer not-a-jwt",
    ],
)
def test_malformed_authorization_is_unauthorized(client, login, header):
    session = login()
    value = header.format(token=session["token"])
    headers = {"Authorization": value} if value else {}

    response = client.get("/users", headers=headers)

    assert response.status_code == 401
    assert response.json() == {"status": 401, "message": "Unauthorized"}


def test_expired_token_is_unauthorized(client, login):
    session = login()
    token = create_access_token({"id": session["user_id"], "role": "member"}, timedelta(seconds=-5))
    response = client.get("/users", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


@pytest.mark.parametrize(
    "claims",
    [
        {"role": "member"},
        {"id": "", "role": "member"},
        {"id": "u1", "role": "superuser"},
        {"id": "u1"},
    ],
)
def test_token_with_bad_claims_is_unauthorized(client, claims):
    token = create_access_token(claims)
    response = client.get("/users", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_valid_token_passes(client, login):
    session = login()
    assert client.get("/users", headers=session["auth"]).status_code == 200


def test_logged_check_uses_the_requests_own_session(client, login):
    """Two users logged in at once each pass with their own session only"""
    alice = login()
    bob = login(email="b@x.com", username="b")

    assert client.put("/user/me", json={"username": "alice"}, headers=alice["headers"]).status_code == 200
    assert client.put("/user/me", json={"username": "bob"}, headers=bob["headers"]).status_code == 200

    crossed = {**bob["auth"], "session": alice["session_id"]}
    assert client.put("/user/me", json={"username": "x"}, headers=crossed).status_code == 403


def test_unmatched_route_is_enveloped_404(client):
    response = client.get("/nowhere")
    assert response.status_code == 404
    assert response.json() == {"status": 404, "message": "Route not found"}


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
