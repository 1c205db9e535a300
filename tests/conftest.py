"""Shared pytest fixtures.

Every test gets a fresh app backed by an in-memory SQLite database.
The app context stays pushed for the whole test so service-level
tests can use the session directly.
"""
from __future__ import annotations

import pytest

from sharespace import create_app, db
from sharespace.models import User

TEST_CONFIG = {
    "TESTING": True,
    "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
    "JWT_SECRET_KEY": "test-secret-key-with-at-least-32-bytes!",
}


@pytest.fixture()
def app():
    app = create_app(TEST_CONFIG)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def signup(client):
    """Register and log in a user through the API.

    Returns ``(user_id, headers)`` where ``headers`` carries the bearer
    token for that user.
    """
    def _signup(name: str = "Alice", password: str = "secret123") -> tuple[int, dict]:
        email = f"{name.lower()}@example.com"
        response = client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.get_json()
        login = client.post("/api/auth/login", json={"email": email, "password": password})
        assert login.status_code == 200, login.get_json()
        token = login.get_json()["token"]
        return response.get_json()["user"]["id"], {"Authorization": f"Bearer {token}"}

    return _signup


@pytest.fixture()
def make_user(app):
    """Insert a user directly, for tests that bypass HTTP."""
    def _make_user(name: str = "Alice") -> User:
        user = User(name=name, email=f"{name.lower()}@example.com", profile_picture_url=f"/pfp/{name.lower()}.png")
        user.set_password("secret123")
        db.session.add(user)
        db.session.commit()
        return user

    return _make_user


@pytest.fixture()
def post_service(app):
    return app.services["posts"]


@pytest.fixture()
def comment_service(app):
    return app.services["comments"]
