from types import SimpleNamespace

import pytest

from app import create_app
from config import TestingConfig
from models import db, User

PASSWORD = "Secret123!"


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def signup(client):
    """Register a user through the API and return their id and auth headers."""
    def _signup(name, email=None):
        email = email or f"{name.lower()}@example.com"
        res = client.post("/auth/register", json={"email": email, "name": name, "password": PASSWORD})
        assert res.status_code == 201, res.get_json()
        body = res.get_json()
        return SimpleNamespace(
            id=body["user"]["id"],
            headers={"Authorization": f"Bearer {body['access_token']}"},
        )
    return _signup


@pytest.fixture
def make_user(ctx):
    def _make_user(name):
        user = User(email=f"{name.lower()}@example.com", name=name)
        user.set_password(PASSWORD)
        db.session.add(user)
        db.session.commit()
        return user.id
    return _make_user


@pytest.fixture
def recipe_payload():
    def _payload(**overrides):
        payload = {
            "title": "Toast",
            "ingredients": ["bread"],
            "instructions": ["toast it"],
            "prepTime": 1,
            "cookTime": 1,
            "servings": 1,
            "difficulty": "easy",
            "isPublic": True,
        }
        payload.update(overrides)
        return payload
    return _payload
