import pytest

from moneytalk import create_app
from moneytalk.config import TestConfig
from moneytalk.extensions import db


@pytest.fixture
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_client(client):
    client.post("/auth/register", json={"full_name": "Sam Doe", "email": "sam@example.com", "password": "pw12345"})
    resp = client.post("/auth/login", json={"email": "sam@example.com", "password": "pw12345"})
    assert resp.status_code == 200
    return client


@pytest.fixture
def user_id(auth_client):
    return auth_client.get("/auth/me").get_json()["user"]["id"]
