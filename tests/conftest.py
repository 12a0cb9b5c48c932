"""Shared fixtures: an in-memory database and a client bound to it."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from readyread_api.app.core.config import DatabaseSettings, Settings
from readyread_api.app.core.db import metadata
from readyread_api.app.main import create_app


@pytest.fixture
def engine():
    # One shared connection so every request sees the same in-memory database.
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def settings():
    return Settings(database=DatabaseSettings(dsn="sqlite://"))


@pytest.fixture
def client(settings, engine):
    with TestClient(create_app(settings, engine)) as client:
        yield client


@pytest.fixture
def register(client):
    """Register a user and return the response body."""

    def _register(email="reader@readyread.io", username="reader", password="qwERty12", **extra):
        payload = {
            "email": email,
            "username": username,
            "password": password,
            "repeatPassword": password,
            **extra,
        }
        response = client.post("/api/users", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _register
