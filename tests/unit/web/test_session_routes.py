"""Tests for the session HTTP endpoints."""

from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from sessionkeeper.app import App
from sessionkeeper.core.modules.session.models import GUEST_USER_ID
from sessionkeeper.core.modules.session.registry import SessionRegistry
from sessionkeeper.web.server import create_fastapi_app


@pytest.fixture
def session_registry(registry_config, clock):
    return SessionRegistry(registry_config, clock=clock)


@pytest.fixture
def client(config, session_registry):
    fastapi_app = create_fastapi_app(App(config, session_registry), config)
    with TestClient(fastapi_app) as test_client:
        yield test_client


@pytest.fixture
def other_client(config, session_registry):
    """Second browser sharing the same registry."""
    fastapi_app = create_fastapi_app(App(config, session_registry), config)
    with TestClient(fastapi_app) as test_client:
        yield test_client


class TestStartSession:
    def test_creates_guest_session_with_cookie(self, client):
        response = client.post("/api/v1/sessions")

        assert response.status_code == 201
        body = response.json()
        assert body["user_id"] == GUEST_USER_ID
        assert response.cookies["sid"].strip('"') == body["token"]
        set_cookie = response.headers["set-cookie"]
        assert "HttpOnly" in set_cookie
        assert "expires=" in set_cookie.lower()


class TestCurrentSession:
    def test_without_cookie(self, client):
        response = client.get("/api/v1/sessions/current")
        assert response.status_code == 401
        assert response.json()["type"] == "authentication_error"

    def test_with_cookie(self, client):
        token = client.post("/api/v1/sessions").json()["token"]
        response = client.get("/api/v1/sessions/current")
        assert response.status_code == 200
        assert response.json()["token"] == token

    def test_expired_session(self, client, clock):
        client.post("/api/v1/sessions")
        clock.advance(timedelta(minutes=31))
        response = client.get("/api/v1/sessions/current")
        assert response.status_code == 401


class TestBind:
    def test_bind_user(self, client):
        client.post("/api/v1/sessions")
        response = client.post("/api/v1/sessions/current/bind", json={"user_id": 42})
        assert response.status_code == 200
        assert response.json()["user_id"] == 42
        assert client.get("/api/v1/sessions/current").json()["user_id"] == 42

    def test_user_already_bound_elsewhere(self, client, other_client, session_registry):
        first = client.post("/api/v1/sessions").json()["token"]
        client.post("/api/v1/sessions/current/bind", json={"user_id": 42})
        other_client.post("/api/v1/sessions")

        response = other_client.post("/api/v1/sessions/current/bind", json={"user_id": 42})

        assert response.status_code == 409
        assert response.json() == {"message": "User already has an active session", "type": "already_bound"}
        assert first not in response.text
        assert session_registry.lookup_by_user(42) == first

    def test_rebind_to_other_user(self, client):
        client.post("/api/v1/sessions")
        client.post("/api/v1/sessions/current/bind", json={"user_id": 42})
        response = client.post("/api/v1/sessions/current/bind", json={"user_id": 43})
        assert response.status_code == 400
        assert response.json()["type"] == "validation_error"

    def test_guest_sentinel_rejected(self, client):
        client.post("/api/v1/sessions")
        response = client.post("/api/v1/sessions/current/bind", json={"user_id": GUEST_USER_ID})
        assert response.status_code == 422


class TestEndSession:
    def test_logout(self, client, session_registry):
        token = client.post("/api/v1/sessions").json()["token"]

        response = client.delete("/api/v1/sessions/current")

        assert response.status_code == 204
        assert len(session_registry) == 0
        response = client.get("/api/v1/sessions/current", headers={"Cookie": f"sid={token}"})
        assert response.status_code == 401

    def test_logout_twice(self, client):
        token = client.post("/api/v1/sessions").json()["token"]
        client.delete("/api/v1/sessions/current")
        response = client.delete("/api/v1/sessions/current", headers={"Cookie": f"sid={token}"})
        assert response.status_code == 204


class TestSweepNotExposed:
    def test_clients_cannot_force_a_sweep(self, client, session_registry, clock):
        session_registry.create()
        session_registry.create()
        clock.advance(timedelta(hours=1))

        response = client.post("/api/v1/sessions/sweep")

        assert response.status_code == 404
        assert len(session_registry) == 2

    def test_no_sweep_route_in_openapi(self, client):
        paths = client.get("/openapi.json").json()["paths"]
        assert not any("sweep" in path for path in paths)


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
