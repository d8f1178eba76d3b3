"""
Tests for liveness endpoints, unknown routes, error mapping and startup.
"""
import asyncio
import json

import pytest
from starlette.testclient import TestClient

from core import db


class TestHealth:
    def test_health(self, client, monkeypatch):
        monkeypatch.setenv("APP_ENV", "production")
        res = client.get("/api/health")
        assert res.status_code == 200
        body = res.json()
        assert body["ok"] is True
        assert body["message"] == "Backend OK"
        assert body["env"] == "production"
        assert body["timestamp"].endswith("Z")

    def test_health_env_defaults_to_development(self, client, monkeypatch):
        monkeypatch.delenv("APP_ENV", raising=False)
        monkeypatch.delenv("NODE_ENV", raising=False)
        assert client.get("/api/health").json()["env"] == "development"

    def test_test_endpoint(self, client):
        body = client.get("/api/test").json()
        assert body["message"] == "Backend läuft!"
        assert body["environment"] == "docker"


class TestUnknownRoutes:
    @pytest.mark.parametrize("method, path", [("GET", "/api/nope"), ("POST", "/irgendwo"), ("DELETE", "/api/customers")])
    def test_not_found_lists_routes(self, client, method, path):
        res = client.request(method, path)
        assert res.status_code == 404
        body = res.json()
        assert body["error"] == f"Route nicht gefunden: {path}"
        assert "/api/customers" in body["available_routes"]
        assert "/api/kalkulationen/stats" in body["available_routes"]


class TestErrorMapping:
    def test_malformed_json_is_400(self, client):
        res = client.post(
            "/api/customers",
            content=b"{nicht json",
            headers={"content-type": "application/json"},
        )
        assert res.status_code == 400
        assert "error" in res.json()

    def test_oversized_body_is_413(self, client, fake_db, monkeypatch, customer_payload):
        monkeypatch.setenv("MAX_BODY_BYTES", "50")
        res = client.post("/api/customers", json=customer_payload)
        assert res.status_code == 413
        assert "error" in res.json()
        assert fake_db.count("kunde") == 0

    def test_oversized_chunked_body_is_413(self, client, fake_db, monkeypatch, customer_payload):
        monkeypatch.setenv("MAX_BODY_BYTES", "50")
        raw = json.dumps(customer_payload).encode("utf-8")

        def chunks():
            for start in range(0, len(raw), 16):
                yield raw[start:start + 16]

        res = client.post(
            "/api/customers",
            content=chunks(),
            headers={"content-type": "application/json"},
        )
        assert res.status_code == 413
        assert "error" in res.json()
        assert fake_db.count("kunde") == 0

    def test_body_within_limit_passes(self, client, fake_db, monkeypatch, customer_payload):
        monkeypatch.setenv("MAX_BODY_BYTES", "4096")
        assert client.post("/api/customers", json=customer_payload).status_code == 201
        assert fake_db.count("kunde") == 1


class TestLifespan:
    def test_pool_closed_on_shutdown(self, app, fake_db):
        with TestClient(app) as c:
            assert c.get("/api/health").status_code == 200
        assert fake_db.closed is True

    def test_failed_connect_keeps_serving(self, monkeypatch):
        from main import app

        async def broken_init():
            raise OSError("connection refused")

        monkeypatch.setattr(db, "_pool", None)
        monkeypatch.setattr(db, "init_pool", broken_init)
        with TestClient(app) as c:
            assert c.get("/api/health").status_code == 200
            res = c.get("/api/customers")
            assert res.status_code == 500
            assert res.json() == {"error": "Fehler beim Abrufen der Kunden"}


class TestTransactionHelper:
    def test_rollback_and_release_on_error(self, fake_pool, fake_db):
        async def failing():
            async with db.transaction() as conn:
                await conn.execute(
                    "INSERT INTO ansprechpartner (name, vorname, telefonnummer, email, position, kunde_id) "
                    "VALUES ($1, $2, $3, $4, $5, $6)",
                    "a", "b", "c", "d", "e", 1,
                )
                raise ValueError("boom")

        with pytest.raises(ValueError):
            asyncio.run(failing())
        assert fake_db.count("ansprechpartner") == 0
        assert fake_pool.acquired == fake_pool.released == 1

    def test_commit_on_success(self, fake_pool, fake_db):
        async def ok():
            async with db.transaction() as conn:
                return await db.fetch_in(conn, "SELECT COUNT(*) AS n FROM kunde")

        assert asyncio.run(ok()) == {"n": 0}
        assert fake_pool.acquired == fake_pool.released == 1

    def test_pool_required(self, monkeypatch):
        monkeypatch.setattr(db, "_pool", None)
        with pytest.raises(RuntimeError):
            db.pool()
