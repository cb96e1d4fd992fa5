"""End-to-end tests for the FastAPI adapter in healthz.handler."""
from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from healthz.handler.routes import create_app, healthz_router
from healthz.health.component import Component
from healthz.health.registry import Healthz
from healthz.health.status import Status
from healthz.identity.provider import StaticIdentityProvider
from healthz.schema.config import HealthzConfig


@pytest.fixture()
def hz() -> Healthz:
    return Healthz(
        HealthzConfig(version="1.2.3", description="orders api"),
        identity_provider=StaticIdentityProvider("api-e2e"),
    )


def _client(hz: Healthz) -> TestClient:
    return TestClient(create_app(hz))


class TestHealthzEndpoint:
    def test_no_checks(self, hz: Healthz) -> None:
        resp = _client(hz).get("/healthz")
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "pass"
        assert body["details"] == {}
        assert body["metadata"] == {"service_id": "api-e2e"}

    def test_single_warning(self, hz: Healthz) -> None:
        hz.add_check("queue", "x", lambda h, c: Status.WARNING)
        resp = _client(hz).get("/healthz")
        assert resp.status_code == 409
        body = resp.json()
        assert body["status"] == "warn"
        assert body["details"]["x"]["status"] == "warn"
        assert body["details"]["x"]["type"] == "queue"

    def test_fail_and_pass(self, hz: Healthz) -> None:
        hz.add_check("db", "primary", lambda h, c: Status.FAIL)
        hz.add_check("db", "replica", lambda h, c: Status.PASS)
        resp = _client(hz).get("/healthz")
        assert resp.status_code == 409
        assert resp.json()["status"] == "fail"

    def test_raising_check_keeps_serving(self, hz: Healthz) -> None:
        def explode(h: Healthz, c: Component) -> Status:
            raise ZeroDivisionError("bad math")

        hz.add_check("math", "boom", explode)
        client = _client(hz)

        for _ in range(2):
            resp = client.get("/healthz")
            assert resp.status_code == 409
            body = resp.json()
            assert body["status"] == "fail"
            assert "Recovered from a panic caused by HealthMonitor boom" in body["notes"]

    def test_non_utf8_identity_file_is_served(self, tmp_path) -> None:
        service_file = tmp_path / "sid"
        service_file.write_bytes(b"api\xff")
        hz = Healthz(HealthzConfig(service_file=service_file))
        resp = _client(hz).get("/healthz")
        assert resp.status_code == 200
        assert resp.json()["metadata"]["service_id"] == "api\ufffd"

    def test_app_metadata_from_config(self, hz: Healthz) -> None:
        app = create_app(hz)
        assert app.version == "1.2.3"
        assert app.state.healthz is hz

    def test_custom_path(self, hz: Healthz) -> None:
        client = TestClient(create_app(hz, path="/status"))
        assert client.get("/status").status_code == 200
        assert client.get("/healthz").status_code == 404

    def test_router_can_be_mounted(self, hz: Healthz) -> None:
        app = FastAPI()
        app.include_router(healthz_router(hz), prefix="/internal")
        resp = TestClient(app).get("/internal/healthz")
        assert resp.status_code == 200
