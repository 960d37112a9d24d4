"""Contract checks for the health endpoint."""

from __future__ import annotations

from datetime import datetime

from fastapi.testclient import TestClient


def test_health_reports_liveness_metadata(client: TestClient) -> None:
    response = client.get("/api/health")

    assert response.status_code == 200
    payload = response.json()
    assert payload["status"] == "healthy"
    assert payload["uptime"] >= 0
    assert payload["environment"]
    assert payload["version"]
    datetime.fromisoformat(payload["timestamp"].replace("Z", "+00:00"))


def test_health_rejects_other_methods(client: TestClient) -> None:
    response = client.post("/api/health")

    assert response.status_code == 405
    assert response.json() == {"error": {"code": "method_not_allowed", "message": "Method not allowed"}}


def test_app_exposes_wired_error_layer(client: TestClient) -> None:
    from tourfront.api.client import BackendClient
    from tourfront.interceptor.service import ErrorInterceptor

    assert isinstance(client.app.state.error_interceptor, ErrorInterceptor)
    assert isinstance(client.app.state.backend_client, BackendClient)


def test_health_reports_settings_given_to_create_app() -> None:
    from dataclasses import replace

    from tourfront.core.config import get_settings
    from tourfront.main import create_app

    application = create_app(replace(get_settings(), environment="staging", version="9.9.9"))

    with TestClient(application) as test_client:
        payload = test_client.get("/api/health").json()

    assert payload["environment"] == "staging"
    assert payload["version"] == "9.9.9"
    assert application.state.settings.environment == "staging"
