"""Unit tests for environment-driven settings."""

from __future__ import annotations

import pytest

from tourfront.core.config import DEFAULT_SILENT_ERROR_PATHS
from tourfront.core.config import get_settings


@pytest.fixture(autouse=True)
def _reset_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults_apply_without_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("TOURFRONT_API_BASE_URL", "TOURFRONT_SILENT_ERROR_PATHS", "TOURFRONT_TOAST_DURATION_MS"):
        monkeypatch.delenv(name, raising=False)

    settings = get_settings()

    assert settings.api_base_url == "http://localhost:8080"
    assert settings.silent_error_paths == DEFAULT_SILENT_ERROR_PATHS
    assert settings.toast_duration_ms == 5000


def test_environment_overrides_and_secret_redaction(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TOURFRONT_API_BASE_URL", "https://backend.internal")
    monkeypatch.setenv("TOURFRONT_API_TOKEN", "service-token")
    monkeypatch.setenv("TOURFRONT_HTTP_MAX_RETRIES", "5")
    monkeypatch.setenv("TOURFRONT_SILENT_ERROR_PATHS", "/auth/me, /health ,")
    monkeypatch.setenv("TOURFRONT_ENVIRONMENT", "Production")

    settings = get_settings()

    assert settings.api_base_url == "https://backend.internal"
    assert settings.http_max_retries == 5
    assert settings.silent_error_paths == ("/auth/me", "/health")
    assert settings.is_production is True
    assert settings.safe_for_logging()["api_token"] == "<redacted>"
