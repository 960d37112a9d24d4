"""Application configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os

DEFAULT_API_BASE_URL = "http://localhost:8080"
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0
DEFAULT_HTTP_MAX_RETRIES = 2
DEFAULT_HTTP_BACKOFF_SECONDS = 0.5
DEFAULT_TOAST_DURATION_MS = 5000
DEFAULT_SILENT_ERROR_PATHS = ("/auth/refresh", "/auth/me")
DEFAULT_ENVIRONMENT = "development"
DEFAULT_VERSION = "1.0.0"


def _get_float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    return float(raw)


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    return int(raw)


def _get_list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    raw = os.getenv(name)
    if raw is None:
        return default
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def redact_secret(secret: str) -> str:
    """Return a non-recoverable placeholder for sensitive values."""
    if not secret:
        return "<empty>"
    return "<redacted>"


@dataclass(frozen=True)
class FrontendSettings:
    """Runtime settings for backend calls and error display."""

    api_base_url: str
    api_token: str
    http_timeout_seconds: float
    http_max_retries: int
    http_backoff_seconds: float
    toast_duration_ms: int
    silent_error_paths: tuple[str, ...]
    environment: str
    version: str

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    def safe_for_logging(self) -> dict[str, str | int | float | tuple[str, ...]]:
        """Return settings safe for logs."""
        return {
            "api_base_url": self.api_base_url,
            "api_token": redact_secret(self.api_token),
            "http_timeout_seconds": self.http_timeout_seconds,
            "http_max_retries": self.http_max_retries,
            "http_backoff_seconds": self.http_backoff_seconds,
            "toast_duration_ms": self.toast_duration_ms,
            "silent_error_paths": self.silent_error_paths,
            "environment": self.environment,
            "version": self.version,
        }


@lru_cache(maxsize=1)
def get_settings() -> FrontendSettings:
    """Load front-end settings from the environment."""
    return FrontendSettings(
        api_base_url=os.getenv("TOURFRONT_API_BASE_URL", DEFAULT_API_BASE_URL),
        api_token=os.getenv("TOURFRONT_API_TOKEN", ""),
        http_timeout_seconds=_get_float_env("TOURFRONT_HTTP_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS),
        http_max_retries=_get_int_env("TOURFRONT_HTTP_MAX_RETRIES", DEFAULT_HTTP_MAX_RETRIES),
        http_backoff_seconds=_get_float_env("TOURFRONT_HTTP_BACKOFF_SECONDS", DEFAULT_HTTP_BACKOFF_SECONDS),
        toast_duration_ms=_get_int_env("TOURFRONT_TOAST_DURATION_MS", DEFAULT_TOAST_DURATION_MS),
        silent_error_paths=_get_list_env("TOURFRONT_SILENT_ERROR_PATHS", DEFAULT_SILENT_ERROR_PATHS),
        environment=os.getenv("TOURFRONT_ENVIRONMENT", DEFAULT_ENVIRONMENT),
        version=os.getenv("TOURFRONT_VERSION", DEFAULT_VERSION),
    )
