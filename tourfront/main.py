"""FastAPI application entrypoint and composition root for tourfront."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from tourfront.api.client import BackendClient
from tourfront.api.health import router as health_router
from tourfront.core.config import FrontendSettings
from tourfront.core.config import get_settings
from tourfront.core.errors import register_error_handlers
from tourfront.interceptor.global_handlers import build_logging_error_handler
from tourfront.interceptor.notifications import LoggingNotificationSink
from tourfront.interceptor.notifications import NotificationSink
from tourfront.interceptor.service import ErrorInterceptor
from tourfront.schemas.error import ErrorDisplayOptions

logger = logging.getLogger(__name__)


def build_error_interceptor(
    settings: FrontendSettings,
    *,
    sink: NotificationSink | None = None,
) -> ErrorInterceptor:
    """Create the single interceptor instance with its logging global handler."""
    interceptor = ErrorInterceptor(
        sink=sink if sink is not None else LoggingNotificationSink(),
        default_options=ErrorDisplayOptions(duration=settings.toast_duration_ms),
    )
    interceptor.set_global_error_handler(build_logging_error_handler(verbose=not settings.is_production))
    return interceptor


def build_backend_client(settings: FrontendSettings, interceptor: ErrorInterceptor) -> BackendClient:
    """Create the backend transport wired to ``interceptor``."""
    return BackendClient(
        base_url=settings.api_base_url,
        interceptor=interceptor,
        token_provider=lambda: settings.api_token or None,
        silent_paths=settings.silent_error_paths,
        timeout_seconds=settings.http_timeout_seconds,
        max_retries=settings.http_max_retries,
        backoff_seconds=settings.http_backoff_seconds,
    )


def create_app(settings: FrontendSettings | None = None) -> FastAPI:
    """Build the application and attach the error layer to ``app.state``."""
    settings = settings or get_settings()
    logger.info("Starting tourfront with settings=%s", settings.safe_for_logging())

    interceptor = build_error_interceptor(settings)

    application = FastAPI(title="tourfront")
    application.state.settings = settings
    application.dependency_overrides[get_settings] = lambda: settings
    application.state.error_interceptor = interceptor
    application.state.backend_client = build_backend_client(settings, interceptor)
    register_error_handlers(application)
    application.include_router(health_router)
    return application


app = create_app()
