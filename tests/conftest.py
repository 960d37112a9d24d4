"""Shared pytest fixtures for tourfront test suites."""

from collections.abc import Generator
from pathlib import Path
import sys

import pytest
from fastapi.testclient import TestClient

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from tourfront.interceptor.notifications import BufferedNotificationSink  # noqa: E402
from tourfront.interceptor.service import ErrorInterceptor  # noqa: E402


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Provide an API test client for contract suites."""
    from tourfront.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def sink() -> BufferedNotificationSink:
    return BufferedNotificationSink()


@pytest.fixture
def interceptor(sink: BufferedNotificationSink) -> ErrorInterceptor:
    """Interceptor whose toasts land in the ``sink`` fixture."""
    return ErrorInterceptor(sink=sink)
