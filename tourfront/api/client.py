"""HTTP client for the marketplace backend with centralized failure handling."""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Mapping
import logging
import random
import time
from typing import Any

import requests

from tourfront.core.errors import ApiRequestError
from tourfront.interceptor.normalizer import normalize_failure
from tourfront.interceptor.service import ErrorInterceptor
from tourfront.schemas.error import ErrorDisplayOptions

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})
IDEMPOTENT_METHODS = frozenset({"GET", "HEAD"})

TokenProvider = Callable[[], str | None]


class BackendClient:
    """Call backend REST endpoints and route every failure through the interceptor.

    Idempotent requests are retried on transient failures with exponential
    backoff. Failures always end as a raised ``ApiRequestError``.
    """

    def __init__(
        self,
        *,
        base_url: str,
        interceptor: ErrorInterceptor,
        token_provider: TokenProvider | None = None,
        on_unauthorized: Callable[[], None] | None = None,
        silent_paths: Iterable[str] = (),
        timeout_seconds: float = 30.0,
        max_retries: int = 2,
        backoff_seconds: float = 0.5,
        session: requests.Session | None = None,
        sleep_fn: Callable[[float], None] = time.sleep,
        jitter_fn: Callable[[], float] = random.random,
    ) -> None:
        normalized = base_url.rstrip("/")
        if not normalized:
            raise ValueError("base_url is required")
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")
        if max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if backoff_seconds <= 0:
            raise ValueError("backoff_seconds must be positive")

        self._base_url = normalized
        self._interceptor = interceptor
        self._token_provider = token_provider
        self._on_unauthorized = on_unauthorized
        self._silent_paths = tuple(silent_paths)
        self._timeout_seconds = timeout_seconds
        self._max_retries = max_retries
        self._backoff_seconds = backoff_seconds
        self._session = session or requests.Session()
        self._sleep_fn = sleep_fn
        self._jitter_fn = jitter_fn

    def get(self, path: str, *, params: Mapping[str, Any] | None = None, **kwargs: Any) -> Any:
        return self.request("GET", path, params=params, **kwargs)

    def post(self, path: str, *, json: Any = None, **kwargs: Any) -> Any:
        return self.request("POST", path, json=json, **kwargs)

    def put(self, path: str, *, json: Any = None, **kwargs: Any) -> Any:
        return self.request("PUT", path, json=json, **kwargs)

    def patch(self, path: str, *, json: Any = None, **kwargs: Any) -> Any:
        return self.request("PATCH", path, json=json, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> Any:
        return self.request("DELETE", path, **kwargs)

    def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: Mapping[str, Any] | None = None,
        error_options: ErrorDisplayOptions | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body (``None`` if empty)."""
        method = method.upper()
        url = f"{self._base_url}/{path.lstrip('/')}"
        attempts = self._max_retries + 1 if method in IDEMPOTENT_METHODS else 1

        for attempt in range(attempts):
            try:
                response = self._session.request(
                    method,
                    url,
                    headers=self._headers(),
                    json=json,
                    params=params,
                    timeout=self._timeout_seconds,
                )
            except (requests.Timeout, requests.ConnectionError) as exc:
                if attempt + 1 >= attempts:
                    raise self._fail(path, exc, error_options) from exc
                logger.info("Retrying %s %s after transport error (attempt %s)", method, path, attempt + 1)
                self._sleep_fn(self._retry_delay(attempt))
                continue
            except requests.RequestException as exc:
                raise self._fail(path, exc, error_options) from exc

            if response.status_code in RETRYABLE_STATUS_CODES and attempt + 1 < attempts:
                logger.info(
                    "Retrying %s %s after status %s (attempt %s)",
                    method,
                    path,
                    response.status_code,
                    attempt + 1,
                )
                self._sleep_fn(self._retry_delay(attempt, response.headers))
                continue

            try:
                response.raise_for_status()
            except requests.HTTPError as exc:
                if exc.response is None:
                    exc.response = response
                raise self._fail(path, exc, error_options) from exc

            return self._decode(response)

        raise ApiRequestError(normalize_failure(None))

    def _fail(
        self,
        path: str,
        exc: requests.RequestException,
        error_options: ErrorDisplayOptions | None,
    ) -> ApiRequestError:
        status_code = exc.response.status_code if exc.response is not None else None

        if status_code == 401:
            logger.info("Backend rejected credentials for %s", path)
            if self._on_unauthorized is not None:
                try:
                    self._on_unauthorized()
                except Exception:
                    logger.exception("Unauthorized hook failed for %s", path)
            return ApiRequestError(normalize_failure(exc), failure=exc)

        if self._is_silent(path):
            logger.debug("Suppressing error display for silent path %s", path)
            return ApiRequestError(normalize_failure(exc), failure=exc)

        return self._interceptor.handle_error(exc, error_options)

    def _is_silent(self, path: str) -> bool:
        return any(silent in path for silent in self._silent_paths)

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "User-Agent": "tourfront/1.0",
        }
        token = self._token_provider() if self._token_provider is not None else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _retry_delay(
        self,
        attempt: int,
        headers: Mapping[str, Any] | None = None,
    ) -> float:
        base = self._backoff_seconds * (2**attempt)
        jitter = self._jitter_fn() * self._backoff_seconds
        delay = base + jitter

        if headers:
            retry_after = headers.get("Retry-After")
            if retry_after is not None:
                try:
                    delay = max(delay, float(retry_after))
                except (TypeError, ValueError):
                    pass
        return delay

    @staticmethod
    def _decode(response: Any) -> Any:
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text
