"""Failed-call normalization helpers for the error interceptor."""

from __future__ import annotations

from collections.abc import Mapping
import re
from typing import Any

import requests

from tourfront.schemas.error import NormalizedError

_DEFAULT_STATUS_MESSAGES: dict[int, str] = {
    400: "invalid data submitted",
    401: "not authenticated",
    403: "not authorized for this action",
    404: "resource not found",
    409: "conflict with existing data",
    422: "invalid input data",
    429: "too many attempts, retry later",
    500: "internal server error",
    502: "server temporarily unavailable",
    503: "service temporarily unavailable",
}
FALLBACK_MESSAGE = "unexpected error, try again"
NETWORK_ERROR_MESSAGE = "could not reach the server, check your connection"
TIMEOUT_MESSAGE = "the server took too long to respond"
INVALID_FIELD_MESSAGE = "invalid value"

FIELD_LABELS: dict[str, str] = {
    "nomeCompleto": "Nome completo",
    "nomeEmpresa": "Nome da empresa",
    "dataSaida": "Data de saída",
    "dataRetorno": "Data de retorno",
    "localSaida": "Local de saída",
    "localDestino": "Local de destino",
    "vagasTotal": "Total de vagas",
    "aceitaPix": "Aceita PIX",
    "aceitaCartao": "Aceita cartão",
}

_VALIDATION_KEYS = ("validationErrors", "errors", "fieldErrors")
_DETAIL_MESSAGE_KEYS = ("message", "issue", "defaultMessage")
_UPPERCASE = re.compile(r"([A-Z])")


def default_error_message(status: int | None) -> str:
    """Return the user-facing default message for an HTTP status."""
    if status is None:
        return FALLBACK_MESSAGE
    return _DEFAULT_STATUS_MESSAGES.get(status, FALLBACK_MESSAGE)


def format_field_name(field: str, labels: Mapping[str, str] | None = None) -> str:
    """Turn an identifier-style field name into a readable label."""
    table = FIELD_LABELS if labels is None else labels
    if field in table:
        return table[field]

    formatted = _UPPERCASE.sub(r" \1", field).lower()
    return formatted[:1].upper() + formatted[1:]


def normalize_failure(failure: Any) -> NormalizedError:
    """Classify a failed call into the canonical normalized error shape.

    ``failure`` is usually a ``requests.RequestException``; a bare
    ``requests.Response`` (or anything exposing ``status_code``/``json()``) is
    accepted as well.
    """
    response = _extract_response(failure)

    if response is None:
        if isinstance(failure, requests.Timeout):
            return NormalizedError(message=TIMEOUT_MESSAGE, code="timeout")
        if isinstance(failure, requests.ConnectionError):
            return NormalizedError(message=NETWORK_ERROR_MESSAGE, code="network_error")
        return NormalizedError(message=FALLBACK_MESSAGE)

    status = _as_optional_int(getattr(response, "status_code", None))
    body = _read_body(response)
    nested = body.get("error") if isinstance(body.get("error"), Mapping) else {}

    message = (
        _as_optional_string(body.get("message"))
        or _as_optional_string(nested.get("message"))
        or default_error_message(status)
    )
    code = _as_optional_string(body.get("code")) or _as_optional_string(nested.get("code"))

    return NormalizedError(
        message=message,
        validation_errors=extract_validation_errors(body),
        status=status,
        code=code,
    )


def extract_validation_errors(body: Mapping[str, Any]) -> dict[str, str] | None:
    """Return the first non-empty field error map found in a response body."""
    candidates = [body.get(key) for key in _VALIDATION_KEYS]
    nested = body.get("error")
    if isinstance(nested, Mapping):
        candidates.append(nested.get("details"))

    for candidate in candidates:
        parsed = _coerce_field_errors(candidate)
        if parsed:
            return parsed
    return None


def _extract_response(failure: Any) -> Any:
    if isinstance(failure, requests.Response):
        return failure
    if isinstance(failure, BaseException):
        return getattr(failure, "response", None)
    if hasattr(failure, "status_code"):
        return failure
    return None


def _read_body(response: Any) -> dict[str, Any]:
    reader = getattr(response, "json", None)
    if not callable(reader):
        return {}
    try:
        body = reader()
    except ValueError:
        return {}
    if not isinstance(body, Mapping):
        return {}
    return dict(body)


def _coerce_field_errors(raw: Any) -> dict[str, str] | None:
    if isinstance(raw, Mapping):
        return {str(field): _join_messages(message) for field, message in raw.items()}

    if isinstance(raw, list):
        errors: dict[str, str] = {}
        for item in raw:
            if not isinstance(item, Mapping) or item.get("field") in (None, ""):
                continue
            message = next(
                (item[key] for key in _DETAIL_MESSAGE_KEYS if item.get(key) not in (None, "")),
                "",
            )
            errors[str(item["field"])] = _join_messages(message)
        return errors

    return None


def _join_messages(message: Any) -> str:
    if isinstance(message, (list, tuple)):
        parts = [str(part) for part in message if part not in (None, "")]
        return "; ".join(parts) if parts else INVALID_FIELD_MESSAGE
    if message in (None, ""):
        return INVALID_FIELD_MESSAGE
    return str(message)


def _as_optional_int(value: Any) -> int | None:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_optional_string(value: Any) -> str | None:
    if value in (None, "") or isinstance(value, (Mapping, list)):
        return None
    return str(value)
