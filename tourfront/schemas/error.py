"""Error envelope and normalized-failure schemas shared across the error layer."""

from __future__ import annotations

from pydantic import BaseModel
from pydantic import ConfigDict


class ErrorDetail(BaseModel):
    """Single field-level validation or domain issue detail."""

    field: str
    issue: str


class ErrorObject(BaseModel):
    """Canonical error payload object."""

    code: str
    message: str
    details: list[ErrorDetail] | None = None


class ErrorResponse(BaseModel):
    """Top-level API error response envelope."""

    error: ErrorObject


class NormalizedError(BaseModel):
    """Canonical shape derived from one failed backend call."""

    model_config = ConfigDict(frozen=True)

    message: str
    validation_errors: dict[str, str] | None = None
    status: int | None = None
    code: str | None = None


class ErrorDisplayOptions(BaseModel):
    """Caller preferences for how a failure is surfaced."""

    model_config = ConfigDict(frozen=True)

    show_toast: bool = True
    show_field_errors: bool = True
    custom_message: str | None = None
    duration: int = 5000
