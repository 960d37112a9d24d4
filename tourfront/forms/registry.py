"""Per-form field error state with a single visible field."""

from __future__ import annotations

from collections.abc import Mapping


class FieldErrorRegistry:
    """Track field validation errors and which field shows its tooltip.

    Hiding without a field name (blur) only clears visibility; the recorded
    error is kept so refocusing the field surfaces it again.
    """

    def __init__(self) -> None:
        self._errors: dict[str, str] = {}
        self._active_field: str | None = None

    @property
    def active_field(self) -> str | None:
        return self._active_field

    @property
    def has_errors(self) -> bool:
        return bool(self._errors)

    def show_field_error(self, field: str, message: str) -> None:
        self._errors[field] = message
        self._active_field = field

    def hide_field_error(self, field: str | None = None) -> None:
        if field is None:
            self._active_field = None
            return

        self._errors.pop(field, None)
        if self._active_field == field:
            self._active_field = None

    def clear_all_errors(self) -> None:
        self._errors = {}
        self._active_field = None

    def set_field_errors(self, errors: Mapping[str, str]) -> None:
        """Replace all errors; the first field becomes the visible one."""
        self._errors = dict(errors)
        self._active_field = next(iter(self._errors), None)

    def is_field_error_visible(self, field: str) -> bool:
        return self._active_field == field and field in self._errors

    def get_field_error(self, field: str) -> str:
        return self._errors.get(field, "")

    def has_any_errors(self) -> bool:
        return self.has_errors

    def get_error_count(self) -> int:
        return len(self._errors)

    def get_all_errors(self) -> dict[str, str]:
        return dict(self._errors)
