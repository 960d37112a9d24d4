"""Bind a form's field error registry to the error interceptor."""

from __future__ import annotations

from collections.abc import Collection
import logging

from tourfront.core.errors import UnknownFieldError
from tourfront.forms.registry import FieldErrorRegistry
from tourfront.interceptor.service import ErrorInterceptor

logger = logging.getLogger(__name__)


class FormErrorHandler:
    """Receive field errors for one form while it is mounted.

    Use as a context manager around the lifetime of the form view so the
    handler is always unregistered.
    """

    def __init__(
        self,
        form_id: str,
        interceptor: ErrorInterceptor,
        *,
        registry: FieldErrorRegistry | None = None,
        fields: Collection[str] | None = None,
    ) -> None:
        if not form_id:
            raise ValueError("form_id is required")
        self.form_id = form_id
        self.registry = registry or FieldErrorRegistry()
        self._interceptor = interceptor
        self._fields = frozenset(fields) if fields is not None else None
        self._mounted = False
        self._registered_handler = self.handle_field_error

    @property
    def is_mounted(self) -> bool:
        return self._mounted

    def mount(self) -> None:
        self._interceptor.register_field_error_handler(self.form_id, self._registered_handler)
        self._mounted = True

    def unmount(self) -> None:
        if not self._mounted:
            return
        self._interceptor.unregister_field_error_handler(self.form_id, self._registered_handler)
        self._mounted = False

    def __enter__(self) -> FormErrorHandler:
        self.mount()
        return self

    def __exit__(self, *_: object) -> None:
        self.unmount()

    def handle_field_error(self, field: str, message: str) -> None:
        """Record a backend field error; refuse fields this form does not render."""
        if self._fields is not None and field not in self._fields:
            raise UnknownFieldError(f"form {self.form_id!r} has no field {field!r}")
        logger.debug("Form %s received error for field=%s", self.form_id, field)
        self.registry.show_field_error(field, message)

    def on_field_focus(self, field: str) -> None:
        message = self.registry.get_field_error(field)
        if message:
            self.registry.show_field_error(field, message)

    def on_field_blur(self) -> None:
        self.registry.hide_field_error()

    def show_field_error(self, field: str, message: str) -> None:
        self.registry.show_field_error(field, message)

    def hide_field_error(self, field: str | None = None) -> None:
        self.registry.hide_field_error(field)

    def clear_all_errors(self) -> None:
        self.registry.clear_all_errors()

    def is_field_error_visible(self, field: str) -> bool:
        return self.registry.is_field_error_visible(field)

    def get_field_error(self, field: str) -> str:
        return self.registry.get_field_error(field)
