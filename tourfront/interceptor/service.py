"""Central classification and routing of failed backend calls."""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Mapping
import logging
from typing import Any

from tourfront.core.errors import ApiRequestError
from tourfront.interceptor.normalizer import format_field_name
from tourfront.interceptor.normalizer import normalize_failure
from tourfront.interceptor.notifications import LIST_TOAST_MAX_WIDTH
from tourfront.interceptor.notifications import NotificationSink
from tourfront.interceptor.notifications import NullNotificationSink
from tourfront.interceptor.notifications import Toast
from tourfront.schemas.error import ErrorDisplayOptions
from tourfront.schemas.error import NormalizedError

logger = logging.getLogger(__name__)

FieldErrorHandler = Callable[[str, str], None]
GlobalErrorHandler = Callable[[NormalizedError], None]


class ErrorInterceptor:
    """Normalize failed calls and route them to field handlers or a toast.

    Field handlers are keyed by form id with last-write-wins semantics. Every
    registered handler receives every field of a validation payload; a handler
    that raises is treated as not owning that field.
    """

    def __init__(
        self,
        *,
        sink: NotificationSink | None = None,
        field_labels: Mapping[str, str] | None = None,
        default_options: ErrorDisplayOptions | None = None,
    ) -> None:
        self._sink = sink if sink is not None else NullNotificationSink()
        self._field_labels = field_labels
        self._default_options = default_options or ErrorDisplayOptions()
        self._field_error_handlers: dict[str, FieldErrorHandler] = {}
        self._global_error_handler: GlobalErrorHandler | None = None

    def register_field_error_handler(self, form_id: str, handler: FieldErrorHandler) -> None:
        """Store the handler for ``form_id``, replacing any previous one."""
        if form_id in self._field_error_handlers:
            logger.debug("Replacing field error handler for form_id=%s", form_id)
        self._field_error_handlers[form_id] = handler

    def unregister_field_error_handler(self, form_id: str, handler: FieldErrorHandler | None = None) -> None:
        """Forget the handler for ``form_id``; unknown ids are ignored.

        When ``handler`` is given, only that exact handler is removed, so a form
        that was superseded under the same id cannot evict its replacement.
        """
        if handler is not None and self._field_error_handlers.get(form_id) is not handler:
            return
        self._field_error_handlers.pop(form_id, None)

    def set_global_error_handler(self, handler: GlobalErrorHandler | None) -> None:
        self._global_error_handler = handler

    @property
    def registered_form_ids(self) -> tuple[str, ...]:
        return tuple(self._field_error_handlers)

    def handle_error(
        self,
        failure: Any,
        options: ErrorDisplayOptions | None = None,
    ) -> ApiRequestError:
        """Surface a failed call and return the error the caller must raise.

        Never raises. Validation errors go to the registered field handlers
        first; a consolidated toast is shown only when none of them claimed a
        field. The global handler runs exactly once whichever branch is taken.
        """
        opts = options or self._default_options
        normalized = normalize_failure(failure)

        if opts.show_field_errors and normalized.validation_errors:
            claimed = self._broadcast_field_errors(normalized.validation_errors)
            if not claimed and opts.show_toast:
                self._notify(self._validation_toast(normalized.validation_errors, opts.duration))
        elif opts.show_toast:
            self._notify(Toast(message=opts.custom_message or normalized.message, duration_ms=opts.duration))

        self._run_global_handler(normalized)

        error = ApiRequestError(normalized, failure=failure if isinstance(failure, BaseException) else None)
        if isinstance(failure, BaseException):
            error.__cause__ = failure
        return error

    def _broadcast_field_errors(self, validation_errors: Mapping[str, str]) -> bool:
        claimed = False
        for form_id, handler in list(self._field_error_handlers.items()):
            for field, message in validation_errors.items():
                if self._field_error_handlers.get(form_id) is not handler:
                    logger.debug("Skipping field error handler unregistered mid-broadcast form_id=%s", form_id)
                    break
                try:
                    handler(field, message)
                except Exception:
                    logger.debug("Field error handler form_id=%s did not claim field=%s", form_id, field, exc_info=True)
                    continue
                claimed = True
        return claimed

    def _validation_toast(self, validation_errors: Mapping[str, str], duration: int) -> Toast:
        entries = list(validation_errors.items())
        if len(entries) == 1:
            field, message = entries[0]
            return Toast(message=f"{self._label(field)}: {message}", duration_ms=duration)

        lines = "\n".join(f"• {self._label(field)}: {message}" for field, message in entries)
        return Toast(
            message=f"errors found:\n{lines}",
            duration_ms=duration,
            max_width=LIST_TOAST_MAX_WIDTH,
            preserve_line_breaks=True,
        )

    def _label(self, field: str) -> str:
        return format_field_name(field, self._field_labels)

    def _notify(self, toast: Toast) -> None:
        try:
            self._sink.notify(toast)
        except Exception:
            logger.exception("Notification sink failed to render toast")

    def _run_global_handler(self, normalized: NormalizedError) -> None:
        handler = self._global_error_handler
        if handler is None:
            return
        try:
            handler(normalized)
        except Exception:
            logger.exception("Global error handler failed")
