"""Unit tests for per-form field error state."""

from __future__ import annotations

from tourfront.forms.registry import FieldErrorRegistry


def test_show_then_hide_field_removes_error() -> None:
    registry = FieldErrorRegistry()

    registry.show_field_error("titulo", "obrigatório")
    assert registry.is_field_error_visible("titulo") is True

    registry.hide_field_error("titulo")
    assert registry.is_field_error_visible("titulo") is False
    assert registry.get_field_error("titulo") == ""
    assert registry.active_field is None


def test_blur_hides_tooltip_but_keeps_error() -> None:
    registry = FieldErrorRegistry()
    registry.show_field_error("preco", "deve ser positivo")

    registry.hide_field_error()

    assert registry.get_field_error("preco") == "deve ser positivo"
    assert registry.is_field_error_visible("preco") is False
    assert registry.has_errors is True

    registry.show_field_error("preco", registry.get_field_error("preco"))
    assert registry.is_field_error_visible("preco") is True


def test_hiding_inactive_field_keeps_active_one_visible() -> None:
    registry = FieldErrorRegistry()
    registry.show_field_error("titulo", "obrigatório")
    registry.show_field_error("preco", "deve ser positivo")

    registry.hide_field_error("titulo")

    assert registry.active_field == "preco"
    assert registry.is_field_error_visible("preco") is True
    assert registry.get_error_count() == 1


def test_only_active_field_is_visible() -> None:
    registry = FieldErrorRegistry()
    registry.show_field_error("titulo", "obrigatório")
    registry.show_field_error("preco", "deve ser positivo")

    assert registry.is_field_error_visible("titulo") is False
    assert registry.is_field_error_visible("preco") is True


def test_set_field_errors_activates_first_key_and_clear_resets() -> None:
    registry = FieldErrorRegistry()

    registry.set_field_errors({"a": "x", "b": "y"})

    assert registry.active_field == "a"
    assert registry.get_all_errors() == {"a": "x", "b": "y"}

    registry.clear_all_errors()

    assert registry.has_any_errors() is False
    assert registry.active_field is None
    assert registry.get_error_count() == 0


def test_set_field_errors_replaces_previous_state() -> None:
    registry = FieldErrorRegistry()
    registry.show_field_error("old", "stale")

    registry.set_field_errors({})

    assert registry.get_all_errors() == {}
    assert registry.active_field is None


def test_get_all_errors_returns_a_copy() -> None:
    registry = FieldErrorRegistry()
    registry.show_field_error("email", "inválido")

    snapshot = registry.get_all_errors()
    snapshot["email"] = "mutated"
    snapshot["extra"] = "value"

    assert registry.get_all_errors() == {"email": "inválido"}
