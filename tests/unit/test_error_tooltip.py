"""Unit tests for the auto-hiding error tooltip."""

from __future__ import annotations

from collections.abc import Callable

from tourfront.forms.tooltip import ErrorTooltip


class _FakeTimer:
    def __init__(self, delay: float, callback: Callable[[], None]) -> None:
        self.delay = delay
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.callback()


class _FakeScheduler:
    def __init__(self) -> None:
        self.timers: list[_FakeTimer] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> _FakeTimer:
        timer = _FakeTimer(delay, callback)
        self.timers.append(timer)
        return timer


def test_show_and_hide_without_auto_hide() -> None:
    scheduler = _FakeScheduler()
    tooltip = ErrorTooltip(scheduler=scheduler)

    tooltip.show("Campo obrigatório")
    assert tooltip.is_visible is True
    assert tooltip.message == "Campo obrigatório"
    assert scheduler.timers == []

    tooltip.hide()
    assert tooltip.is_visible is False
    assert tooltip.message == "Campo obrigatório"


def test_auto_hide_timer_hides_tooltip() -> None:
    scheduler = _FakeScheduler()
    tooltip = ErrorTooltip(auto_hide_delay_ms=3000, scheduler=scheduler)

    tooltip.show("Data inválida")

    (timer,) = scheduler.timers
    assert timer.delay == 3.0
    timer.fire()
    assert tooltip.is_visible is False


def test_show_cancels_pending_timer_and_stale_timer_is_noop() -> None:
    scheduler = _FakeScheduler()
    tooltip = ErrorTooltip(auto_hide_delay_ms=1000, scheduler=scheduler)

    tooltip.show("first")
    tooltip.show("second")

    first, second = scheduler.timers
    assert first.cancelled is True
    first.fire()
    assert tooltip.is_visible is True
    assert tooltip.message == "second"

    second.fire()
    assert tooltip.is_visible is False


def test_hide_cancels_timer() -> None:
    scheduler = _FakeScheduler()
    tooltip = ErrorTooltip(auto_hide_delay_ms=1000, scheduler=scheduler)

    tooltip.show("msg")
    tooltip.hide()

    assert scheduler.timers[0].cancelled is True


def test_timer_firing_after_close_is_noop() -> None:
    scheduler = _FakeScheduler()
    tooltip = ErrorTooltip(auto_hide_delay_ms=1000, scheduler=scheduler)
    tooltip.show("msg")

    tooltip.close()
    scheduler.timers[0].fire()

    assert scheduler.timers[0].cancelled is True
    assert tooltip.is_visible is True


def test_toggle_switches_visibility() -> None:
    tooltip = ErrorTooltip(scheduler=_FakeScheduler())

    tooltip.toggle()
    assert tooltip.is_visible is False

    tooltip.toggle("Vagas esgotadas")
    assert tooltip.is_visible is True

    tooltip.toggle("ignored")
    assert tooltip.is_visible is False
    assert tooltip.message == "Vagas esgotadas"
