from __future__ import annotations

from datetime import timedelta

import pytest

from framestate.core.errors import MissingCallbackError
from framestate.core.store import UiStates
from framestate.ui.response import DoneResponse
from framestate.ui.timer import TimerState
from tests._utils.dummies import FakeClock, RecordingSurface


def _timer(store: UiStates, clock: FakeClock, *, duration=1.0):
    def timing(s, state, fraction):
        s.label(f"timing {fraction:.2f}")

    def done(s, state):
        s.label("done")
        return DoneResponse.reset() if s.button("start") else None

    return store.timer("t", duration, clock=clock).timing_ui(timing).done_ui(done)


def test_first_running_frame_reports_zero_and_stops_at_duration(
    store: UiStates, surface: RecordingSurface, clock: FakeClock
):
    fractions: list[float] = []

    def show():
        return (
            store.timer("t", 1.5, clock=clock)
            .timing_ui(lambda s, u, f: fractions.append(f))
            .done_ui(lambda s, u: DoneResponse.reset() if s.button("start") else s.label("idle"))
            .show(surface)
        )

    show()
    assert surface.labels == ["idle"]
    surface.new_frame("start")
    show()

    # 時計を進めずに次のフレーム
    surface.new_frame()
    show()
    assert fractions == [pytest.approx(0.0)]

    clock.advance(1.5)
    show()
    assert fractions[-1] >= 1.0

    show()
    assert len(fractions) == 2
    assert surface.labels == ["idle"]


def test_timer_runs_for_its_duration_then_returns_to_done(
    store: UiStates, surface: RecordingSurface, clock: FakeClock
):
    # 開始前は done
    _timer(store, clock).show(surface.new_frame())
    assert surface.labels == ["done"]

    _timer(store, clock).show(surface.new_frame("start"))
    clock.advance(0.5)
    _timer(store, clock).show(surface.new_frame())
    assert surface.labels == ["timing 0.50"]

    clock.advance(0.6)
    # 完了フレームは timing が 1.0 以上で呼ばれる
    _timer(store, clock).show(surface.new_frame())
    assert surface.labels == ["timing 1.10"]

    _timer(store, clock).show(surface.new_frame())
    assert surface.labels == ["done"]


def test_fraction_is_exactly_one_at_duration(
    store: UiStates, surface: RecordingSurface, clock: FakeClock
):
    _timer(store, clock, duration=2.0).show(surface.new_frame("start"))
    clock.advance(2.0)
    t = _timer(store, clock, duration=2.0).build()
    t.show(surface.new_frame())
    assert surface.labels == ["timing 1.00"]
    assert not t.record.running


def test_duration_is_fixed_at_first_creation(
    store: UiStates, surface: RecordingSurface, clock: FakeClock
):
    _timer(store, clock, duration=1.0).show(surface.new_frame())
    t = _timer(store, clock, duration=5.0).build()
    assert t.record.duration == 1.0


def test_timedelta_duration(store: UiStates, surface: RecordingSurface, clock: FakeClock):
    t = _timer(store, clock, duration=timedelta(milliseconds=250)).build()
    assert t.record.duration == pytest.approx(0.25)


@pytest.mark.parametrize("bad", [0, -1.0, timedelta(0)])
def test_non_positive_duration_is_rejected(store: UiStates, bad):
    with pytest.raises(ValueError):
        store.timer("t", bad)


def test_user_state_is_shared_by_both_callbacks_and_persists(
    store: UiStates, surface: RecordingSurface, clock: FakeClock
):
    def timing(s, state, fraction):
        state["ticks"] += 1

    def done(s, state):
        state["dones"] += 1
        return DoneResponse.reset() if s.button("start") else None

    def show():
        (
            store.timer("t", 1.0, user_state=lambda: {"ticks": 0, "dones": 0}, clock=clock)
            .timing_ui(timing)
            .done_ui(done)
            .show(surface)
        )

    surface.new_frame("start")
    show()
    surface.new_frame()
    clock.advance(0.2)
    show()
    clock.advance(1.0)
    show()
    show()
    state = store.peek("t", TimerState)
    assert state is not None
    assert state.user_state == {"ticks": 2, "dones": 2}


def test_done_can_emit_a_value(store: UiStates, surface: RecordingSurface, clock: FakeClock):
    out = (
        store.timer("t", 1.0, clock=clock)
        .timing_ui(lambda s, u, f: None)
        .timer_done_ui(lambda s, u: DoneResponse.emit("ready"))
        .show(surface)
    )
    assert out == "ready"
    assert not store.peek("t", TimerState).record.running


@pytest.mark.parametrize(
    "with_timing, with_done, missing",
    [
        (False, True, ("timing_ui",)),
        (True, False, ("done_ui",)),
        (False, False, ("timing_ui", "done_ui")),
    ],
)
def test_missing_callbacks_are_contract_violations(with_timing, with_done, missing):
    store = UiStates()
    b = store.timer("t", 1.0)
    if with_timing:
        b.timing_ui(lambda s, u, f: None)
    if with_done:
        b.done_ui(lambda s, u: None)
    with pytest.raises(MissingCallbackError) as exc:
        b.show(RecordingSurface())
    assert exc.value.missing == missing
    assert "t" not in store
