from __future__ import annotations

from framestate.core.frame_clock import FrameClock
from framestate.core.store import UiStates
from tests._utils.dummies import FakeClock


class _Recorder:
    def __init__(self, name: str, log: list[tuple[str, float]]) -> None:
        self.name = name
        self.log = log

    def tick(self, dt: float) -> None:
        self.log.append((self.name, dt))


def test_frame_clock_ticks_in_registration_order_with_measured_dt():
    log: list[tuple[str, float]] = []
    clock = FakeClock(10.0)
    fc = FrameClock([_Recorder("a", log), _Recorder("b", log)], clock=clock)

    clock.advance(0.25)
    fc.tick()
    assert log == [("a", 0.25), ("b", 0.25)]

    # pyglet のように dt が渡された場合はそれを使う
    fc.tick(0.5)
    assert log[-2:] == [("a", 0.5), ("b", 0.5)]
    assert fc.frames == 2


def test_frame_clock_drives_store_frames():
    store = UiStates()
    fc = FrameClock([store], clock=FakeClock())
    for _ in range(3):
        fc.tick()
    assert store.frame_index == 3
