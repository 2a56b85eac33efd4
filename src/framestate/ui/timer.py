"""
どこで: `framestate.ui` のタイマーウィジェット。
何を: キーごとの `TimerRecord`（開始時刻と固定の長さ）を、毎フレーム timing / done の
      いずれかのコールバック呼び出しへ変換する状態機械。任意のユーザ状態も同じキーに保持する。
なぜ: 描画ループをブロックせずに経過時間を追跡し、一定時間の表示（通知/クールダウン等）を描くため。

状態遷移:
- IDLE    → RUNNING : done コールバックが `DoneResponse.reset()` を返したとき（現在時刻を記録）
- RUNNING → IDLE    : timing コールバックの後、経過 >= 長さ になったとき（自律遷移）
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar, cast

from framestate.core.errors import MissingCallbackError

from .response import DoneAction, DoneResponse, interpret
from .surface import RenderSurface

if TYPE_CHECKING:  # pragma: no cover - 型注釈専用
    from framestate.core.store import UiStates

logger = logging.getLogger(__name__)

U = TypeVar("U")
R = TypeVar("R")

TimingUi = Callable[[RenderSurface, Any, float], None]
TimerDoneUi = Callable[[RenderSurface, Any], "DoneResponse[Any] | None"]


def _to_seconds(duration: float | timedelta) -> float:
    if isinstance(duration, timedelta):
        seconds = duration.total_seconds()
    else:
        seconds = float(duration)
    if not seconds > 0.0:
        raise ValueError(f"timer duration must be positive, got {duration!r}")
    return seconds


@dataclass
class TimerRecord:
    """開始時刻（IDLE 中は None）と固定の長さ（秒）。"""

    duration: float
    started_at: float | None = None

    @property
    def running(self) -> bool:
        return self.started_at is not None

    def elapsed(self, now: float) -> float:
        if self.started_at is None:
            return 0.0
        return now - self.started_at

    def fraction(self, now: float) -> float:
        # 完了フレームでは 1.0 を超えうる
        return self.elapsed(now) / self.duration


@dataclass
class TimerState(Generic[U]):
    """ストアに保存されるタイマー 1 件分（内部状態＋ユーザ状態）。"""

    record: TimerRecord
    user_state: U


class Timer(Generic[U, R]):
    """検証済みの構成。`show()` で 1 フレーム分の遷移とディスパッチを行う。"""

    def __init__(
        self,
        store: "UiStates",
        key: str,
        state: TimerState[U],
        timing_ui: TimingUi,
        done_ui: TimerDoneUi,
        clock: Callable[[], float],
    ) -> None:
        self._store = store
        self._key = key
        self._state = state
        self._timing_ui = timing_ui
        self._done_ui = done_ui
        self._clock = clock

    @property
    def record(self) -> TimerRecord:
        return self._state.record

    @property
    def user_state(self) -> U:
        return self._state.user_state

    def show(self, surface: RenderSurface) -> R | None:
        self._store.mark_shown(self._key)
        record = self._state.record

        if record.started_at is None:
            response = interpret(
                self._done_ui(surface, self._state.user_state), widget="timer", key=self._key
            )
            if response.action is DoneAction.RESET:
                record.started_at = self._clock()
                logger.debug("[timer] key=%s IDLE->RUNNING", self._key)
            elif response.action is DoneAction.EMIT:
                return response.value
            return None

        now = self._clock()
        elapsed = record.elapsed(now)
        self._timing_ui(surface, self._state.user_state, elapsed / record.duration)
        if elapsed >= record.duration:
            record.started_at = None
            logger.debug("[timer] key=%s RUNNING->IDLE after %.3fs", self._key, elapsed)
        return None


class TimerBuilder(Generic[U, R]):
    """timing/done の 2 コールバックを集めるビルダ。"""

    widget = "timer"

    def __init__(
        self,
        store: "UiStates",
        key: str,
        duration: float | timedelta,
        *,
        user_state: Callable[[], U] | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self._store = store
        self._key = key
        # 長さは初回生成時に固定される（以降の値は無視）
        self._duration = _to_seconds(duration)
        self._user_state = user_state
        self._clock = clock or time.monotonic
        self._timing_ui: TimingUi | None = None
        self._done_ui: TimerDoneUi | None = None

    def timing_ui(self, fn: TimingUi) -> "TimerBuilder[U, R]":
        """`fn(surface, user_state, fraction)`。RUNNING 中に毎フレーム呼ばれる。"""
        self._timing_ui = fn
        return self

    def done_ui(self, fn: TimerDoneUi) -> "TimerBuilder[U, R]":
        """`fn(surface, user_state) -> DoneResponse | None`。reset() で計測を開始する。"""
        self._done_ui = fn
        return self

    # 別名
    timer_done_ui = done_ui

    def _new_state(self) -> TimerState[Any]:
        user = self._user_state() if self._user_state is not None else None
        return TimerState(TimerRecord(self._duration), user)

    def build(self) -> Timer[U, R]:
        missing = [
            name
            for name, fn in (("timing_ui", self._timing_ui), ("done_ui", self._done_ui))
            if fn is None
        ]
        if missing:
            raise MissingCallbackError(self.widget, self._key, missing)
        state: TimerState[U] = self._store.get_or_create(self._key, self._new_state, TimerState)
        return Timer(
            self._store,
            self._key,
            state,
            cast(TimingUi, self._timing_ui),
            cast(TimerDoneUi, self._done_ui),
            self._clock,
        )

    def show(self, surface: RenderSurface) -> R | None:
        return self.build().show(surface)


__all__ = ["TimerRecord", "TimerState", "Timer", "TimerBuilder", "TimingUi", "TimerDoneUi"]
