"""
どこで: `framestate.core` のフレーム駆動。
何を: 1 フレーム更新 `tick(dt)` を持つ `Tickable` と、それらを登録順に呼ぶ `FrameClock`。
なぜ: ホストの描画ループから 1 回呼ぶだけで、状態ストアのフレーム境界と他の更新を同じ順序で進めるため。
"""

from __future__ import annotations

import time
from typing import Callable, Protocol, Sequence


class Tickable(Protocol):
    """1 フレーム分の更新を行うインターフェース。"""

    def tick(self, dt: float) -> None:
        """内部状態を `dt` 秒ぶん進める。"""


class FrameClock:
    """登録された Tickable を固定順序で実行する。"""

    def __init__(
        self,
        tickables: Sequence[Tickable],
        *,
        clock: Callable[[], float] = time.perf_counter,
    ):
        self._tickables = tuple(tickables)
        self._clock = clock
        self._last_time = clock()
        self._frames = 0

    @property
    def frames(self) -> int:
        """これまでに進めたフレーム数。"""
        return self._frames

    def tick(self, dt: float | None = None) -> None:
        """全 Tickable を 1 フレーム進める。`dt` 省略時は前回呼び出しからの実測値。"""
        now = self._clock()
        if dt is None:
            dt = now - self._last_time
        self._last_time = now

        for t in self._tickables:
            t.tick(dt)
        self._frames += 1
