"""
どこで: `framestate.ui` パッケージの公開入口。
何を: promise_await/default_promise_await/future_await/timer の各ウィジェットと、
      描画面 Protocol・done 応答型を再輸出。
なぜ: 外部から薄いファサードを提供し、内部実装の入れ替えと依存分離を容易にするため。

補足:
- `PygletSurface` は pyglet を import するため、ここでは再輸出しない
  （`framestate.ui.pyglet_surface` から明示的に import する）。
"""

from .default_promise_await import DefaultPromiseAwaitBuilder
from .future_await import (
    FutureStatusBuilder,
    SetFutureBuilder,
    future_status,
    is_running,
    set_future,
)
from .promise_await import PromiseAwait, PromiseAwaitBuilder, TaskSlot, task_phase
from .response import DoneAction, DoneResponse
from .surface import RenderSurface
from .timer import Timer, TimerBuilder, TimerRecord, TimerState

__all__ = [
    "DefaultPromiseAwaitBuilder",
    "FutureStatusBuilder",
    "SetFutureBuilder",
    "future_status",
    "is_running",
    "set_future",
    "PromiseAwait",
    "PromiseAwaitBuilder",
    "TaskSlot",
    "task_phase",
    "DoneAction",
    "DoneResponse",
    "RenderSurface",
    "Timer",
    "TimerBuilder",
    "TimerRecord",
    "TimerState",
]
