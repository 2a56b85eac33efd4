"""
どこで: `framestate` 入口（高レベル公開 API）。
何を: 状態ストア `UiStates`・タスクハンドル/ランナー・各ウィジェットのビルダ・応答型を再輸出。
なぜ: 利用者が単一名前空間から、状態保持→タスク投入→毎フレーム表示まで完結できるようにするため。

Usage:
    from framestate import UiStates, TaskRunner, DoneResponse

    store = UiStates()
    runner = TaskRunner()

    def frame(surface):
        def init(s, submit):
            if s.button("download"):
                submit(runner.submit(download))

        def done(s, outcome):
            s.label(str(outcome.value) if outcome.ok else "failed")
            if s.button("again"):
                return DoneResponse.reset()

        (store.promise_await("download")
              .init_ui(init)
              .spinner()
              .done_ui(done)
              .show(surface))
"""

from .core import (
    ContractViolation,
    FrameClock,
    KeyedStateStore,
    MissingCallbackError,
    StateSlot,
    StateTypeMismatch,
    Tickable,
    UiStates,
)
from .runtime import Failure, Outcome, Success, TaskHandle, TaskPhase, TaskRunner
from .ui import (
    DoneAction,
    DoneResponse,
    PromiseAwaitBuilder,
    RenderSurface,
    TaskSlot,
    TimerBuilder,
    TimerRecord,
    task_phase,
)

__all__ = [
    # ストア
    "UiStates",
    "KeyedStateStore",
    "StateSlot",
    # 契約違反
    "ContractViolation",
    "MissingCallbackError",
    "StateTypeMismatch",
    # フレーム駆動
    "FrameClock",
    "Tickable",
    # タスク
    "TaskHandle",
    "TaskRunner",
    "TaskPhase",
    "Outcome",
    "Success",
    "Failure",
    # ウィジェット
    "PromiseAwaitBuilder",
    "TimerBuilder",
    "TimerRecord",
    "TaskSlot",
    "task_phase",
    "DoneAction",
    "DoneResponse",
    "RenderSurface",
]

__version__ = "0.1.0"
