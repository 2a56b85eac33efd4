"""
どこで: `framestate.ui` の非同期タスク表示ウィジェット。
何を: キーごとの `TaskSlot`（TaskHandle を高々 1 つ保持）を、毎フレーム
      init / waiting / done のいずれか 1 つのコールバック呼び出しへ変換する状態機械。
なぜ: 投げっぱなしのバックグラウンド計算を、描画フレームに同期した安全な状態として扱うため。

状態遷移:
- EMPTY   → RUNNING : init コールバック内で `submit(handle)` が呼ばれたとき
- RUNNING → SUCCESS/ERROR : 次のポーリングで完了を観測したとき（同フレームで done へ落ちる）
- SUCCESS/ERROR → EMPTY : done コールバックが `DoneResponse.reset()` を返したとき
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Generic, TypeVar, cast

from framestate.core.errors import ContractViolation, MissingCallbackError
from framestate.runtime.handle import FutureLike, Outcome, TaskHandle, TaskPhase

from .response import DoneAction, DoneResponse, interpret
from .surface import RenderSurface

if TYPE_CHECKING:  # pragma: no cover - 型注釈専用
    from framestate.core.store import UiStates

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

Submit = Callable[["TaskHandle[T] | FutureLike"], None]
InitUi = Callable[[RenderSurface, Submit], None]
WaitingUi = Callable[[RenderSurface], None]
DoneUi = Callable[[RenderSurface, Outcome[T]], "DoneResponse[R] | None"]


class TaskSlot(Generic[T]):
    """ストアの 1 エントリに置かれる、高々 1 つの TaskHandle。"""

    __slots__ = ("handle",)

    def __init__(self) -> None:
        self.handle: TaskHandle[T] | None = None

    @property
    def phase(self) -> TaskPhase:
        if self.handle is None:
            return TaskPhase.EMPTY
        return self.handle.phase

    def set(self, handle: "TaskHandle[T] | FutureLike") -> None:
        """ハンドルを保持する。既存のハンドルは破棄される（キャンセルはしない）。"""
        self.handle = TaskHandle.wrap(handle)

    def clear(self) -> None:
        self.handle = None

    def poll(self) -> Outcome[T] | None:
        if self.handle is None:
            return None
        return self.handle.poll()


class _OneShotSubmit(Generic[T]):
    """init ディスパッチ中に 1 回だけ使える submit 関数。"""

    __slots__ = ("_slot", "_key", "_used", "_open")

    def __init__(self, slot: TaskSlot[T], key: str) -> None:
        self._slot = slot
        self._key = key
        self._used = False
        self._open = True

    def __call__(self, handle: "TaskHandle[T] | FutureLike") -> None:
        if not self._open:
            raise ContractViolation(
                f"promise_await({self._key!r}) submit called after the init dispatch returned"
            )
        if self._used:
            raise ContractViolation(
                f"promise_await({self._key!r}) submit called twice; only one task per key"
            )
        self._used = True
        self._slot.set(handle)

    def close(self) -> bool:
        self._open = False
        return self._used


class PromiseAwait(Generic[T, R]):
    """検証済みの構成。`show()` で 1 フレーム分の遷移とディスパッチを行う。"""

    def __init__(
        self,
        store: "UiStates",
        key: str,
        slot: TaskSlot[T],
        init_ui: InitUi,
        waiting_ui: WaitingUi,
        done_ui: DoneUi,
    ) -> None:
        self._store = store
        self._key = key
        self._slot = slot
        self._init_ui = init_ui
        self._waiting_ui = waiting_ui
        self._done_ui = done_ui

    @property
    def key(self) -> str:
        return self._key

    @property
    def phase(self) -> TaskPhase:
        return self._slot.phase

    def show(self, surface: RenderSurface) -> R | None:
        """1 フレーム分を処理する。done が `emit` を返したときだけ値を返す。"""
        self._store.mark_shown(self._key)
        slot = self._slot

        if slot.handle is None:
            submit: _OneShotSubmit[T] = _OneShotSubmit(slot, self._key)
            try:
                self._init_ui(surface, submit)
            finally:
                submitted = submit.close()
            if submitted:
                logger.debug("[promise_await] key=%s EMPTY->RUNNING", self._key)
            return None

        was_pending = slot.handle.outcome is None
        outcome = slot.poll()  # 1 フレームにつき 1 回だけ
        if outcome is None:
            self._waiting_ui(surface)
            return None
        if was_pending:
            logger.debug(
                "[promise_await] key=%s RUNNING->%s", self._key, slot.phase.name
            )

        response = interpret(
            self._done_ui(surface, outcome), widget="promise_await", key=self._key
        )
        if response.action is DoneAction.RESET:
            slot.clear()
            logger.debug("[promise_await] key=%s reset to EMPTY", self._key)
        elif response.action is DoneAction.EMIT:
            return response.value
        return None


class PromiseAwaitBuilder(Generic[T, R]):
    """init/waiting/done の 3 コールバックを集めるビルダ。"""

    widget = "promise_await"

    def __init__(self, store: "UiStates", key: str) -> None:
        self._store = store
        self._key = key
        self._init_ui: InitUi | None = None
        self._waiting_ui: WaitingUi | None = None
        self._done_ui: DoneUi | None = None

    def init_ui(self, fn: InitUi) -> "PromiseAwaitBuilder[T, R]":
        """`fn(surface, submit)`。EMPTY のとき呼ばれ、`submit(handle)` で計算を登録する。"""
        self._init_ui = fn
        return self

    def waiting_ui(self, fn: WaitingUi) -> "PromiseAwaitBuilder[T, R]":
        self._waiting_ui = fn
        return self

    def spinner(self) -> "PromiseAwaitBuilder[T, R]":
        """waiting に既定のスピナーを使う。"""
        return self.waiting_ui(lambda surface: surface.spinner())

    def done_ui(self, fn: DoneUi) -> "PromiseAwaitBuilder[T, R]":
        """`fn(surface, outcome) -> DoneResponse | None`。"""
        self._done_ui = fn
        return self

    def build(self) -> PromiseAwait[T, R]:
        missing = [
            name
            for name, fn in (
                ("init_ui", self._init_ui),
                ("waiting_ui", self._waiting_ui),
                ("done_ui", self._done_ui),
            )
            if fn is None
        ]
        if missing:
            raise MissingCallbackError(self.widget, self._key, missing)
        slot: TaskSlot[Any] = self._store.get_or_create(self._key, TaskSlot, TaskSlot)
        return PromiseAwait(
            self._store,
            self._key,
            slot,
            cast(InitUi, self._init_ui),
            cast(WaitingUi, self._waiting_ui),
            cast(DoneUi, self._done_ui),
        )

    def show(self, surface: RenderSurface) -> R | None:
        return self.build().show(surface)


def task_phase(store: "UiStates", key: str) -> TaskPhase:
    """キーのタスクフェーズを返す（生成もポーリングもしない）。"""
    slot = store.peek(key, TaskSlot)
    return TaskPhase.EMPTY if slot is None else slot.phase


__all__ = [
    "TaskSlot",
    "PromiseAwait",
    "PromiseAwaitBuilder",
    "task_phase",
    "InitUi",
    "WaitingUi",
    "DoneUi",
]
