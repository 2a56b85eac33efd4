"""
どこで: `framestate.ui` の分割型タスク API。
何を: 同じ `TaskSlot` エントリに対し、登録（`set_future`）・実行中判定（`is_running`）・
      表示（`future_status`）を別々の場所から行える 3 関数を提供する。
なぜ: ボタンとステータス表示が画面上で離れている場合でも、1 つのキーで同じタスクを共有するため。

使用例:
    if not store.is_running("save") and surface.button("Save"):
        store.set_future("save").set(runner.submit(save_data))
    store.future_status("save").default().show(surface)

補足:
- promise_await と異なり必須コールバックは無い。未登録の段は何も描かない。
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Generic, Mapping, TypeVar

from framestate.runtime.handle import FutureLike, Outcome, TaskHandle, TaskPhase

from .default_promise_await import _configured_labels, default_done_ui
from .promise_await import DoneUi, TaskSlot, WaitingUi
from .response import DoneAction, interpret
from .surface import RenderSurface

if TYPE_CHECKING:  # pragma: no cover - 型注釈専用
    from framestate.core.store import UiStates

logger = logging.getLogger(__name__)

T = TypeVar("T")

EmptyUi = Callable[[RenderSurface], None]


def _slot(store: "UiStates", key: str) -> TaskSlot[Any]:
    return store.get_or_create(key, TaskSlot, TaskSlot)


def is_running(store: "UiStates", key: str) -> bool:
    """タスクが登録済みかつ未完了なら True。内部で 1 回ポーリングする。"""
    slot = _slot(store, key)
    if slot.handle is None:
        return False
    return slot.poll() is None


class SetFutureBuilder(Generic[T]):
    def __init__(self, slot: TaskSlot[T], key: str) -> None:
        self._slot = slot
        self._key = key

    def set(self, handle: "TaskHandle[T] | FutureLike") -> None:
        """ハンドルを登録する。実行中のハンドルがあれば破棄して差し替える。"""
        if self._slot.phase is TaskPhase.RUNNING:
            logger.debug("[future_await] key=%s replacing a running task", self._key)
        self._slot.set(handle)
        logger.debug("[future_await] key=%s -> RUNNING", self._key)


def set_future(store: "UiStates", key: str) -> SetFutureBuilder[Any]:
    return SetFutureBuilder(_slot(store, key), key)


class FutureStatusBuilder(Generic[T]):
    """タスク状態の表示方法を段ごとに指定するビルダ（全段任意）。"""

    def __init__(self, store: "UiStates", key: str) -> None:
        self._store = store
        self._key = key
        self._slot: TaskSlot[T] = _slot(store, key)
        self._empty_ui: EmptyUi | None = None
        self._waiting_ui: WaitingUi | None = None
        self._done_ui: DoneUi | None = None

    @property
    def phase(self) -> TaskPhase:
        return self._slot.phase

    def default(self, labels: Mapping[str, str] | None = None) -> "FutureStatusBuilder[T]":
        """スピナー・空表示なし・結果ラベル＋ "clear" ボタンの既定構成。"""
        resolved = labels if labels is not None else _configured_labels()
        return (
            self.spinner()
            .empty_ui(lambda _surface: None)
            .done_ui(default_done_ui(resolved, button="clear"))
        )

    def empty_ui(self, fn: EmptyUi) -> "FutureStatusBuilder[T]":
        self._empty_ui = fn
        return self

    def waiting_ui(self, fn: WaitingUi) -> "FutureStatusBuilder[T]":
        self._waiting_ui = fn
        return self

    def spinner(self) -> "FutureStatusBuilder[T]":
        return self.waiting_ui(lambda surface: surface.spinner())

    def done_ui(self, fn: DoneUi) -> "FutureStatusBuilder[T]":
        """`fn(surface, outcome) -> DoneResponse | None`。"""
        self._done_ui = fn
        return self

    def only_poll(self) -> Outcome[T] | None:
        """描画せずに状態だけ進める。"""
        return self._slot.poll()

    def show(self, surface: RenderSurface) -> Any:
        """1 フレーム分を描く。done が `emit` を返したときだけ値を返す。"""
        self._store.mark_shown(self._key)
        slot = self._slot
        if slot.handle is None:
            if self._empty_ui is not None:
                self._empty_ui(surface)
            return None

        outcome = slot.poll()
        if outcome is None:
            if self._waiting_ui is not None:
                self._waiting_ui(surface)
            return None

        if self._done_ui is None:
            return None
        response = interpret(
            self._done_ui(surface, outcome), widget="future_status", key=self._key
        )
        if response.action is DoneAction.RESET:
            slot.clear()
            logger.debug("[future_await] key=%s reset to EMPTY", self._key)
        elif response.action is DoneAction.EMIT:
            return response.value
        return None


def future_status(store: "UiStates", key: str) -> FutureStatusBuilder[Any]:
    return FutureStatusBuilder(store, key)


__all__ = [
    "is_running",
    "set_future",
    "future_status",
    "SetFutureBuilder",
    "FutureStatusBuilder",
]
