"""
どこで: `framestate.ui` の既定表示付き非同期タスクウィジェット。
何を: init だけを受け取り、waiting はスピナー、done は "success"/"error" ラベル＋ "reset" ボタンで描く。
なぜ: 結果の中身を気にしない呼び出し側が、1 コールバックだけでタスク状態を表示できるようにするため。
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Any, Generic, Mapping, TypeVar

from framestate.common.config import widget_labels
from framestate.core.errors import MissingCallbackError
from framestate.runtime.handle import Outcome

from .promise_await import InitUi, PromiseAwait, PromiseAwaitBuilder
from .response import DoneResponse
from .surface import RenderSurface

if TYPE_CHECKING:  # pragma: no cover - 型注釈専用
    from framestate.core.store import UiStates

T = TypeVar("T")


@lru_cache(maxsize=1)
def _configured_labels() -> Mapping[str, str]:
    # 毎フレーム YAML を読まないよう初回のみ読み込む
    return widget_labels()


def outcome_label(outcome: Outcome[Any], labels: Mapping[str, str]) -> str:
    return labels["success"] if outcome.ok else labels["error"]


def default_done_ui(labels: Mapping[str, str], *, button: str = "reset"):
    """結果ラベルとリセットボタンを描く done コールバックを返す。"""

    def _done(surface: RenderSurface, outcome: Outcome[Any]) -> DoneResponse[Any] | None:
        surface.label(outcome_label(outcome, labels))
        if surface.button(labels[button]):
            return DoneResponse.reset()
        return None

    return _done


class DefaultPromiseAwaitBuilder(Generic[T]):
    """init のみ必須の promise_await。"""

    widget = "default_promise_await"

    def __init__(
        self, store: "UiStates", key: str, *, labels: Mapping[str, str] | None = None
    ) -> None:
        self._store = store
        self._key = key
        self._labels = labels
        self._init_ui: InitUi | None = None

    def init_ui(self, fn: InitUi) -> "DefaultPromiseAwaitBuilder[T]":
        """`fn(surface, submit)` を受け取る（`submit(handle)` で計算を登録）。"""
        self._init_ui = fn
        return self

    def labels(self, labels: Mapping[str, str]) -> "DefaultPromiseAwaitBuilder[T]":
        self._labels = {**_configured_labels(), **labels}
        return self

    def build(self) -> PromiseAwait[T, None]:
        if self._init_ui is None:
            raise MissingCallbackError(self.widget, self._key, ["init_ui"])
        labels = self._labels if self._labels is not None else _configured_labels()
        builder: PromiseAwaitBuilder[T, None] = PromiseAwaitBuilder(self._store, self._key)
        return (
            builder.init_ui(self._init_ui)
            .spinner()
            .done_ui(default_done_ui(labels, button="reset"))
            .build()
        )

    def show(self, surface: RenderSurface) -> None:
        self.build().show(surface)


__all__ = ["DefaultPromiseAwaitBuilder", "default_done_ui", "outcome_label"]
