"""
どこで: `framestate.ui` のコールバック応答型。
何を: done コールバックが返す `DoneResponse`（表示継続 / リセット / 値の送出）。
なぜ: リセット用の可変クロージャを描画コードへ渡さず、戻り値のコマンドとして状態機械側で解釈するため。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from framestate.core.errors import ContractViolation

T = TypeVar("T")


class DoneAction(str, Enum):
    KEEP_SHOWING = "keep_showing"
    RESET = "reset"
    EMIT = "emit"


@dataclass(frozen=True, slots=True)
class DoneResponse(Generic[T]):
    """done コールバックの応答。

    - `keep_showing()`: 状態はそのまま（None を返した場合も同じ扱い）。
    - `reset()`: タスクは EMPTY へ、タイマーは計測開始へ。
    - `emit(value)`: このフレームの `show()` の戻り値として `value` を返す（保持はしない）。
    """

    action: DoneAction = DoneAction.KEEP_SHOWING
    value: T | None = None

    @classmethod
    def keep_showing(cls) -> "DoneResponse[Any]":
        return _KEEP

    @classmethod
    def reset(cls) -> "DoneResponse[Any]":
        return _RESET

    # future_status の "clear" ボタン向けの別名
    clear = reset

    @classmethod
    def emit(cls, value: T) -> "DoneResponse[T]":
        return cls(DoneAction.EMIT, value)


_KEEP: DoneResponse[Any] = DoneResponse(DoneAction.KEEP_SHOWING)
_RESET: DoneResponse[Any] = DoneResponse(DoneAction.RESET)


def interpret(response: object, *, widget: str, key: str) -> DoneResponse[Any]:
    """コールバック戻り値を正規化する。None は表示継続、それ以外の型は契約違反。"""
    if response is None:
        return _KEEP
    if isinstance(response, DoneResponse):
        return response
    raise ContractViolation(
        f"{widget}({key!r}) done callback returned {type(response).__name__}; "
        "expected DoneResponse or None"
    )


__all__ = ["DoneAction", "DoneResponse", "interpret"]
