"""
どこで: `framestate.core` の型付きキー。
何を: 初回登録時に発行される `StateSlot`（キー名・状態型・生成関数の組）。
なぜ: 文字列キーの衝突/型取り違えを、登録済みトークン経由のアクセスで防ぐため。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, eq=False)
class StateSlot(Generic[T]):
    """`UiStates.register()` が発行する型付きキー。

    - 等価性は同一性（発行元ストアが返したインスタンスそのもの）で判定する。
    - 状態の生成は `UiStates.resolve()` の初回呼び出しまで遅延される。
    """

    name: str
    state_type: type[T]
    factory: Callable[[], T]

    def __repr__(self) -> str:
        return f"StateSlot({self.name!r}, {self.state_type.__qualname__})"


__all__ = ["StateSlot"]
