"""
どこで: `framestate.core` サブパッケージ。
何を: キー付き状態ストア（UiStates）・型付きキー・契約違反例外・フレーム駆動（Tickable/FrameClock）を提供。
なぜ: 状態保持の基盤を構成し、上位層（runtime/ui）から再利用可能にするため。
"""

from .errors import ContractViolation, MissingCallbackError, StateTypeMismatch
from .frame_clock import FrameClock, Tickable
from .slot import StateSlot
from .store import KeyedStateStore, UiStates

__all__ = [
    "ContractViolation",
    "MissingCallbackError",
    "StateTypeMismatch",
    "FrameClock",
    "StateSlot",
    "KeyedStateStore",
    "UiStates",
    "Tickable",
]
