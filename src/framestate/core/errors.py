"""
どこで: `framestate.core` の例外定義。
何を: 利用契約違反（ContractViolation）と、その具体形（型不一致/コールバック未登録）。
なぜ: ドメイン上の失敗（タスクの例外）とプログラマの誤用を型で区別し、誤用は即座に失敗させるため。
"""

from __future__ import annotations

from typing import Sequence


class ContractViolation(RuntimeError):
    """利用契約違反。ホストが回復すべき実行時エラーではない。"""


class StateTypeMismatch(ContractViolation):
    """既存キーに対して初回と異なる型で状態を要求した。"""

    def __init__(self, key: str, expected: type, requested: type) -> None:
        super().__init__(
            f"state key {key!r} holds {expected.__qualname__}, "
            f"but {requested.__qualname__} was requested"
        )
        self.key = key
        self.expected = expected
        self.requested = requested


class MissingCallbackError(ContractViolation):
    """必須コールバックが揃わないまま show()/build() が呼ばれた。"""

    def __init__(self, widget: str, key: str, missing: Sequence[str]) -> None:
        names = ", ".join(missing)
        super().__init__(f"{widget}({key!r}) is missing required callbacks: {names}")
        self.widget = widget
        self.key = key
        self.missing = tuple(missing)


__all__ = ["ContractViolation", "StateTypeMismatch", "MissingCallbackError"]
