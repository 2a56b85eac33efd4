"""
どこで: `framestate.runtime` のタスクハンドル。
何を: バックグラウンド計算 1 件をノンブロッキングにポーリングする `TaskHandle` と、
      完了結果 `Success`/`Failure`（Outcome）、派生フェーズ `TaskPhase` を定義。
なぜ: ワーカ側で確定した結果を、描画スレッドが毎フレーム O(1) で安全に取り出せるようにするため。

補足:
- 中身は `concurrent.futures.Future` 互換（`done()`/`cancelled()`/`exception()`/`result()`）であれば何でもよい。
- 完了を観測した時点で結果を 1 度だけ取り込み、以後は同じ Outcome を返し続ける（単調）。
"""

from __future__ import annotations

from concurrent.futures import CancelledError
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Protocol, TypeVar, Union

T = TypeVar("T")


class FutureLike(Protocol):
    """ポーリング可能な外部ハンドルの最小インターフェース。"""

    def done(self) -> bool: ...

    def cancelled(self) -> bool: ...

    def exception(self) -> BaseException | None: ...

    def result(self) -> Any: ...


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """計算が値を返して完了した。"""

    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Failure:
    """計算が例外で完了した（例外は解釈せずそのまま運ぶ）。"""

    error: BaseException

    @property
    def ok(self) -> bool:
        return False


Outcome = Union[Success[T], Failure]


class TaskPhase(str, Enum):
    """タスクスロットの派生フェーズ（保存はしない）。"""

    EMPTY = "empty"
    RUNNING = "running"
    SUCCESS = "success"
    ERROR = "error"


class TaskHandle(Generic[T]):
    """1 件のバックグラウンド計算への不透明ハンドル。"""

    __slots__ = ("_future", "_outcome", "label")

    def __init__(self, future: FutureLike, *, label: str | None = None) -> None:
        if not callable(getattr(future, "done", None)):
            raise TypeError(
                f"TaskHandle needs a future-like object, got {type(future).__name__}"
            )
        self._future: FutureLike | None = future
        self._outcome: Outcome[T] | None = None
        self.label = label

    # --- 生成ヘルパ ---
    @classmethod
    def _resolved(cls, outcome: "Outcome[T]", label: str | None) -> "TaskHandle[T]":
        # 外部ハンドルを持たない完了済みインスタンス（__init__ を経由しない）
        handle: TaskHandle[T] = cls.__new__(cls)
        handle._future = None
        handle._outcome = outcome
        handle.label = label
        return handle

    @classmethod
    def ready(cls, value: T, *, label: str | None = None) -> "TaskHandle[T]":
        """既に値で完了したハンドルを返す。"""
        return cls._resolved(Success(value), label)

    @classmethod
    def failed(cls, error: BaseException, *, label: str | None = None) -> "TaskHandle[T]":
        """既に例外で完了したハンドルを返す。"""
        return cls._resolved(Failure(error), label)

    @classmethod
    def wrap(cls, obj: "TaskHandle[T] | FutureLike") -> "TaskHandle[T]":
        """TaskHandle はそのまま、Future 互換オブジェクトはラップして返す。"""
        if isinstance(obj, TaskHandle):
            return obj
        if callable(getattr(obj, "done", None)):
            return cls(obj)
        raise TypeError(f"expected TaskHandle or a future-like object, got {type(obj).__name__}")

    # --- ポーリング ---
    def poll(self) -> Outcome[T] | None:
        """完了していれば Outcome、未完了なら None を返す。ブロックしない。"""
        if self._outcome is not None:
            return self._outcome
        fut = self._future
        if fut is None or not fut.done():
            return None
        if fut.cancelled():
            outcome: Outcome[T] = Failure(CancelledError())
        else:
            err = fut.exception()
            outcome = Failure(err) if err is not None else Success(fut.result())
        self._outcome = outcome
        # 結果を取り込んだら外部ハンドルへの参照は不要
        self._future = None
        return outcome

    @property
    def outcome(self) -> Outcome[T] | None:
        """最後に取り込んだ Outcome（ポーリングはしない）。"""
        return self._outcome

    @property
    def phase(self) -> TaskPhase:
        """取り込み済みの結果からフェーズを返す（ポーリングはしない）。"""
        if self._outcome is None:
            return TaskPhase.RUNNING
        return TaskPhase.SUCCESS if self._outcome.ok else TaskPhase.ERROR

    def __repr__(self) -> str:
        name = f" {self.label!r}" if self.label else ""
        return f"<TaskHandle{name} {self.phase.value}>"


__all__ = ["FutureLike", "Success", "Failure", "Outcome", "TaskPhase", "TaskHandle"]
