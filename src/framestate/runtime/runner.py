"""
どこで: `framestate.runtime` のワーカ実行層。
何を: 計算関数をスレッドプール（またはインライン）で実行し、`TaskHandle` を返す薄いアダプタ。
      例外はワーカ側で握りつぶさず `Failure` として運び、DEBUG ログに stacktrace を残す。
      `close()` は安全に停止する（多重呼び出し可、実行中の計算はキャンセルしない）。
なぜ: 計算をメインスレッドから切り離し、描画ループをブロックせずに結果だけを受け取るため。

注意:
- 実行エンジン自体（スレッドプール）は外部の協調者であり、本クラスは submit/close の窓口に留める。
- `num_workers < 1` のときは submit 内で同期実行し、完了済みハンドルを返す（テスト/デバッグ用）。
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, TypeVar

from framestate.common import settings as _settings
from framestate.core.errors import ContractViolation

from .handle import TaskHandle

T = TypeVar("T")

logger = logging.getLogger(__name__)


def _task_name(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None) or repr(fn)


def _log_failure(name: str, fut: Future) -> None:
    """ワーカ側の完了コールバック。失敗のみを記録する。"""
    if fut.cancelled():
        logger.debug("[runner] task=%s cancelled", name)
        return
    exc = fut.exception()
    if exc is not None:
        logger.debug("[runner] task=%s failed: %s", name, exc, exc_info=exc)


class TaskRunner:
    """タスク投入とワーカプール管理のみを担当。"""

    def __init__(
        self,
        num_workers: int | None = None,
        *,
        thread_name_prefix: str = "framestate-worker",
    ) -> None:
        if num_workers is None:
            num_workers = _settings.get().TASK_WORKERS
        self._inline = num_workers < 1
        self._executor: ThreadPoolExecutor | None = None
        if not self._inline:
            self._executor = ThreadPoolExecutor(
                max_workers=num_workers, thread_name_prefix=thread_name_prefix
            )
        # 冪等な close() のための内部フラグ
        self._closed: bool = False
        self._submitted = 0

    @property
    def inline(self) -> bool:
        return self._inline

    @property
    def submitted(self) -> int:
        """これまでに受け付けたタスク数。"""
        return self._submitted

    # --------- public API ---------
    def submit(self, fn: Callable[..., T], /, *args: Any, **kwargs: Any) -> TaskHandle[T]:
        """`fn(*args, **kwargs)` を実行に回し、ポーリング用ハンドルを返す。"""
        if self._closed:
            raise ContractViolation("TaskRunner.submit() called after close()")
        name = _task_name(fn)
        self._submitted += 1
        if self._executor is None:
            try:
                value = fn(*args, **kwargs)
            except Exception as exc:
                logger.debug("[runner] task=%s failed: %s", name, exc, exc_info=exc)
                return TaskHandle.failed(exc, label=name)
            return TaskHandle.ready(value, label=name)

        fut = self._executor.submit(fn, *args, **kwargs)
        fut.add_done_callback(lambda f: _log_failure(name, f))
        return TaskHandle(fut, label=name)

    def close(self, *, wait: bool = False) -> None:
        """ワーカプールを停止する（多重呼び出しに安全）。

        実行中/待機中の計算はキャンセルしない。結果は単に読まれなくなる。
        """
        if self._closed:
            return
        # 以降の例外で途中離脱しても、次回は no-op になるよう先にフラグを立てる
        self._closed = True
        if self._executor is not None:
            self._executor.shutdown(wait=wait, cancel_futures=False)
        logger.debug("[runner] closed (submitted=%d)", self._submitted)

    def __enter__(self) -> "TaskRunner":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close(wait=True)


__all__ = ["TaskRunner"]
