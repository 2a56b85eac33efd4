"""
どこで: `framestate.core` の状態管理層。
何を: 文字列キー → 任意型の状態オブジェクトを保持する `UiStates`（型消去ストア）。
    初回アクセスで遅延生成し、以降は初回と同じ型での要求のみを許可する。
なぜ: 毎フレーム描き直す（イミディエイトモード）UI が、フレームをまたいで
    タスク結果/タイマー/任意のウィジェット状態を保持できるようにするため。

補足:
- 型不一致は `StateTypeMismatch`（ContractViolation）を即時送出する（fail fast）。
- ロックは持たない。ストアを生成したスレッド（描画ループ）だけが触れる前提で、
  `CHECK_OWNER_THREAD` 有効時は他スレッドからのアクセスを契約違反として検出する。
- 退避/容量上限/期限切れは無い。エントリはストア破棄か `reset()` まで生存する。
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, Callable, Iterator, TypeVar, cast

from framestate.common import settings as _settings

from .errors import ContractViolation, StateTypeMismatch
from .slot import StateSlot
from .frame_clock import Tickable

if TYPE_CHECKING:  # pragma: no cover - 型注釈専用
    from datetime import timedelta

    from framestate.ui.default_promise_await import DefaultPromiseAwaitBuilder
    from framestate.ui.future_await import FutureStatusBuilder, SetFutureBuilder
    from framestate.ui.promise_await import PromiseAwaitBuilder
    from framestate.ui.timer import TimerBuilder

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UiStates(Tickable):
    """キー付きの保持状態を集中管理する。"""

    def __init__(
        self,
        *,
        check_owner_thread: bool | None = None,
        warn_duplicate_show: bool | None = None,
    ) -> None:
        cfg = _settings.get()
        self._states: dict[str, Any] = {}
        # 初回生成時に確定した型（reset() 後も保持し、以後変更不可）
        self._types: dict[str, type] = {}
        self._slots: dict[str, StateSlot[Any]] = {}
        self._owner_thread = threading.get_ident()
        self._check_owner = (
            cfg.CHECK_OWNER_THREAD if check_owner_thread is None else bool(check_owner_thread)
        )
        self._warn_duplicate = (
            cfg.WARN_DUPLICATE_SHOW if warn_duplicate_show is None else bool(warn_duplicate_show)
        )
        # フレーム管理（ホストが tick/begin_frame を呼んだ場合のみ有効）
        self._frame_index = 0
        self._shown: set[str] = set()

    # --- 取得 / 生成 ---
    def get_or_create(
        self,
        key: str,
        default_factory: Callable[[], T],
        state_type: type[T] | None = None,
    ) -> T:
        """`key` の状態を返す。無ければ `default_factory()` で生成して保存する。

        - `state_type` を渡した場合、既存エントリの型と一致しなければ `StateTypeMismatch`。
        - 省略時、`default_factory` がクラスならそれを要求型とみなす。
        - どちらでもない場合は既存キーでも `default_factory()` を呼び、結果の型で照合する。
        """
        self._check_thread()
        if state_type is None and isinstance(default_factory, type):
            state_type = default_factory
        if key in self._states:
            expected = self._types[key]
            if state_type is None:
                requested = type(default_factory())
                if requested is not expected:
                    raise StateTypeMismatch(key, expected, requested)
            elif state_type is not expected:
                raise StateTypeMismatch(key, expected, state_type)
            return cast(T, self._states[key])

        known = self._types.get(key)
        if known is not None and state_type is not None and state_type is not known:
            raise StateTypeMismatch(key, known, state_type)

        value = default_factory()
        if state_type is not None:
            recorded = state_type
            if not isinstance(value, recorded):
                raise StateTypeMismatch(key, recorded, type(value))
        else:
            recorded = known or type(value)
            if type(value) is not recorded:
                raise StateTypeMismatch(key, recorded, type(value))
        self._states[key] = value
        self._types[key] = recorded
        logger.debug("[store] key=%s created type=%s", key, recorded.__qualname__)
        return value

    def get_mut(self, key: str, init_state: T) -> T:
        """値を直接渡す版。型は `init_state` の具象型で判定する。"""
        return self.get_or_create(key, lambda: init_state, type(init_state))

    def peek(self, key: str, state_type: type[T]) -> T | None:
        """生成せずに参照する。未生成なら None、型不一致なら `StateTypeMismatch`。"""
        self._check_thread()
        known = self._types.get(key)
        if known is not None and known is not state_type:
            raise StateTypeMismatch(key, known, state_type)
        return cast("T | None", self._states.get(key))

    def set(self, key: str, value: T) -> None:
        """状態を差し替える（不変値を保持するキー向け）。型は初回と一致すること。"""
        self._check_thread()
        known = self._types.get(key)
        if known is not None and type(value) is not known:
            raise StateTypeMismatch(key, known, type(value))
        self._states[key] = value
        self._types.setdefault(key, type(value))

    def reset(self, key: str) -> bool:
        """エントリの値を破棄する。型の確定は維持し、次回アクセスで再生成される。"""
        self._check_thread()
        existed = key in self._states
        self._states.pop(key, None)
        if existed:
            logger.debug("[store] key=%s reset", key)
        return existed

    def clear(self) -> None:
        """全エントリを破棄する（型の確定も解除）。"""
        self._check_thread()
        self._states.clear()
        self._types.clear()
        self._slots.clear()
        self._shown.clear()

    # --- 型付きキー ---
    def register(
        self, key: str, state_type: type[T], factory: Callable[[], T]
    ) -> StateSlot[T]:
        """`key` を型付きで登録し、以後のアクセスに使う `StateSlot` を返す。

        同じ (key, 型) での再登録は同じスロットを返す（毎フレーム呼ばれる前提）。
        """
        self._check_thread()
        slot = self._slots.get(key)
        if slot is not None:
            if slot.state_type is not state_type:
                raise StateTypeMismatch(key, slot.state_type, state_type)
            return cast(StateSlot[T], slot)
        known = self._types.get(key)
        if known is not None and known is not state_type:
            raise StateTypeMismatch(key, known, state_type)
        new_slot = StateSlot(key, state_type, factory)
        self._slots[key] = new_slot
        return new_slot

    def resolve(self, slot: StateSlot[T]) -> T:
        """スロットの状態を返す（初回は生成）。他ストア発行のスロットは契約違反。"""
        if self._slots.get(slot.name) is not slot:
            raise ContractViolation(f"{slot!r} was not issued by this store")
        return self.get_or_create(slot.name, slot.factory, slot.state_type)

    # --- 問合せ ---
    def __contains__(self, key: object) -> bool:
        return key in self._states

    def __len__(self) -> int:
        return len(self._states)

    def keys(self) -> Iterator[str]:
        return iter(list(self._states))

    def type_of(self, key: str) -> type | None:
        return self._types.get(key)

    # --- フレーム制御 ---
    @property
    def frame_index(self) -> int:
        return self._frame_index

    def begin_frame(self) -> None:
        self._frame_index += 1
        self._shown.clear()

    # -------- Tickable interface --------
    def tick(self, dt: float) -> None:
        self.begin_frame()

    def mark_shown(self, key: str) -> None:
        """同一フレーム内での同一キーの重複表示を検出する（警告のみ）。"""
        if self._frame_index == 0:
            # ホストがフレームを進めていない場合は判定できない
            return
        if key in self._shown and self._warn_duplicate:
            logger.warning(
                "[store] key=%s shown more than once in frame %d", key, self._frame_index
            )
        self._shown.add(key)

    # --- ウィジェット生成（ui 層への入口） ---
    def promise_await(self, key: str) -> "PromiseAwaitBuilder[Any, Any]":
        from framestate.ui.promise_await import PromiseAwaitBuilder

        return PromiseAwaitBuilder(self, key)

    def default_promise_await(self, key: str) -> "DefaultPromiseAwaitBuilder[Any]":
        from framestate.ui.default_promise_await import DefaultPromiseAwaitBuilder

        return DefaultPromiseAwaitBuilder(self, key)

    def timer(
        self,
        key: str,
        duration: "float | timedelta",
        *,
        user_state: Callable[[], Any] | None = None,
        clock: Callable[[], float] | None = None,
    ) -> "TimerBuilder[Any, Any]":
        from framestate.ui.timer import TimerBuilder

        return TimerBuilder(self, key, duration, user_state=user_state, clock=clock)

    def is_running(self, key: str) -> bool:
        from framestate.ui.future_await import is_running

        return is_running(self, key)

    def set_future(self, key: str) -> "SetFutureBuilder[Any]":
        from framestate.ui.future_await import set_future

        return set_future(self, key)

    def future_status(self, key: str) -> "FutureStatusBuilder[Any]":
        from framestate.ui.future_await import future_status

        return future_status(self, key)

    # --- 内部 ---
    def _check_thread(self) -> None:
        if self._check_owner and threading.get_ident() != self._owner_thread:
            raise ContractViolation(
                "UiStates accessed from a thread other than the one that created it"
            )


KeyedStateStore = UiStates

__all__ = ["UiStates", "KeyedStateStore"]
