from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field

import pytest

from framestate.core.errors import ContractViolation, StateTypeMismatch
from framestate.core.slot import StateSlot
from framestate.core.store import KeyedStateStore, UiStates


@dataclass
class Counter:
    n: int = 0
    history: list[int] = field(default_factory=list)


def test_first_access_creates_default_and_later_access_returns_same_object(store: UiStates):
    calls = []

    def make() -> Counter:
        calls.append(1)
        return Counter()

    first = store.get_or_create("counter", make, Counter)
    assert first == Counter()
    first.n = 5
    first.history.append(5)

    again = store.get_or_create("counter", make, Counter)
    assert again is first
    assert again.n == 5
    # 生成関数は初回のみ
    assert calls == [1]


def test_get_mut_rejects_a_different_type_for_an_existing_key(store: UiStates):
    assert store.get_mut("x", 0) == 0
    with pytest.raises(ContractViolation) as exc:
        store.get_mut("x", "text")
    err = exc.value
    assert isinstance(err, StateTypeMismatch)
    assert err.key == "x"
    assert err.expected is int
    assert err.requested is str
    # 失敗後も元の値は壊れていない
    assert store.get_mut("x", 99) == 0


def test_get_or_create_without_state_type_records_concrete_type(store: UiStates):
    store.get_or_create("items", list)
    assert store.type_of("items") is list
    with pytest.raises(StateTypeMismatch):
        store.get_or_create("items", dict, dict)


def test_get_or_create_with_class_factory_checks_type_of_existing_key(store: UiStates):
    store.get_or_create("items", list)
    with pytest.raises(StateTypeMismatch) as exc:
        store.get_or_create("items", dict)
    assert exc.value.expected is list
    assert exc.value.requested is dict
    assert store.get_or_create("items", list) == []


def test_get_or_create_with_plain_factory_checks_result_type(store: UiStates):
    assert store.get_or_create("x", lambda: 0) == 0
    with pytest.raises(StateTypeMismatch):
        store.get_or_create("x", lambda: "text")
    assert store.get_or_create("x", lambda: 5) == 0

    # reset 後の再生成でも型は固定のまま
    store.reset("x")
    with pytest.raises(StateTypeMismatch):
        store.get_or_create("x", lambda: True)
    assert "x" not in store


def test_factory_result_must_match_declared_state_type(store: UiStates):
    with pytest.raises(StateTypeMismatch):
        store.get_or_create("bad", lambda: "nope", Counter)
    assert "bad" not in store


def test_peek_does_not_create_and_checks_type(store: UiStates):
    assert store.peek("missing", Counter) is None
    assert "missing" not in store
    store.get_or_create("c", Counter, Counter)
    assert isinstance(store.peek("c", Counter), Counter)
    with pytest.raises(StateTypeMismatch):
        store.peek("c", int)


def test_reset_discards_value_but_keeps_the_type_fixed(store: UiStates):
    c = store.get_or_create("c", Counter, Counter)
    c.n = 3
    assert store.reset("c") is True
    assert "c" not in store
    assert store.reset("c") is False

    fresh = store.get_or_create("c", Counter, Counter)
    assert fresh.n == 0
    store.reset("c")
    with pytest.raises(StateTypeMismatch):
        store.get_or_create("c", list, list)


def test_set_replaces_immutable_values_with_type_check(store: UiStates):
    store.get_mut("clicks", 0)
    store.set("clicks", store.get_mut("clicks", 0) + 1)
    assert store.get_mut("clicks", 0) == 1
    with pytest.raises(StateTypeMismatch):
        store.set("clicks", "one")


def test_set_requires_the_exact_recorded_type(store: UiStates):
    store.get_mut("n", 0)
    # bool は int のサブクラスだが別の型として扱う
    with pytest.raises(StateTypeMismatch):
        store.set("n", True)
    assert store.get_mut("n", 0) == 0


def test_len_keys_and_clear(store: UiStates):
    store.get_mut("a", 1)
    store.get_mut("b", "two")
    assert len(store) == 2
    assert sorted(store.keys()) == ["a", "b"]
    store.clear()
    assert len(store) == 0
    # clear は型の確定も解除する
    assert store.get_mut("a", "now a string") == "now a string"


def test_register_issues_one_slot_per_key_and_resolves_lazily(store: UiStates):
    slot = store.register("panel", Counter, Counter)
    assert isinstance(slot, StateSlot)
    assert "panel" not in store
    assert store.register("panel", Counter, Counter) is slot

    value = store.resolve(slot)
    value.n = 7
    assert store.resolve(slot).n == 7
    assert store.get_or_create("panel", Counter, Counter) is value


def test_register_rejects_type_change_for_known_key(store: UiStates):
    store.register("panel", Counter, Counter)
    with pytest.raises(StateTypeMismatch):
        store.register("panel", list, list)

    store.get_mut("n", 0)
    with pytest.raises(StateTypeMismatch):
        store.register("n", str, str)


def test_resolve_rejects_slot_from_another_store(store: UiStates):
    other = UiStates()
    foreign = other.register("panel", Counter, Counter)
    store.register("panel", Counter, Counter)
    with pytest.raises(ContractViolation):
        store.resolve(foreign)


def test_access_from_another_thread_is_a_contract_violation(store: UiStates):
    errors: list[BaseException] = []

    def worker() -> None:
        try:
            store.get_mut("x", 0)
        except BaseException as exc:  # noqa: BLE001 - テスト用に捕捉して検証
            errors.append(exc)

    t = threading.Thread(target=worker)
    t.start()
    t.join()
    assert len(errors) == 1
    assert isinstance(errors[0], ContractViolation)
    assert "x" not in store


def test_owner_thread_check_can_be_disabled():
    s = UiStates(check_owner_thread=False)
    out: list[int] = []
    t = threading.Thread(target=lambda: out.append(s.get_mut("x", 1)))
    t.start()
    t.join()
    assert out == [1]


def test_tick_advances_frame_and_warns_on_duplicate_show(
    store: UiStates, caplog: pytest.LogCaptureFixture
):
    # フレーム未進行なら判定しない
    store.mark_shown("a")
    store.mark_shown("a")
    assert not caplog.records

    store.tick(1 / 60)
    assert store.frame_index == 1
    with caplog.at_level(logging.WARNING, logger="framestate.core.store"):
        store.mark_shown("a")
        store.mark_shown("b")
        store.mark_shown("a")
    assert len(caplog.records) == 1
    assert "key=a" in caplog.records[0].getMessage()

    caplog.clear()
    store.begin_frame()
    with caplog.at_level(logging.WARNING, logger="framestate.core.store"):
        store.mark_shown("a")
    assert not caplog.records


def test_keyed_state_store_alias():
    assert KeyedStateStore is UiStates
