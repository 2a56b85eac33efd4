from __future__ import annotations

from concurrent.futures import CancelledError

import pytest

from framestate.runtime.handle import Failure, Success, TaskHandle, TaskPhase
from tests._utils.dummies import CountingFuture, pending_future


def test_pending_future_polls_none_and_stays_running():
    h: TaskHandle[int] = TaskHandle(pending_future())
    assert h.poll() is None
    assert h.poll() is None
    assert h.phase is TaskPhase.RUNNING
    assert h.outcome is None


def test_completed_future_becomes_success():
    fut = pending_future()
    h: TaskHandle[int] = TaskHandle(fut)
    fut.set_result(7)
    out = h.poll()
    assert out == Success(7)
    assert out.ok
    assert h.phase is TaskPhase.SUCCESS


def test_failed_future_carries_the_exception_uninterpreted():
    fut = pending_future()
    h: TaskHandle[int] = TaskHandle(fut)
    err = ValueError("boom")
    fut.set_exception(err)
    out = h.poll()
    assert isinstance(out, Failure)
    assert out.error is err
    assert not out.ok
    assert h.phase is TaskPhase.ERROR


def test_cancelled_future_is_reported_as_failure():
    fut = pending_future()
    h: TaskHandle[int] = TaskHandle(fut)
    assert fut.cancel()
    out = h.poll()
    assert isinstance(out, Failure)
    assert isinstance(out.error, CancelledError)


def test_outcome_is_captured_once_and_stays_monotonic():
    fut = CountingFuture()
    h: TaskHandle[str] = TaskHandle(fut)
    assert h.poll() is None
    fut.finish("done")
    first = h.poll()
    calls = fut.done_calls
    # 取り込み後は外部ハンドルへ問い合わせない
    assert h.poll() is first
    assert h.poll() is first
    assert fut.done_calls == calls


def test_ready_and_failed_handles_are_already_resolved():
    assert TaskHandle.ready(3).poll() == Success(3)
    err = RuntimeError("x")
    failed: TaskHandle[int] = TaskHandle.failed(err, label="job")
    assert failed.poll() == Failure(err)
    assert "job" in repr(failed)


def test_wrap_accepts_handles_and_futures_only():
    h = TaskHandle.ready(1)
    assert TaskHandle.wrap(h) is h
    wrapped = TaskHandle.wrap(pending_future())
    assert isinstance(wrapped, TaskHandle)
    with pytest.raises(TypeError):
        TaskHandle.wrap(42)  # type: ignore[arg-type]


@pytest.mark.parametrize("bad", [None, 42, "future"])
def test_constructor_requires_a_future(bad):
    with pytest.raises(TypeError):
        TaskHandle(bad)  # type: ignore[arg-type]


def test_resolved_handles_do_not_hold_a_future():
    h = TaskHandle.ready("v", label="job")
    assert h.phase is TaskPhase.SUCCESS
    assert h.label == "job"
    assert TaskHandle.failed(KeyError("k")).phase is TaskPhase.ERROR
