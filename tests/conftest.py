"""共通フィクスチャ。

- 状態ストア（フレーム未進行の素の UiStates）
- 呼び出しを記録する描画面
- 手動で進める時計
"""

from __future__ import annotations

import pytest

from framestate.common import settings
from framestate.core.store import UiStates
from tests._utils.dummies import FakeClock, RecordingSurface


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch):
    """環境変数由来の設定がテスト間で漏れないようにする。"""
    for name in (
        "FRAMESTATE_TASK_WORKERS",
        "FRAMESTATE_CHECK_OWNER_THREAD",
        "FRAMESTATE_WARN_DUPLICATE_SHOW",
        "FRAMESTATE_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    settings.reload_from_env()
    yield
    settings.reload_from_env()


@pytest.fixture()
def store() -> UiStates:
    return UiStates()


@pytest.fixture()
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()
