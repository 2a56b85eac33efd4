"""
どこで: `framestate.common.settings`
何を: ライブラリの環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_int, env_str


@dataclass
class _Settings:
    # TaskRunner
    TASK_WORKERS: int = 4

    # UiStates の利用契約チェック
    CHECK_OWNER_THREAD: bool = True
    WARN_DUPLICATE_SHOW: bool = True

    # Misc
    LOG_LEVEL: str = "INFO"


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - bool は `env_bool`、int は `env_int` を使用。
    - ワーカ数は 0 未満を 0（インライン実行）に丸める。
    """
    _settings.TASK_WORKERS = env_int("FRAMESTATE_TASK_WORKERS", 4, min_value=0) or 0
    _settings.CHECK_OWNER_THREAD = env_bool("FRAMESTATE_CHECK_OWNER_THREAD", True)
    _settings.WARN_DUPLICATE_SHOW = env_bool("FRAMESTATE_WARN_DUPLICATE_SHOW", True)
    _settings.LOG_LEVEL = env_str("FRAMESTATE_LOG_LEVEL", "INFO").upper()


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
