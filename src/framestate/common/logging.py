"""
ロギングの初期化ヘルパ。

- ライブラリ内の各モジュールは `logging.getLogger(__name__)`（`framestate.*`）で記録するだけ。
- ハンドラの設定はホスト側の責務。未設定のデモ/スクリプト向けに最小構成を用意する。
"""

from __future__ import annotations

import logging

from . import settings as _settings

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        level = _settings.get().LOG_LEVEL
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return int(level)


def setup_default_logging(level: int | str | None = None) -> bool:
    """ルートロガーが未設定のときだけ `basicConfig` を適用する。

    `level` 省略時は `FRAMESTATE_LOG_LEVEL`（既定 INFO）。
    適用した場合は True、ホストが既に設定済みで何もしなかった場合は False を返す。
    """
    lvl = _resolve_level(level)
    if logging.getLogger().handlers:
        return False
    logging.basicConfig(level=lvl, format=_FORMAT)
    logging.getLogger("framestate").setLevel(lvl)
    return True


__all__ = ["setup_default_logging"]
