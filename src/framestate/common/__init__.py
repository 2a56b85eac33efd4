"""
どこで: `framestate.common` パッケージ。
何を: 環境変数/設定/YAML 設定/ロギングの軽量ユーティリティ。
なぜ: core/runtime/ui 双方で使う共通基盤を分離し、依存の向きを単純化するため。
"""

from .config import load_config, widget_labels
from .logging import setup_default_logging

__all__ = [
    "load_config",
    "widget_labels",
    "setup_default_logging",
]
