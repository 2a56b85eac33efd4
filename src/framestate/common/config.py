"""
どこで: `framestate.common.config`
何を: `configs/default.yaml` とルート `config.yaml` を読み込み、ウィジェット既定文言などを返す。
なぜ: 表示文言やデモ設定をコードから切り離し、ホスト側で上書き可能にするため。
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

# 既定の文言（YAML が無い/不正な場合のフォールバック）
DEFAULT_WIDGET_LABELS: Mapping[str, str] = {
    "success": "success",
    "error": "error",
    "empty": "empty",
    "reset": "reset",
    "clear": "clear",
}


def _safe_load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError):
        return {}
    return data if isinstance(data, dict) else {}


def _find_project_root(start: Path) -> Path:
    """プロジェクトルートを推定して返す。

    - `src/framestate/common` 配下から呼ばれることを想定し、上位に `.git` や `pyproject.toml`、
      `configs/` があるもっとも近いディレクトリを返す。
    - 見つからない場合は `start.parents[2]` をフォールバックとして返す。
    """
    cur = start.resolve()
    for parent in [cur] + list(cur.parents):
        if (
            (parent / ".git").exists()
            or (parent / "pyproject.toml").exists()
            or (parent / "configs").exists()
        ):
            return parent
    # 典型: <repo>/src/framestate/common/config.py -> <repo>
    return cur.parents[2] if len(cur.parents) > 2 else cur


# 後ろほど優先（トップレベル単位で上書き）
_CONFIG_LAYERS = (Path("configs") / "default.yaml", Path("config.yaml"))


def load_config(root: Path | None = None) -> Dict[str, Any]:
    """`root`（省略時は推定したプロジェクトルート）配下の設定を重ねて返す。

    - `configs/default.yaml` をベースに、ルートの `config.yaml` をトップレベル単位で上書きする。
    - 見つからない/読めない/辞書でないファイルは空として扱う。
    """
    project_root = root if root is not None else _find_project_root(Path(__file__).parent)
    merged: Dict[str, Any] = {}
    for rel in _CONFIG_LAYERS:
        path = project_root / rel
        if path.is_file():
            merged.update(_safe_load_yaml(path))
    return merged


def widget_labels(cfg: Mapping[str, Any] | None = None) -> Dict[str, str]:
    """`widgets` セクションから既定ウィジェットの文言を取り出す。

    未指定/文字列以外の値は `DEFAULT_WIDGET_LABELS` で補う。
    """
    if cfg is None:
        cfg = load_config()
    out = dict(DEFAULT_WIDGET_LABELS)
    section = cfg.get("widgets", {})
    if isinstance(section, dict):
        for key in DEFAULT_WIDGET_LABELS:
            value = section.get(key)
            if isinstance(value, str) and value.strip():
                out[key] = value
    return out


__all__ = ["DEFAULT_WIDGET_LABELS", "load_config", "widget_labels"]
