"""
どこで: `framestate.runtime` サブパッケージ。
何を: TaskHandle/Outcome によるノンブロッキングな結果受け渡しと、TaskRunner による実行窓口を提供。
なぜ: 計算と描画の責務を分離し、スムーズなフレーム更新と例外伝播を両立するため。
"""

from .handle import Failure, FutureLike, Outcome, Success, TaskHandle, TaskPhase
from .runner import TaskRunner

__all__ = [
    "Failure",
    "FutureLike",
    "Outcome",
    "Success",
    "TaskHandle",
    "TaskPhase",
    "TaskRunner",
]
