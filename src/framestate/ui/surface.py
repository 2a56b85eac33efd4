"""
どこで: `framestate.ui` の描画面インターフェース。
何を: ウィジェットのコールバックへそのまま渡される描画面 `RenderSurface` Protocol を定義。
なぜ: 状態機械を特定の GUI ツールキットから切り離し、中身を覗かずに素通しするため。
"""

from typing import Protocol


class RenderSurface(Protocol):
    """イミディエイトモードの最小描画プリミティブ。"""

    def label(self, text: str) -> None:
        """静的テキストを 1 行描く。"""

    def spinner(self) -> None:
        """処理中インジケータを描く。"""

    def button(self, text: str) -> bool:
        """ボタンを描き、このフレームでクリックされたかを返す。"""
