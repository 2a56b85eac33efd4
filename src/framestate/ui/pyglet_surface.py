"""
どこで: `framestate.ui` の pyglet 描画面。
何を: `RenderSurface` を pyglet の Label/Rectangle で実装する。毎フレーム上から順に積み上げ、
      前フレームの `on_mouse_press` をボタン領域と照合してクリック判定を返す。
なぜ: 保持モードの pyglet 上でも、イミディエイトモードのウィジェットをそのまま動かすため。

使用例:
    win = pyglet.window.Window(480, 320)
    surface = PygletSurface(win)

    @win.event
    def on_draw():
        win.clear()
        surface.begin_frame()
        store.timer("cooldown", 2.0).timing_ui(...).done_ui(...).show(surface)
        surface.draw()
"""

from __future__ import annotations

import time
from typing import Any

import pyglet
from pyglet.shapes import Rectangle
from pyglet.window import Window

SPINNER_FRAMES = ("|", "/", "-", "\\")


class PygletSurface:
    """pyglet 上のイミディエイトモード描画面。"""

    def __init__(
        self,
        window: Window,
        *,
        font_size: int = 12,
        color: tuple[int, int, int, int] = (0, 0, 0, 255),
        button_color: tuple[int, int, int, int] = (210, 210, 210, 255),
        padding: int = 10,
        line_gap: int = 6,
    ) -> None:
        self.window = window
        self.font_size = font_size
        self._color = color
        self._button_color = button_color
        self._padding = padding
        self._line_gap = line_gap
        self._batch = pyglet.graphics.Batch()
        # ボタン背景を文字より先に描く
        self._bg = pyglet.graphics.Group(order=0)
        self._fg = pyglet.graphics.Group(order=1)
        # 次の begin_frame まで描画要素を生かしておく
        self._items: list[Any] = []
        self._cursor_y = 0
        self._pending_clicks: list[tuple[int, int]] = []
        self._clicks: list[tuple[int, int]] = []
        window.push_handlers(on_mouse_press=self._on_mouse_press)

    # ---- pyglet events ----
    def _on_mouse_press(self, x: int, y: int, button: int, modifiers: int) -> None:
        if button == pyglet.window.mouse.LEFT:
            self._pending_clicks.append((x, y))

    # ---- frame ----
    def begin_frame(self) -> None:
        """前フレームの要素を破棄し、溜まったクリックをこのフレームへ渡す。"""
        for item in self._items:
            item.delete()
        self._items.clear()
        self._cursor_y = self.window.height - self._padding
        self._clicks = self._pending_clicks
        self._pending_clicks = []

    def draw(self) -> None:
        self._batch.draw()

    # ---- RenderSurface ----
    def label(self, text: str) -> None:
        self._add_text(text, self._padding)

    def spinner(self) -> None:
        frame = SPINNER_FRAMES[int(time.perf_counter() * 10) % len(SPINNER_FRAMES)]
        self._add_text(frame, self._padding)

    def button(self, text: str) -> bool:
        x = self._padding
        inner = 4
        top = self._cursor_y
        lbl = self._add_text(text, x + inner, y=top - inner, advance=False)
        w = int(lbl.content_width) + inner * 2
        h = int(lbl.content_height) + inner * 2
        bottom = top - h
        rect = Rectangle(
            x, bottom, w, h, color=self._button_color, batch=self._batch, group=self._bg
        )
        self._items.append(rect)
        self._cursor_y = bottom - self._line_gap
        return any(x <= cx <= x + w and bottom <= cy <= top for cx, cy in self._clicks)

    # ---- helpers ----
    def _add_text(
        self, text: str, x: int, *, y: int | None = None, advance: bool = True
    ) -> pyglet.text.Label:
        lbl = pyglet.text.Label(
            text,
            font_size=self.font_size,
            x=x,
            y=self._cursor_y if y is None else y,
            anchor_x="left",
            anchor_y="top",
            color=self._color,
            batch=self._batch,
            group=self._fg,
        )
        self._items.append(lbl)
        if advance:
            self._cursor_y -= int(lbl.content_height) + self._line_gap
        return lbl


__all__ = ["PygletSurface", "SPINNER_FRAMES"]
