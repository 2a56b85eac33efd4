"""
どこで: `framestate.demo`（`python -m framestate.demo`）。
何を: pyglet ウィンドウ上で promise_await / default_promise_await / future_await / timer を 1 画面に並べる。
なぜ: 状態機械が実際の描画ループ（FrameClock + on_draw）でどう振る舞うかを目視確認するため。
"""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping

from framestate.common.config import load_config
from framestate.common.logging import setup_default_logging
from framestate.core.store import UiStates
from framestate.runtime.handle import Outcome
from framestate.runtime.runner import TaskRunner
from framestate.ui.response import DoneResponse
from framestate.ui.surface import RenderSurface

logger = logging.getLogger(__name__)


def fake_download(seconds: float) -> int:
    """時間のかかる計算の代役。"""
    if seconds > 0:
        time.sleep(seconds)
    return 42


def fake_failure(seconds: float) -> int:
    if seconds > 0:
        time.sleep(seconds)
    raise ConnectionError("server went away")


class DemoApp:
    """1 フレーム分のウィジェットを組み立てるだけのアプリ本体（描画面は外から渡す）。"""

    def __init__(
        self,
        runner: TaskRunner,
        store: UiStates | None = None,
        *,
        task_seconds: float = 1.5,
        timer_seconds: float = 2.0,
    ) -> None:
        self.runner = runner
        self.store = store or UiStates()
        self.task_seconds = task_seconds
        self.timer_seconds = timer_seconds
        self.last_value: Any = None

    def update(self, surface: RenderSurface) -> None:
        surface.label("framestate demo")
        self._download(surface)
        self._checksum(surface)
        self._upload(surface)
        self._cooldown(surface)

    # --- promise_await: 結果を emit して呼び出し側で受け取る ---
    def _download(self, surface: RenderSurface) -> None:
        def init(s: RenderSurface, submit) -> None:
            if s.button("download"):
                submit(self.runner.submit(fake_download, self.task_seconds))

        def done(s: RenderSurface, outcome: Outcome[int]) -> DoneResponse[int] | None:
            if not outcome.ok:
                s.label(f"download failed: {outcome.error}")
                return DoneResponse.reset() if s.button("retry") else None
            s.label(f"downloaded: {outcome.value}")
            if s.button("again"):
                return DoneResponse.reset()
            return DoneResponse.emit(outcome.value)

        value = (
            self.store.promise_await("download")
            .init_ui(init)
            .waiting_ui(lambda s: s.label("downloading..."))
            .done_ui(done)
            .show(surface)
        )
        if value is not None:
            self.last_value = value

    # --- default_promise_await: 失敗するタスクを既定表示で ---
    def _checksum(self, surface: RenderSurface) -> None:
        def init(s: RenderSurface, submit) -> None:
            if s.button("verify checksum"):
                submit(self.runner.submit(fake_failure, self.task_seconds))

        self.store.default_promise_await("checksum").init_ui(init).show(surface)

    # --- future_await: 投入と表示を分けて書く ---
    def _upload(self, surface: RenderSurface) -> None:
        if not self.store.is_running("upload") and surface.button("upload"):
            self.store.set_future("upload").set(
                self.runner.submit(fake_download, self.task_seconds)
            )
        self.store.future_status("upload").default().show(surface)

    # --- timer: ユーザ状態（完了回数）付き ---
    def _cooldown(self, surface: RenderSurface) -> None:
        def timing(s: RenderSurface, state: dict[str, int], fraction: float) -> None:
            s.label(f"cooling down {min(fraction, 1.0) * 100:.0f}%")
            if fraction >= 1.0:
                state["rounds"] += 1

        def done(s: RenderSurface, state: dict[str, int]) -> DoneResponse[Any] | None:
            s.label(f"ready (rounds: {state['rounds']})")
            return DoneResponse.reset() if s.button("start cooldown") else None

        (
            self.store.timer("cooldown", self.timer_seconds, user_state=lambda: {"rounds": 0})
            .timing_ui(timing)
            .done_ui(done)
            .show(surface)
        )


def main(config: Mapping[str, Any] | None = None) -> None:
    """pyglet ウィンドウを開いてデモを実行する。"""
    import pyglet

    from framestate.core.frame_clock import FrameClock
    from framestate.ui.pyglet_surface import PygletSurface

    setup_default_logging()
    cfg = dict(config if config is not None else load_config().get("demo", {}) or {})
    width = int(cfg.get("width", 480))
    height = int(cfg.get("height", 320))
    fps = float(cfg.get("fps", 60))

    runner = TaskRunner()
    app = DemoApp(
        runner,
        task_seconds=float(cfg.get("download_seconds", 1.5)),
        timer_seconds=float(cfg.get("timer_seconds", 2.0)),
    )
    window = pyglet.window.Window(width, height, caption="framestate demo")
    surface = PygletSurface(window, font_size=int(cfg.get("font_size", 12)))
    clock = FrameClock([app.store])

    @window.event
    def on_draw() -> None:
        pyglet.gl.glClearColor(1.0, 1.0, 1.0, 1.0)
        window.clear()
        clock.tick()
        surface.begin_frame()
        app.update(surface)
        surface.draw()

    logger.info("demo started (%dx%d @ %.0f fps)", width, height, fps)
    try:
        pyglet.app.run(1.0 / fps)
    finally:
        runner.close()


if __name__ == "__main__":
    main()
