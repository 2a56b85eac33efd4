from __future__ import annotations

from framestate.demo import DemoApp
from framestate.runtime.runner import TaskRunner
from tests._utils.dummies import RecordingSurface


def _app() -> DemoApp:
    return DemoApp(TaskRunner(0), task_seconds=0, timer_seconds=1.0)


def test_demo_first_frame_shows_every_widget_entry_point():
    app = _app()
    surface = RecordingSurface()
    app.update(surface)
    assert surface.labels[0] == "framestate demo"
    assert surface.buttons == ["download", "verify checksum", "upload", "start cooldown"]
    assert "ready (rounds: 0)" in surface.labels


def test_demo_download_emits_value_and_checksum_fails():
    app = _app()
    surface = RecordingSurface()
    app.update(surface.new_frame("download", "verify checksum", "upload"))
    app.update(surface.new_frame())
    assert app.last_value == 42
    assert "downloaded: 42" in surface.labels
    assert "error" in surface.labels
    assert "success" in surface.labels
    assert surface.buttons.count("clear") == 1

    app.update(surface.new_frame("again", "reset", "clear"))
    app.update(surface.new_frame())
    assert surface.buttons == ["download", "verify checksum", "upload", "start cooldown"]
