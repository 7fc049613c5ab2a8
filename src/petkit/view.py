from __future__ import annotations

from typing import Protocol


class View(Protocol):
    def open(self) -> None: ...

    def update(self, dt: float) -> None: ...

    def draw(self) -> None: ...

    def close(self) -> None: ...

    def should_close(self) -> bool: ...


def run_view(
    view: View,
    *,
    width: int = 900,
    height: int = 760,
    title: str = "Pet Arena",
    fps: int = 60,
) -> None:
    """Run a Raylib window driving a single view until it (or the window) closes."""
    import pyray as rl

    rl.init_window(width, height, title)
    rl.set_target_fps(fps)
    view.open()
    try:
        while not rl.window_should_close() and not view.should_close():
            view.update(rl.get_frame_time())
            rl.begin_drawing()
            view.draw()
            rl.end_drawing()
    finally:
        view.close()
        rl.close_window()
