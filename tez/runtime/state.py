"""Mutable session state owned by the router thread."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..tui.cursor import LazyCursor
from ..tui.prompt import Prompt
from ..tui.viewport import Viewport


@dataclass
class AppState:
    prompt: Prompt = field(default_factory=Prompt)
    cursor: LazyCursor = field(default_factory=LazyCursor)
    prompt_prefix: str = "> "
    running: bool = True
    dirty: bool = True
    accepted: str | None = None
    columns: int = 80
    lines: int = 24
    viewport: Viewport = field(default_factory=Viewport)
    # Rows reserved below the shell prompt; None draws on the alternate screen.
    inline_height: int | None = None
    # Size of the last drawn frame, to blank the region when it changes.
    drawn_size: tuple[int, int] | None = None
    spinner_frame: int = 0
    frames_drawn: int = 0

    def exit(self) -> None:
        self.running = False
