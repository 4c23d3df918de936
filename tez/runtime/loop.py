"""Router: the single consumer of actions and sole owner of UI state.

Producers (input decoder, line source, redraw debouncer) only post actions
onto a queue. Matching progresses in bounded slices between actions so a
large rescan never delays the next keystroke by more than one slice.
"""

from __future__ import annotations

import queue
from collections.abc import Callable
from dataclasses import dataclass

from ..errors import TerminalError
from ..input.actions import (
    Accept,
    Action,
    Direction,
    Draw,
    Edit,
    Exit,
    Navigate,
    TerminalFailed,
)
from ..log import get_logger
from ..search.searcher import Searcher
from ..tui.render import RenderContext, build_frame, results_height
from .state import AppState

log = get_logger(__name__)


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    # Wait between matching slices while a rescan or ingestion is pending.
    matching_tick_seconds: float = 0.01


class Router:
    """Dispatch actions to the prompt, cursor, and searcher, and draw frames."""

    def __init__(
        self,
        state: AppState,
        searcher: Searcher,
        terminal_size: Callable[[], tuple[int, int]],
        write: Callable[[str], None],
    ) -> None:
        self.state = state
        self.searcher = searcher
        self._terminal_size = terminal_size
        self._write = write

    def draw(self) -> None:
        """Advance matching, refresh the cursor window, and write one frame."""
        state = self.state
        matching = self.searcher.advance()
        snapshot = self.searcher.snapshot()
        state.columns, state.lines = self._terminal_size()
        area = state.viewport.area(state.columns, state.inline_height or state.lines)
        height = results_height(area.height)
        resized = state.drawn_size not in (None, (state.columns, state.lines))
        state.drawn_size = (state.columns, state.lines)

        cursor = state.cursor
        cursor.set_length(snapshot.matched)
        offset = cursor.update_window(height)
        if matching:
            state.spinner_frame += 1

        context = RenderContext(
            width=area.width,
            lines=area.height,
            items=snapshot.items(offset, offset + height),
            selected=cursor.visible_selection(),
            matched=snapshot.matched,
            total=snapshot.total,
            prompt=state.prompt_prefix,
            query=state.prompt.text,
            caret=state.prompt.caret,
            matching=matching,
            spinner_frame=state.spinner_frame,
            x=area.x,
            y=area.y,
            inline=state.inline_height is not None,
            clear=resized,
        )
        self._write(build_frame(context))
        state.frames_drawn += 1
        state.dirty = False

    def selected_line(self) -> str | None:
        cursor = self.state.cursor
        cursor.set_length(self.searcher.snapshot().matched)
        selected = cursor.position()
        if selected is None:
            return None
        items = self.searcher.snapshot().items(selected, selected + 1)
        return items[0] if items else None

    def navigate(self, direction: Direction) -> None:
        cursor = self.state.cursor
        cursor.set_length(self.searcher.snapshot().matched)
        if direction is Direction.NEXT:
            cursor.next()
        elif direction is Direction.PREVIOUS:
            cursor.previous()
        elif direction is Direction.FIRST:
            cursor.first()
        else:
            cursor.last()

    def edit(self, action: Edit) -> None:
        prompt = self.state.prompt
        if prompt.apply(action):
            self.searcher.submit_query(prompt.text)

    def handle_action(self, action: Action) -> None:
        state = self.state
        if isinstance(action, Exit):
            state.exit()
        elif isinstance(action, Accept):
            state.accepted = self.selected_line()
            state.exit()
        elif isinstance(action, Draw):
            self.draw()
        elif isinstance(action, Navigate):
            self.navigate(action.direction)
            self.draw()
        elif isinstance(action, Edit):
            self.edit(action)
            self.draw()
        elif isinstance(action, TerminalFailed):
            raise TerminalError(f"terminal input failed: {action.error}") from action.error
        else:
            log.warning("ignoring unknown action %r", action)


def run_main_loop(
    router: Router,
    actions: queue.Queue,
    timing: RuntimeLoopTiming = RuntimeLoopTiming(),
) -> None:
    """Run until an exit action or a fatal error.

    Each iteration draws if a redraw is due, otherwise advances matching by one
    slice, then waits for the next action. The wait is bounded only while
    matching work remains.
    """
    state = router.state
    searcher = router.searcher
    while state.running:
        if state.dirty:
            router.draw()
        elif searcher.has_pending_work():
            searcher.advance()

        timeout = timing.matching_tick_seconds if searcher.has_pending_work() else None
        try:
            action = actions.get(timeout=timeout)
        except queue.Empty:
            continue
        router.handle_action(action)
