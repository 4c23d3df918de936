"""Session wiring: terminal, producers, searcher, and the router loop."""

from __future__ import annotations

import queue
from typing import BinaryIO

from ..input.actions import Draw
from ..input.binds import Binds
from ..input.events import InputDecoder
from ..input.reader import KeyReader
from ..log import get_logger
from ..search.debounce import RedrawDebouncer
from ..search.searcher import Searcher
from ..search.source import SourceIngestor
from ..tui.prompt import Prompt
from .config import Settings
from .loop import Router, RuntimeLoopTiming, run_main_loop
from .state import AppState
from .terminal import TerminalController

log = get_logger(__name__)

DECODER_JOIN_SECONDS = 0.25


def resolve_binds(settings: Settings) -> Binds:
    binds = Binds()
    binds.overwrite(settings.binds)
    if not settings.disable_default_binds:
        binds.insert_defaults()
    return binds


def run_app(
    settings: Settings,
    source: BinaryIO | None,
    terminal: TerminalController | None = None,
    timing: RuntimeLoopTiming = RuntimeLoopTiming(),
) -> str | None:
    """Run one interactive session and return the accepted line, if any.

    Fatal errors propagate after the terminal has been restored.
    """
    actions: queue.Queue = queue.Queue()
    if terminal is None:
        terminal = TerminalController.open_tty()

    debouncer = RedrawDebouncer(lambda: actions.put(Draw()), interval=settings.debounce_seconds)
    searcher = Searcher(notify=debouncer.notify, budget=settings.match_budget)
    searcher.submit_query(settings.query)
    inline_height = settings.viewport.inline_height(terminal.size()[1])
    state = AppState(
        prompt=Prompt(settings.query),
        prompt_prefix=settings.prompt,
        viewport=settings.viewport,
        inline_height=inline_height,
    )
    router = Router(state, searcher, terminal.size, terminal.write)

    if source is not None:
        SourceIngestor(source, searcher.ingest).start()
    decoder = InputDecoder(KeyReader(terminal.stdin_fd), resolve_binds(settings), actions.put, terminal.size)

    log.info("session start query=%r budget=%d", settings.query, settings.match_budget)
    try:
        with terminal.raw_mode(inline_height):
            decoder_thread = decoder.start()
            try:
                run_main_loop(router, actions, timing)
            finally:
                decoder.stop()
                decoder_thread.join(DECODER_JOIN_SECONDS)
    finally:
        debouncer.cancel()
        terminal.close()
    log.info("session end accepted=%s frames=%d", state.accepted is not None, state.frames_drawn)
    return state.accepted
