"""Background input decoder feeding router actions.

Decodes keys on a daemon thread, resolves them through the bind table, and
posts the resulting actions. Terminal size changes noticed while idle are
posted as redraws.
"""

from __future__ import annotations

import threading
from collections.abc import Callable

from ..log import get_logger
from .actions import Action, Draw, Edit, EditOp, TerminalFailed
from .binds import Binds
from .keys import Key
from .reader import KeyReader

log = get_logger(__name__)

IDLE_READ_TIMEOUT_MS = 120


def action_for_key(binds: Binds, key: Key) -> Action | None:
    """Bound action for ``key``; unbound printable keys insert themselves."""
    action = binds.action_for_key(key)
    if action is not None:
        return action
    if key.is_printable():
        return Edit(EditOp.INSERT, key.name)
    return None


class InputDecoder:
    def __init__(
        self,
        reader: KeyReader,
        binds: Binds,
        post: Callable[[Action], None],
        terminal_size: Callable[[], tuple[int, int]] | None = None,
        idle_timeout_ms: int = IDLE_READ_TIMEOUT_MS,
    ) -> None:
        self._reader = reader
        self._binds = binds
        self._post = post
        self._terminal_size = terminal_size
        self._idle_timeout_ms = idle_timeout_ms
        self._stop = threading.Event()
        self._last_size = terminal_size() if terminal_size is not None else None

    def stop(self) -> None:
        self._stop.set()

    def _check_resize(self) -> None:
        if self._terminal_size is None:
            return
        size = self._terminal_size()
        if size != self._last_size:
            log.debug("terminal resized %s -> %s", self._last_size, size)
            self._last_size = size
            self._post(Draw())

    def run(self) -> None:
        """Decode until stopped or the terminal fails."""
        while not self._stop.is_set():
            try:
                key = self._reader.read_key(timeout_ms=self._idle_timeout_ms)
                if key is None:
                    self._check_resize()
                    continue
            except (OSError, EOFError) as exc:
                if not self._stop.is_set():
                    log.error("terminal input failed: %s", exc)
                    self._post(TerminalFailed(exc))
                return
            action = action_for_key(self._binds, key)
            log.debug("key %s -> %s", key, action)
            if action is not None:
                self._post(action)

    def start(self) -> threading.Thread:
        thread = threading.Thread(target=self.run, name="tez-input", daemon=True)
        thread.start()
        return thread
