"""Terminal control helpers for the TUI session.

Owns raw-mode lifecycle, the alternate screen or reserved inline rows, and
frame output.
The session talks to ``/dev/tty`` so standard input and output stay free for
the line source and the accepted selection.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

from ..errors import TerminalError

TTY_PATH = "/dev/tty"
DEFAULT_SIZE = (80, 24)


def reserve_inline_rows(height: int) -> str:
    """Scroll ``height`` rows into view below the cursor and save their origin."""
    moves = "\r\n" * (height - 1)
    if height > 1:
        moves += f"\x1b[{height - 1}A"
    return moves + "\r\x1b7"


class TerminalController:
    """Manage terminal mode transitions and frame writes."""

    def __init__(self, stdin_fd: int, stdout_fd: int, owns_fds: bool = False) -> None:
        """Capture tty state and bind input/output file descriptors."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._owns_fds = owns_fds
        self.inline_height: int | None = None
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise TerminalError(f"not a terminal: {exc}") from exc

    @classmethod
    def open_tty(cls, path: str = TTY_PATH) -> TerminalController:
        """Open the controlling terminal for both input and output."""
        try:
            fd = os.open(path, os.O_RDWR | os.O_NOCTTY)
        except OSError as exc:
            raise TerminalError(f"cannot open {path}: {exc.strerror or exc}") from exc
        try:
            return cls(fd, fd, owns_fds=True)
        except TerminalError:
            os.close(fd)
            raise

    def enable_tui_mode(self, inline_height: int | None = None) -> None:
        """Enter raw mode with the cursor hidden.

        Without ``inline_height`` the alternate screen is used. Otherwise that
        many rows are reserved below the cursor and their top-left cell is
        saved as the frame origin.
        """
        try:
            tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        except termios.error as exc:
            raise TerminalError(f"cannot enter raw mode: {exc}") from exc
        self.inline_height = inline_height
        if inline_height is None:
            self.write("\x1b[?1049h\x1b[?25l")
        else:
            self.write(reserve_inline_rows(inline_height) + "\x1b[?25l")

    def disable_tui_mode(self) -> None:
        """Show the cursor, leave the alternate screen or clear the inline rows,
        and restore tty state.

        Restoration is best effort: it runs while a fatal error may already be
        propagating, and that error is the one worth reporting.
        """
        if self.inline_height is None:
            restore = b"\x1b[?25h\x1b[?1049l"
        else:
            restore = b"\x1b8\x1b[J\x1b[?25h"
        with contextlib.suppress(OSError):
            os.write(self.stdout_fd, restore)
        with contextlib.suppress(OSError, termios.error):
            termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    def size(self) -> tuple[int, int]:
        """Return ``(columns, lines)`` of the terminal."""
        try:
            size = os.get_terminal_size(self.stdout_fd)
        except OSError:
            return DEFAULT_SIZE
        return max(1, size.columns), max(1, size.lines)

    def write(self, data: str) -> None:
        """Write a whole frame, retrying short writes."""
        payload = memoryview(data.encode("utf-8", errors="replace"))
        try:
            while payload:
                written = os.write(self.stdout_fd, payload)
                payload = payload[written:]
        except OSError as exc:
            raise TerminalError(f"terminal write failed: {exc.strerror or exc}") from exc

    def close(self) -> None:
        if self._owns_fds:
            with contextlib.suppress(OSError):
                os.close(self.stdin_fd)
            self._owns_fds = False

    @contextlib.contextmanager
    def raw_mode(self, inline_height: int | None = None):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode(inline_height)
            yield
        finally:
            self.disable_tui_mode()
