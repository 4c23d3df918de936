"""Edge-anchored selection over a result list whose length keeps changing.

The selection is remembered relative to whichever end the user last moved
toward. Results may still be streaming in when the user wraps from the top to
the bottom; anchoring to the end keeps the selection on the last row as more
rows arrive instead of leaving it stranded mid-list.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Unset:
    pass


@dataclass(frozen=True)
class FromStart:
    k: int


@dataclass(frozen=True)
class FromEnd:
    k: int


Position = Unset | FromStart | FromEnd

UNSET = Unset()


class LazyCursor:
    """Selected position plus the first visible row of the window."""

    def __init__(self) -> None:
        self.length = 0
        self.pos: Position = UNSET
        self.offset = 0

    def set_length(self, length: int) -> None:
        length = max(0, length)
        self.length = length
        pos = self.pos
        if length == 0:
            self.pos = UNSET
        elif isinstance(pos, FromStart) and pos.k >= length:
            self.pos = FromStart(length - 1)
        elif isinstance(pos, FromEnd) and pos.k >= length:
            self.pos = FromEnd(length - 1)

    def next(self) -> None:
        pos = self.pos
        if self.length == 0:
            self.pos = UNSET
        elif isinstance(pos, FromStart) and pos.k < self.length - 1:
            self.pos = FromStart(pos.k + 1)
        elif isinstance(pos, FromEnd) and pos.k > 0:
            self.pos = FromEnd(pos.k - 1)
        else:
            self.pos = FromStart(0)

    def previous(self) -> None:
        pos = self.pos
        if self.length == 0:
            self.pos = UNSET
        elif isinstance(pos, FromEnd) and pos.k < self.length - 1:
            self.pos = FromEnd(pos.k + 1)
        elif isinstance(pos, FromStart) and pos.k > 0:
            self.pos = FromStart(pos.k - 1)
        else:
            self.pos = FromEnd(0)

    def first(self) -> None:
        self.pos = FromStart(0)

    def last(self) -> None:
        self.pos = FromEnd(0)

    def position(self) -> int | None:
        """Absolute index of the selection, or ``None`` when nothing is selected."""
        pos = self.pos
        if self.length == 0:
            return None
        if isinstance(pos, FromStart):
            return pos.k
        if isinstance(pos, FromEnd):
            return self.length - 1 - pos.k
        return None

    def update_window(self, height: int) -> int:
        """Scroll the window so the selection is visible; return the new offset."""
        height = max(1, height)
        selected = self.position()
        if selected is None:
            self.offset = 0
            return self.offset
        offset = min(max(self.offset, selected - height + 1), selected)
        self.offset = max(0, min(offset, self.length - height))
        return self.offset

    def visible_selection(self) -> int | None:
        """Selected row relative to the window's first row."""
        selected = self.position()
        if selected is None:
            return None
        return selected - self.offset
