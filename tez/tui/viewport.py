"""Placement of the tez region on the terminal.

Without a height the region fills the alternate screen. With a height the
region is drawn inline below the shell prompt, leaving scrollback intact.
A width narrows the region and the alignment places it horizontally.

Extents are written as cells (``20``) or a percentage of the terminal
(``40%``). Alignments are ``left``, ``center`` or ``right``, with an optional
offset from that edge: ``left(2)``, ``right(10%)``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

MAX_CELLS = 65535
# Results row, status row and prompt row.
MIN_INLINE_ROWS = 3


class ParseExtentError(ValueError):
    def __init__(self) -> None:
        super().__init__("failed to parse extent")


class ParseAlignmentError(ValueError):
    def __init__(self) -> None:
        super().__init__("failed to parse alignment")


@dataclass(frozen=True)
class Extent:
    """A size in cells, or a fraction of the available size when ``percent``."""

    value: float
    percent: bool = False

    @classmethod
    def parse(cls, text: str) -> Extent:
        if text.endswith("%"):
            number = text[:-1].rstrip()
            try:
                value = float(number)
            except ValueError as exc:
                raise ParseExtentError() from exc
            if not number or not math.isfinite(value) or value < 0:
                raise ParseExtentError()
            return cls(value / 100.0, percent=True)
        if not (text.isascii() and text.isdigit()):
            raise ParseExtentError()
        return cls.from_cells(int(text))

    @classmethod
    def from_cells(cls, cells: int) -> Extent:
        if isinstance(cells, bool) or not 0 <= cells <= MAX_CELLS:
            raise ParseExtentError()
        return cls(cells)

    def cells(self, size: int) -> int:
        if self.percent:
            return int(self.value * size)
        return int(self.value)

    def __str__(self) -> str:
        if self.percent:
            return f"{self.value * 100:g}%"
        return str(int(self.value))


ZERO = Extent(0)


@dataclass(frozen=True)
class Alignment:
    kind: str = "left"
    offset: Extent = ZERO

    @classmethod
    def parse(cls, text: str) -> Alignment:
        if text == "center":
            return cls("center")
        for kind in ("left", "right"):
            if text.startswith(kind):
                rest = text[len(kind):]
                if not rest:
                    return cls(kind)
                return cls(kind, _parse_offset(rest.lstrip()))
        raise ParseAlignmentError()

    def __str__(self) -> str:
        if self.kind == "center" or self.offset == ZERO:
            return self.kind
        return f"{self.kind}({self.offset})"


def _parse_offset(text: str) -> Extent:
    if not (text.startswith("(") and text.endswith(")")):
        raise ParseAlignmentError()
    try:
        return Extent.parse(text[1:-1].strip())
    except ParseExtentError as exc:
        raise ParseAlignmentError() from exc


@dataclass(frozen=True)
class Area:
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class Viewport:
    width: Extent | None = None
    height: Extent | None = None
    alignment: Alignment = Alignment()

    @property
    def is_inline(self) -> bool:
        return self.height is not None

    def inline_height(self, term_lines: int) -> int | None:
        """Rows reserved below the cursor, kept under the terminal height."""
        if self.height is None:
            return None
        return min(max(MIN_INLINE_ROWS, self.height.cells(term_lines)), max(1, term_lines - 1))

    def area(self, columns: int, lines: int) -> Area:
        """Horizontal placement of a region ``lines`` tall on a ``columns`` wide terminal."""
        if self.width is None:
            return Area(0, 0, columns, lines)
        width = max(1, min(self.width.cells(columns), columns))
        alignment = self.alignment
        if alignment.kind == "center":
            x = columns // 2 - width // 2
        elif alignment.kind == "right":
            x = max(0, columns - width - alignment.offset.cells(columns))
        else:
            x = min(alignment.offset.cells(columns), columns - width)
        return Area(x, 0, width, lines)
