"""Display-width measurement and line shaping for terminal rows.

Input lines come from arbitrary programs, so control characters are made
inert before clipping. Wide characters and tabs are measured in cells.
"""

from __future__ import annotations

import unicodedata

TAB_STOP = 8
REPLACEMENT_CHAR = "\N{REPLACEMENT CHARACTER}"


def char_display_width(ch: str, col: int) -> int:
    """Return terminal column width for one character at visual column ``col``.

    Tabs expand to the next 8-column stop, combining marks consume no columns,
    and East Asian wide/fullwidth characters consume two.
    """
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def sanitize_line(text: str) -> str:
    """Replace control characters (other than tab) so they cannot move the cursor."""
    if text.isprintable():
        return text
    return "".join(
        ch if ch == "\t" or unicodedata.category(ch)[0] != "C" else REPLACEMENT_CHAR
        for ch in text
    )


def display_width(text: str) -> int:
    col = 0
    for ch in text:
        col += char_display_width(ch, col)
    return col


def clip_line(text: str, max_cols: int) -> str:
    """Trim a plain line to at most ``max_cols`` display columns.

    Tabs are expanded into spaces so clipping aligns with rendered terminal cells.
    """
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    for ch in text:
        w = char_display_width(ch, col)
        if col + w > max_cols:
            break
        out.append(" " * w if ch == "\t" else ch)
        col += w
    return "".join(out)


def clip_line_tail(text: str, max_cols: int) -> tuple[str, int]:
    """Keep the rightmost ``max_cols`` columns of ``text``.

    Returns the kept text and the number of characters dropped from the left,
    which callers use to place a caret that would otherwise scroll off-screen.
    """
    if max_cols <= 0:
        return "", len(text)
    if display_width(text) <= max_cols:
        return text, 0

    kept: list[str] = []
    cols = 0
    for ch in reversed(text):
        # Tabs are measured as a full stop here since their column is unknown.
        w = TAB_STOP if ch == "\t" else char_display_width(ch, 0)
        if cols + w > max_cols:
            break
        kept.append(ch)
        cols += w
    kept.reverse()
    return "".join(kept), len(text) - len(kept)
