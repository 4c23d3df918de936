"""Frame composition for the results list and the query prompt.

The region is split into a results list on top and two fixed rows at the
bottom: a status row with match counts and the prompt row. Every row is
padded to the region width in terminal cells and placed explicitly, so a
frame never depends on line wrapping or on what the previous frame drew.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..ansi import clip_line, clip_line_tail, display_width, sanitize_line

PROMPT_ROWS = 2
SELECTED_MARKER = "> "
UNSELECTED_MARKER = "  "
SPINNER_FRAMES: tuple[str, ...] = ("|", "/", "-", "\\")

RESTORE_CURSOR = "\0338"


def results_height(lines: int) -> int:
    """Rows available to the results list for a region ``lines`` tall."""
    return max(1, lines - PROMPT_ROWS)


def selected_with_ansi(text: str) -> str:
    if not text:
        return text
    return "\033[7m" + text + "\033[0m"


def pad_cells(text: str, width: int) -> str:
    """Right-pad plain ``text`` with spaces to ``width`` terminal cells."""
    return text + " " * max(0, width - display_width(text))


def build_status_line(matched: int, total: int, width: int, spinner: str = "") -> str:
    left = f"  {matched}/{total}"
    if spinner:
        left = f"{spinner} {matched}/{total}"
    return pad_cells(clip_line(left, width), width) if width > 0 else ""


@dataclass
class RenderContext:
    width: int
    lines: int
    items: list[str]
    selected: int | None
    matched: int
    total: int
    prompt: str
    query: str
    caret: int
    matching: bool = False
    spinner_frame: int = 0
    x: int = 0
    y: int = 0
    inline: bool = False
    clear: bool = False


def _result_row(text: str, is_selected: bool, width: int) -> str:
    marker = SELECTED_MARKER if is_selected else UNSELECTED_MARKER
    body = clip_line(sanitize_line(text), max(0, width - len(marker)))
    row = pad_cells(clip_line(marker, width) + body, width)
    if is_selected:
        return selected_with_ansi(row)
    return row


def _prompt_row(prompt: str, query: str, caret: int, width: int) -> str:
    prompt = clip_line(sanitize_line(prompt), max(0, width - 1))
    room = max(1, width - display_width(prompt) - 1)
    text = sanitize_line(query).replace("\t", " ")
    before, _ = clip_line_tail(text[:caret], room)
    after = clip_line(text[caret:], max(0, room - display_width(before)))
    if after:
        caret_cell, after = after[0], after[1:]
    else:
        caret_cell = " "
    used = display_width(prompt) + display_width(before) + display_width(caret_cell) + display_width(after)
    tail = " " * max(0, width - used)
    return f"{prompt}{before}{selected_with_ansi(caret_cell)}{after}{tail}"


def clear_region(inline: bool) -> str:
    """Blank the whole region, used when the terminal size changes."""
    if inline:
        return RESTORE_CURSOR + "\033[J"
    return "\033[2J"


def _row_origin(context: RenderContext, row: int) -> str:
    if context.inline:
        prefix = RESTORE_CURSOR if row == 0 else "\033[1B"
        return f"{prefix}\033[{context.x + 1}G"
    return f"\033[{context.y + row + 1};{context.x + 1}H"


def build_frame(context: RenderContext) -> str:
    width = max(1, context.width)
    height = results_height(context.lines)
    rows: list[str] = []
    for row in range(height):
        if row < len(context.items):
            rows.append(_result_row(context.items[row], row == context.selected, width))
        else:
            rows.append(" " * width)

    spinner = SPINNER_FRAMES[context.spinner_frame % len(SPINNER_FRAMES)] if context.matching else ""
    status = build_status_line(context.matched, context.total, width, spinner)
    rows.append(f"\033[2m{status}\033[0m")
    rows.append(_prompt_row(context.prompt, context.query, context.caret, width))
    prefix = clear_region(context.inline) if context.clear else ""
    return prefix + "".join(_row_origin(context, idx) + row for idx, row in enumerate(rows))
