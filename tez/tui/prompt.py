"""Single-line query editor with emacs-style caret and deletion operations."""

from __future__ import annotations

from ..input.actions import Edit, EditOp


def _word_start_before(text: str, caret: int) -> int:
    idx = caret
    while idx > 0 and text[idx - 1].isspace():
        idx -= 1
    while idx > 0 and not text[idx - 1].isspace():
        idx -= 1
    return idx


def _word_end_after(text: str, caret: int) -> int:
    idx = caret
    while idx < len(text) and text[idx].isspace():
        idx += 1
    while idx < len(text) and not text[idx].isspace():
        idx += 1
    return idx


class Prompt:
    """Query text plus caret position (in characters)."""

    def __init__(self, text: str = "") -> None:
        self.text = text
        self.caret = len(text)

    def apply(self, edit: Edit) -> bool:
        """Apply ``edit``; return whether the text changed."""
        before = self.text
        text = self.text
        caret = self.caret
        op = edit.op

        if op is EditOp.INSERT:
            text = text[:caret] + edit.text + text[caret:]
            caret += len(edit.text)
        elif op is EditOp.MOVE_BACK:
            caret = max(0, caret - 1)
        elif op is EditOp.MOVE_FORWARD:
            caret = min(len(text), caret + 1)
        elif op is EditOp.MOVE_BACK_WORD:
            caret = _word_start_before(text, caret)
        elif op is EditOp.MOVE_FORWARD_WORD:
            caret = _word_end_after(text, caret)
        elif op is EditOp.MOVE_TO_HEAD:
            caret = 0
        elif op is EditOp.MOVE_TO_END:
            caret = len(text)
        elif op is EditOp.DELETE:
            if caret > 0:
                text = text[: caret - 1] + text[caret:]
                caret -= 1
        elif op is EditOp.DELETE_WORD:
            start = _word_start_before(text, caret)
            text = text[:start] + text[caret:]
            caret = start
        elif op is EditOp.DELETE_NEXT:
            text = text[:caret] + text[caret + 1 :]
        elif op is EditOp.DELETE_NEXT_WORD:
            text = text[:caret] + text[_word_end_after(text, caret) :]
        elif op is EditOp.DELETE_TO_HEAD:
            text = text[caret:]
            caret = 0
        elif op is EditOp.DELETE_TO_END:
            text = text[:caret]

        self.text = text
        self.caret = caret
        return text != before
