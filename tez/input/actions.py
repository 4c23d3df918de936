"""Actions consumed by the router, and parsing of action names for binds."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class ParseActionError(ValueError):
    """Raised for an unknown action name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"invalid action: {name}")
        self.name = name


class Direction(enum.Enum):
    FIRST = "first"
    LAST = "last"
    NEXT = "next"
    PREVIOUS = "previous"


class EditOp(enum.Enum):
    INSERT = "insert"
    MOVE_BACK = "move-back"
    MOVE_FORWARD = "move-forward"
    MOVE_BACK_WORD = "move-back-word"
    MOVE_FORWARD_WORD = "move-forward-word"
    MOVE_TO_HEAD = "move-to-head"
    MOVE_TO_END = "move-to-end"
    DELETE = "delete"
    DELETE_WORD = "delete-word"
    DELETE_NEXT = "delete-next"
    DELETE_NEXT_WORD = "delete-next-word"
    DELETE_TO_HEAD = "delete-to-head"
    DELETE_TO_END = "delete-to-end"


@dataclass(frozen=True)
class Exit:
    """Terminate without emitting a selection."""


@dataclass(frozen=True)
class Accept:
    """Terminate and emit the selected line."""


@dataclass(frozen=True)
class Draw:
    """Render now, regardless of redraw rate limiting."""


@dataclass(frozen=True)
class Navigate:
    direction: Direction


@dataclass(frozen=True)
class Edit:
    op: EditOp
    text: str = ""


@dataclass(frozen=True)
class TerminalFailed:
    error: BaseException


Action = Exit | Accept | Draw | Navigate | Edit | TerminalFailed

_NAMED_ACTIONS: dict[str, Action] = {
    "exit": Exit(),
    "accept": Accept(),
    **{direction.value: Navigate(direction) for direction in Direction},
    **{op.value: Edit(op) for op in EditOp if op is not EditOp.INSERT},
}


def parse_action(name: str) -> Action:
    """Resolve a bindable action name such as ``next`` or ``delete-word``."""
    action = _NAMED_ACTIONS.get(name.strip())
    if action is None:
        raise ParseActionError(name.strip())
    return action


def action_names() -> list[str]:
    return list(_NAMED_ACTIONS)
