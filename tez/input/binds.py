"""Key-to-action bind table with defaults and override layering."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .actions import Accept, Action, Direction, Edit, EditOp, Exit, Navigate, ParseActionError, parse_action
from .keys import Key, ParseKeyError


class ParseBindError(ValueError):
    """Raised for bind strings that are not ``KEY:ACTION``."""


def find_last_adjacent(text: str, ch: str) -> int | None:
    """Index of the last ``ch`` in the first run of ``ch``.

    A run may contain whitespace between repeats, so ``": : x"`` yields 2.
    """
    last: int | None = None
    for idx, c in enumerate(text):
        if c == ch:
            last = idx
        elif not c.isspace() and last is not None:
            break
    return last


def parse_bind(text: str) -> tuple[Key, Action]:
    """Parse ``KEY:ACTION``; the colon key itself is written ``::action``."""
    text = text.strip()
    colon = find_last_adjacent(text, ":")
    if colon is None:
        raise ParseBindError("invalid format")
    try:
        return Key.parse(text[:colon]), parse_action(text[colon + 1 :])
    except (ParseKeyError, ParseActionError) as exc:
        raise ParseBindError(str(exc)) from exc


DEFAULT_BINDS: tuple[tuple[str, Action], ...] = (
    ("ctrl+c", Exit()),
    ("escape", Exit()),
    ("enter", Accept()),
    ("ctrl+n", Navigate(Direction.NEXT)),
    ("down", Navigate(Direction.NEXT)),
    ("ctrl+p", Navigate(Direction.PREVIOUS)),
    ("up", Navigate(Direction.PREVIOUS)),
    ("alt+a", Navigate(Direction.FIRST)),
    ("alt+e", Navigate(Direction.LAST)),
    ("left", Edit(EditOp.MOVE_BACK)),
    ("right", Edit(EditOp.MOVE_FORWARD)),
    ("ctrl+left", Edit(EditOp.MOVE_BACK_WORD)),
    ("ctrl+right", Edit(EditOp.MOVE_FORWARD_WORD)),
    ("home", Edit(EditOp.MOVE_TO_HEAD)),
    ("end", Edit(EditOp.MOVE_TO_END)),
    ("ctrl+f", Edit(EditOp.MOVE_FORWARD)),
    ("ctrl+b", Edit(EditOp.MOVE_BACK)),
    ("alt+f", Edit(EditOp.MOVE_FORWARD_WORD)),
    ("alt+b", Edit(EditOp.MOVE_BACK_WORD)),
    ("ctrl+a", Edit(EditOp.MOVE_TO_HEAD)),
    ("ctrl+e", Edit(EditOp.MOVE_TO_END)),
    ("backspace", Edit(EditOp.DELETE)),
    ("ctrl+backspace", Edit(EditOp.DELETE_WORD)),
    ("alt+backspace", Edit(EditOp.DELETE_WORD)),
    ("delete", Edit(EditOp.DELETE_NEXT)),
    ("ctrl+delete", Edit(EditOp.DELETE_NEXT_WORD)),
    ("ctrl+d", Edit(EditOp.DELETE_NEXT)),
    ("alt+d", Edit(EditOp.DELETE_NEXT_WORD)),
    ("ctrl+w", Edit(EditOp.DELETE_WORD)),
    ("ctrl+u", Edit(EditOp.DELETE_TO_HEAD)),
    ("ctrl+k", Edit(EditOp.DELETE_TO_END)),
)


class Binds:
    """Mapping from decoded keys to actions."""

    def __init__(self, binds: Mapping[Key, Action] | Iterable[tuple[Key, Action]] = ()) -> None:
        self._binds: dict[Key, Action] = dict(binds)

    def bind(self, key: Key, action: Action) -> None:
        self._binds[key] = action

    def action_for_key(self, key: Key) -> Action | None:
        return self._binds.get(key)

    def overwrite(self, other: Binds) -> None:
        self._binds.update(other._binds)

    def insert_defaults(self) -> None:
        """Add default binds for keys that are not bound yet."""
        for key_text, action in DEFAULT_BINDS:
            self._binds.setdefault(Key.parse(key_text), action)

    def __len__(self) -> int:
        return len(self._binds)

    def __contains__(self, key: object) -> bool:
        return key in self._binds

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Binds):
            return NotImplemented
        return self._binds == other._binds

    def __repr__(self) -> str:
        entries = ", ".join(f"{key}: {action}" for key, action in self._binds.items())
        return f"Binds({entries})"
