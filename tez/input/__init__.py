"""Input-layer public API for key decoding, actions, and binds.

Exports are split between low-level terminal decoding (`KeyReader`) and the
action vocabulary the router consumes.
"""

from .actions import (
    Accept,
    Action,
    Direction,
    Draw,
    Edit,
    EditOp,
    Exit,
    Navigate,
    ParseActionError,
    TerminalFailed,
    parse_action,
)
from .binds import Binds, ParseBindError, parse_bind
from .keys import Key, ParseKeyError
from .reader import ESC_SEQUENCE_TIMEOUT_MS, KeyReader

__all__ = [
    "Accept",
    "Action",
    "Binds",
    "Direction",
    "Draw",
    "Edit",
    "EditOp",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "Exit",
    "Key",
    "KeyReader",
    "Navigate",
    "ParseActionError",
    "ParseBindError",
    "ParseKeyError",
    "TerminalFailed",
    "parse_action",
    "parse_bind",
]
