"""Key identity shared by the decoder and the bind table.

Keys are written as ``[modifier+]*name``, e.g. ``ctrl+n``, ``alt+backspace``
or ``page-down``.
"""

from __future__ import annotations

from dataclasses import dataclass

NAMED_KEYS = frozenset(
    {
        "backspace",
        "enter",
        "left",
        "right",
        "up",
        "down",
        "home",
        "end",
        "page-up",
        "page-down",
        "tab",
        "back-tab",
        "delete",
        "insert",
        "null",
        "escape",
    }
)
MODIFIERS = ("ctrl", "alt", "shift")
MAX_FUNCTION_KEY = 255


class ParseKeyError(ValueError):
    """Raised for key strings that do not follow the key grammar."""


@dataclass(frozen=True)
class Key:
    name: str
    ctrl: bool = False
    alt: bool = False
    shift: bool = False

    @classmethod
    def parse(cls, text: str) -> Key:
        text = text.strip()
        if not text or text.startswith("+") or text.endswith("+"):
            raise ParseKeyError("invalid format")

        *modifier_parts, key_part = (part.strip() for part in text.split("+"))
        name = _parse_key_name(key_part)
        seen: set[str] = set()
        for modifier in modifier_parts:
            if modifier not in MODIFIERS:
                raise ParseKeyError(f"invalid modifier: {modifier}")
            if modifier in seen:
                raise ParseKeyError(f"duplicate modifier: {modifier}")
            seen.add(modifier)

        shift = "shift" in seen
        # Terminals report shifted letters as the upper-case character.
        if shift and len(name) == 1 and name.isalpha():
            name = name.upper()
            shift = False
        return cls(name=name, ctrl="ctrl" in seen, alt="alt" in seen, shift=shift)

    def is_printable(self) -> bool:
        return len(self.name) == 1 and not (self.ctrl or self.alt) and self.name.isprintable()

    def __str__(self) -> str:
        parts = [modifier for modifier in MODIFIERS if getattr(self, modifier)]
        parts.append(self.name)
        return "+".join(parts)


def _parse_key_name(text: str) -> str:
    if not text:
        raise ParseKeyError("invalid format")
    if len(text) == 1:
        return text
    if text in NAMED_KEYS:
        return text
    if text.startswith("f") and text[1:].isdigit():
        number = int(text[1:])
        if number <= MAX_FUNCTION_KEY:
            return f"f{number}"
    raise ParseKeyError(f"invalid key: {text}")
