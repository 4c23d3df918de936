"""Low-level terminal input decoding.

Reads raw bytes from the tty and translates them into ``Key`` values.
Handles ESC-sequence timing, CSI modifier parameters, and UTF-8 text.
"""

from __future__ import annotations

import os
import select

from .keys import Key

ESC_SEQUENCE_TIMEOUT_MS = 25
MAX_SEQUENCE_BYTES = 64

_CSI_FINAL_KEYS = {
    b"A": "up",
    b"B": "down",
    b"C": "right",
    b"D": "left",
    b"H": "home",
    b"F": "end",
    b"P": "f1",
    b"Q": "f2",
    b"R": "f3",
    b"S": "f4",
}
_CSI_TILDE_KEYS = {
    1: "home",
    2: "insert",
    3: "delete",
    4: "end",
    5: "page-up",
    6: "page-down",
    7: "home",
    8: "end",
    11: "f1",
    12: "f2",
    13: "f3",
    14: "f4",
    15: "f5",
    17: "f6",
    18: "f7",
    19: "f8",
    20: "f9",
    21: "f10",
    23: "f11",
    24: "f12",
}


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _with_modifiers(name: str, param: int) -> Key:
    """Apply an xterm modifier parameter (1 + shift|alt<<1|ctrl<<2)."""
    bits = max(0, param - 1)
    return Key(name, ctrl=bool(bits & 4), alt=bool(bits & 2), shift=bool(bits & 1))


class KeyReader:
    """Decode keys from one file descriptor.

    Bytes read ahead while resolving an escape sequence that turned out to be
    something else are kept for the next call.
    """

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._pending: list[bytes] = []
        self._skip_lf = False

    def _read_byte(self, timeout_ms: int | None) -> bytes | None:
        if self._pending:
            return self._pending.pop(0)
        if timeout_ms is not None:
            ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return None
        ch = os.read(self.fd, 1)
        if not ch:
            raise EOFError("terminal input closed")
        return ch

    def read_key(self, timeout_ms: int | None = None) -> Key | None:
        """Return the next key, or ``None`` on timeout or an unrecognised sequence."""
        ch = self._read_byte(timeout_ms)
        if ch is None:
            return None

        skip_lf, self._skip_lf = self._skip_lf, False
        if ch == b"\n" and skip_lf:
            return self.read_key(timeout_ms)
        if ch == b"\r":
            self._skip_lf = True
            return Key("enter")
        if ch == b"\x1b":
            return self._read_escape()
        return self._decode_plain(ch)

    def _decode_plain(self, ch: bytes, alt: bool = False) -> Key | None:
        byte = ch[0]
        if ch in {b"\r", b"\n"}:
            return Key("enter", alt=alt)
        if ch == b"\t":
            return Key("tab", alt=alt)
        if ch == b"\x7f":
            return Key("backspace", alt=alt)
        if ch == b"\x08":
            return Key("backspace", ctrl=True, alt=alt)
        if ch == b"\x00":
            return Key(" ", ctrl=True, alt=alt)
        if 0x01 <= byte <= 0x1A:
            return Key(chr(0x60 + byte), ctrl=True, alt=alt)
        if 0x1C <= byte <= 0x1F:
            return Key(chr(0x40 + byte), ctrl=True, alt=alt)

        length = _utf8_length(byte)
        raw = bytearray(ch)
        for _ in range(length - 1):
            nxt = self._read_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if nxt is None:
                return None
            raw += nxt
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError:
            return None
        return Key(text, alt=alt)

    def _read_escape(self) -> Key | None:
        seq = self._read_byte(ESC_SEQUENCE_TIMEOUT_MS)
        if seq is None:
            return Key("escape")
        if seq == b"[":
            return self._read_csi()
        if seq == b"O":
            final = self._read_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if final is None:
                return Key("O", alt=True)
            name = _CSI_FINAL_KEYS.get(final)
            return Key(name) if name is not None else None
        if seq == b"\x1b":
            self._pending.append(seq)
            return Key("escape")
        return self._decode_plain(seq, alt=True)

    def _read_csi(self) -> Key | None:
        params = bytearray()
        while True:
            part = self._read_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if part is None:
                return Key("[", alt=True) if not params else None
            if 0x40 <= part[0] <= 0x7E:
                final = part
                break
            params += part
            if len(params) > MAX_SEQUENCE_BYTES:
                return None

        if params.startswith(b"<"):
            # SGR mouse report; mouse input is not used.
            return None
        if final == b"Z":
            return Key("back-tab")

        try:
            numbers = [int(p) if p else 1 for p in params.decode("ascii").split(";")] if params else []
        except ValueError:
            return None
        modifier = numbers[1] if len(numbers) > 1 else 1

        if final == b"~":
            name = _CSI_TILDE_KEYS.get(numbers[0] if numbers else 0)
        else:
            name = _CSI_FINAL_KEYS.get(final)
        if name is None:
            return None
        return _with_modifiers(name, modifier)
