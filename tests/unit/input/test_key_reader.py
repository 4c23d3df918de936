"""Tests for decoding terminal bytes into keys and keys into actions."""

from __future__ import annotations

import os
import unittest

from tez.input.actions import Accept, Direction, Draw, Edit, EditOp, Navigate, TerminalFailed
from tez.input.binds import Binds
from tez.input.events import InputDecoder, action_for_key
from tez.input.keys import Key
from tez.input.reader import KeyReader


class KeyReaderTests(unittest.TestCase):
    def setUp(self) -> None:
        self.read_fd, self.write_fd = os.pipe()
        self.reader = KeyReader(self.read_fd)

    def tearDown(self) -> None:
        for fd in (self.read_fd, self.write_fd):
            try:
                os.close(fd)
            except OSError:
                pass

    def _decode(self, data: bytes) -> Key | None:
        os.write(self.write_fd, data)
        return self.reader.read_key(timeout_ms=50)

    def test_decodes_single_byte_keys(self) -> None:
        cases = {
            b"a": Key("a"),
            b"\x7f": Key("backspace"),
            b"\x08": Key("backspace", ctrl=True),
            b"\x17": Key("w", ctrl=True),
            b"\x00": Key(" ", ctrl=True),
            b"\t": Key("tab"),
        }
        for data, expected in cases.items():
            with self.subTest(data=data):
                self.assertEqual(self._decode(data), expected)

    def test_decodes_escape_sequences(self) -> None:
        cases = {
            b"\x1b[A": Key("up"),
            b"\x1b[B": Key("down"),
            b"\x1b[1;5C": Key("right", ctrl=True),
            b"\x1b[1;2D": Key("left", shift=True),
            b"\x1b[3~": Key("delete"),
            b"\x1b[3;5~": Key("delete", ctrl=True),
            b"\x1b[6~": Key("page-down"),
            b"\x1bOP": Key("f1"),
            b"\x1b[15~": Key("f5"),
            b"\x1b[Z": Key("back-tab"),
            b"\x1bx": Key("x", alt=True),
            b"\x1b\x7f": Key("backspace", alt=True),
        }
        for data, expected in cases.items():
            with self.subTest(data=data):
                self.assertEqual(self._decode(data), expected)

    def test_lone_escape_times_out_to_escape_key(self) -> None:
        self.assertEqual(self._decode(b"\x1b"), Key("escape"))

    def test_double_escape_yields_two_escape_keys(self) -> None:
        self.assertEqual(self._decode(b"\x1b\x1b"), Key("escape"))
        self.assertEqual(self.reader.read_key(timeout_ms=50), Key("escape"))

    def test_decodes_utf8_text(self) -> None:
        self.assertEqual(self._decode("é".encode()), Key("é"))
        self.assertEqual(self._decode("日".encode()), Key("日"))

    def test_carriage_return_swallows_following_line_feed(self) -> None:
        self.assertEqual(self._decode(b"\r\nq"), Key("enter"))
        self.assertEqual(self.reader.read_key(timeout_ms=50), Key("q"))

    def test_line_feed_alone_is_enter(self) -> None:
        self.assertEqual(self._decode(b"\n"), Key("enter"))

    def test_mouse_reports_are_ignored(self) -> None:
        self.assertIsNone(self._decode(b"\x1b[<0;10;5M"))

    def test_timeout_returns_none(self) -> None:
        self.assertIsNone(self.reader.read_key(timeout_ms=10))

    def test_closed_input_raises_eof(self) -> None:
        os.close(self.write_fd)
        with self.assertRaises(EOFError):
            self.reader.read_key(timeout_ms=50)


class ScriptedReader:
    """Returns queued keys; exceptions in the queue are raised."""

    def __init__(self, items) -> None:
        self.items = list(items)

    def read_key(self, timeout_ms=None):
        item = self.items.pop(0) if self.items else EOFError("done")
        if isinstance(item, BaseException):
            raise item
        return item


class ActionForKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.binds = Binds()
        self.binds.insert_defaults()

    def test_bound_key_maps_to_its_action(self) -> None:
        self.assertEqual(action_for_key(self.binds, Key("n", ctrl=True)), Navigate(Direction.NEXT))

    def test_unbound_printable_key_inserts_itself(self) -> None:
        self.assertEqual(action_for_key(self.binds, Key("q")), Edit(EditOp.INSERT, "q"))
        self.assertEqual(action_for_key(self.binds, Key("Q")), Edit(EditOp.INSERT, "Q"))

    def test_unbound_special_key_is_ignored(self) -> None:
        self.assertIsNone(action_for_key(self.binds, Key("f9")))
        self.assertIsNone(action_for_key(self.binds, Key("q", ctrl=True)))

    def test_binding_a_printable_key_overrides_insertion(self) -> None:
        self.binds.bind(Key("q"), Accept())
        self.assertEqual(action_for_key(self.binds, Key("q")), Accept())


class InputDecoderTests(unittest.TestCase):
    def setUp(self) -> None:
        self.binds = Binds()
        self.binds.insert_defaults()
        self.posted: list[object] = []

    def test_posts_actions_then_terminal_failure(self) -> None:
        reader = ScriptedReader([Key("a"), Key("f9"), Key("enter"), EOFError("closed")])
        decoder = InputDecoder(reader, self.binds, self.posted.append)
        decoder.run()

        self.assertEqual(self.posted[:2], [Edit(EditOp.INSERT, "a"), Accept()])
        self.assertEqual(len(self.posted), 3)
        self.assertIsInstance(self.posted[2], TerminalFailed)

    def test_read_error_after_stop_is_not_reported(self) -> None:
        reader = ScriptedReader([OSError(5, "gone")])
        decoder = InputDecoder(reader, self.binds, self.posted.append)
        decoder.stop()
        decoder.run()
        self.assertEqual(self.posted, [])

    def test_stop_from_handler_ends_loop(self) -> None:
        reader = ScriptedReader([Key("a"), Key("b")])
        decoder: InputDecoder

        def post(action) -> None:
            self.posted.append(action)
            decoder.stop()

        decoder = InputDecoder(reader, self.binds, post)
        decoder.run()
        self.assertEqual(self.posted, [Edit(EditOp.INSERT, "a")])

    def test_resize_while_idle_posts_draw(self) -> None:
        sizes = iter([(80, 24), (80, 24), (100, 30)])
        reader = ScriptedReader([None, None, OSError(5, "gone")])
        decoder = InputDecoder(reader, self.binds, self.posted.append, terminal_size=lambda: next(sizes))
        decoder.run()

        self.assertEqual(self.posted[0], Draw())
        self.assertIsInstance(self.posted[1], TerminalFailed)

    def test_start_uses_named_daemon_thread(self) -> None:
        decoder = InputDecoder(ScriptedReader([]), self.binds, self.posted.append)
        thread = decoder.start()
        thread.join(timeout=2.0)
        self.assertEqual(thread.name, "tez-input")
        self.assertTrue(thread.daemon)
        self.assertIsInstance(self.posted[0], TerminalFailed)
