"""Background ingestion of lines from a byte stream into the searcher."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import BinaryIO

from ..log import get_logger

log = get_logger(__name__)


def decode_line(raw: bytes) -> str | None:
    """Strip the line terminator and decode UTF-8; ``None`` if undecodable."""
    if raw.endswith(b"\n"):
        raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        return None


class SourceIngestor:
    """Read lines on a daemon thread and push them with ``ingest``.

    Undecodable lines are skipped. A failing stream ends ingestion quietly:
    the lines already ingested stay searchable and the session keeps running.
    """

    def __init__(self, stream: BinaryIO, ingest: Callable[[str], None]) -> None:
        self._stream = stream
        self._ingest = ingest
        self._thread: threading.Thread | None = None
        self.ingested = 0
        self.dropped = 0
        self.error: OSError | None = None

    def run(self) -> None:
        """Drain the stream on the calling thread."""
        try:
            for raw in iter(self._stream.readline, b""):
                line = decode_line(raw)
                if line is None:
                    self.dropped += 1
                    log.debug("dropped undecodable line %d", self.ingested + self.dropped)
                    continue
                self._ingest(line)
                self.ingested += 1
        except OSError as exc:
            self.error = exc
            log.warning("line source stopped after %d lines: %s", self.ingested, exc)
            return
        log.info("line source exhausted: %d lines, %d dropped", self.ingested, self.dropped)

    def start(self) -> threading.Thread:
        thread = threading.Thread(target=self.run, name="tez-source", daemon=True)
        self._thread = thread
        thread.start()
        return thread

    def join(self, timeout: float | None = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)
