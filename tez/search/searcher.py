"""Adapter between the router and the incremental match engine.

Tracks the active query, tags each change as an extension or a replacement,
and exposes the submit/ingest/advance/snapshot surface the router uses.
"""

from __future__ import annotations

import enum
from collections.abc import Callable

from ..log import get_logger
from .engine import DEFAULT_MATCH_BUDGET, MatchEngine, MatchSnapshot

log = get_logger(__name__)


class QueryChange(enum.Enum):
    UNCHANGED = "unchanged"
    EXTENSION = "extension"
    REPLACEMENT = "replacement"


def classify_query(previous: str | None, new: str) -> QueryChange:
    """Tag ``new`` relative to ``previous``.

    An extension starts with the previous text and adds to it; any other
    change, including deleting characters, is a replacement.
    """
    if previous is None:
        return QueryChange.REPLACEMENT
    if new == previous:
        return QueryChange.UNCHANGED
    if new.startswith(previous):
        return QueryChange.EXTENSION
    return QueryChange.REPLACEMENT


class Searcher:
    """Owns a ``MatchEngine`` and the query it is currently matching."""

    def __init__(
        self,
        notify: Callable[[], None] | None = None,
        budget: int = DEFAULT_MATCH_BUDGET,
        engine: MatchEngine | None = None,
    ) -> None:
        self._engine = engine if engine is not None else MatchEngine(notify, budget)
        self._query: str | None = None
        self.submit_query("")

    @property
    def query(self) -> str:
        return self._query or ""

    def submit_query(self, text: str, is_extension: bool | None = None) -> QueryChange:
        """Declare ``text`` as the active query.

        ``is_extension`` defaults to the classification against the current
        query. Resubmitting the current text does nothing.
        """
        change = classify_query(self._query, text)
        if change is QueryChange.UNCHANGED:
            return change
        if is_extension is not None:
            change = QueryChange.EXTENSION if is_extension else QueryChange.REPLACEMENT
        self._engine.reparse(text, is_extension=change is QueryChange.EXTENSION)
        log.debug("query %r -> %r (%s)", self._query, text, change.value)
        self._query = text
        return change

    def ingest(self, line: str) -> None:
        self._engine.push(line)

    def advance(self, budget: int | None = None) -> bool:
        return self._engine.tick(budget)

    def has_pending_work(self) -> bool:
        return self._engine.has_pending_work()

    def snapshot(self) -> MatchSnapshot:
        return self._engine.snapshot()

    def result_count(self) -> int:
        return self.snapshot().matched

    def results(self, offset: int, height: int) -> list[str]:
        return self.snapshot().items(offset, offset + height)
