"""Incremental fuzzy match engine over an append-only line corpus.

Lines are pushed from a producer thread while the owner thread advances
matching in bounded slices with ``tick``. Each tick that changes the ranking
publishes a new ranking tuple; snapshots share the corpus list, whose
indices never move, and never observe later mutation.
"""

from __future__ import annotations

import heapq
import threading
from collections.abc import Callable
from dataclasses import dataclass, field

from ..log import get_logger
from .fuzzy import fold_query, fuzzy_score, is_case_sensitive

log = get_logger(__name__)

DEFAULT_MATCH_BUDGET = 20_000


@dataclass(frozen=True)
class MatchSnapshot:
    """Point-in-time view of ranked results.

    ``total`` counts every line ingested when the snapshot was taken, including
    lines the current query has not been checked against yet.
    """

    total: int
    ranking: tuple[int, ...] = ()
    corpus: list[str] = field(default_factory=list, repr=False, compare=False)

    @property
    def matched(self) -> int:
        return len(self.ranking)

    def items(self, start: int, stop: int) -> list[str]:
        """Return matched lines with rank in ``[start, stop)``, clamped to ``matched``."""
        start = max(0, min(start, self.matched))
        stop = max(start, min(stop, self.matched))
        corpus = self.corpus
        return [corpus[idx] for idx in self.ranking[start:stop]]


class MatchEngine:
    """Budgeted matcher with reuse of prior work for extended queries.

    ``notify`` fires when new lines arrive (on the pushing thread) and when a
    tick changes the ranking (on the ticking thread).
    """

    def __init__(
        self,
        notify: Callable[[], None] | None = None,
        budget: int = DEFAULT_MATCH_BUDGET,
    ) -> None:
        self._notify = notify if notify is not None else (lambda: None)
        self._budget = max(1, budget)
        self._lock = threading.Lock()
        self._corpus: list[str] = []

        self._pattern = ""
        self._folded = ""
        self._case_sensitive = False
        # Candidates below ``_scanned`` that still need scoring for the current
        # pattern. Everything at or above ``_scanned`` has never been scored.
        self._pending: list[int] = []
        self._pending_pos = 0
        self._scanned = 0
        self._ranked: list[tuple[int, int]] = []
        self._ranking: tuple[int, ...] = ()
        self._stale = False

    @property
    def pattern(self) -> str:
        return self._pattern

    def push(self, line: str) -> None:
        """Append one line; safe to call from any thread."""
        with self._lock:
            self._corpus.append(line)
        self._notify()

    def total(self) -> int:
        with self._lock:
            return len(self._corpus)

    def reparse(self, pattern: str, is_extension: bool) -> None:
        """Make ``pattern`` the active query.

        With ``is_extension`` only lines that matched the previous pattern, plus
        those not yet checked against it, are rescored. Otherwise every line is.
        """
        if pattern == self._pattern:
            return
        if is_extension:
            matched = sorted(idx for _, idx in self._ranked)
            unchecked = self._pending[self._pending_pos:]
            self._pending = list(heapq.merge(matched, unchecked))
        else:
            self._pending = []
            self._scanned = 0
        self._pending_pos = 0
        self._ranked = []
        self._pattern = pattern
        self._case_sensitive = is_case_sensitive(pattern)
        self._folded = fold_query(pattern, self._case_sensitive)
        self._stale = True
        log.debug(
            "reparse %r extension=%s candidates=%d scanned=%d",
            pattern,
            is_extension,
            len(self._pending),
            self._scanned,
        )

    def has_pending_work(self) -> bool:
        if self._stale or self._pending_pos < len(self._pending):
            return True
        return self._scanned < self.total()

    def tick(self, budget: int | None = None) -> bool:
        """Score at most ``budget`` lines; return whether work remains."""
        remaining = self._budget if budget is None else max(1, budget)
        total = self.total()
        corpus = self._corpus
        query = self._folded
        case_sensitive = self._case_sensitive
        found: list[tuple[int, int]] = []

        pending = self._pending
        pos = self._pending_pos
        while remaining > 0 and pos < len(pending):
            idx = pending[pos]
            pos += 1
            remaining -= 1
            score = fuzzy_score(query, corpus[idx], case_sensitive)
            if score is not None:
                found.append((-score, idx))
        if pos >= len(pending):
            self._pending = []
            pos = 0
        self._pending_pos = pos

        scanned = self._scanned
        while remaining > 0 and scanned < total:
            idx = scanned
            scanned += 1
            remaining -= 1
            score = fuzzy_score(query, corpus[idx], case_sensitive)
            if score is not None:
                found.append((-score, idx))
        self._scanned = scanned

        if found or self._stale:
            found.sort()
            self._ranked = list(heapq.merge(self._ranked, found))
            self._ranking = tuple(idx for _, idx in self._ranked)
            self._stale = False
            self._notify()
        return self.has_pending_work()

    def snapshot(self) -> MatchSnapshot:
        return MatchSnapshot(total=self.total(), ranking=self._ranking, corpus=self._corpus)
