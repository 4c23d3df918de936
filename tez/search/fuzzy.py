"""Subsequence fuzzy scoring used by the match engine.

``fuzzy_score`` is monotone in the query: if ``query + suffix`` matches a
candidate then ``query`` matches it too. The engine relies on this to narrow
an extended query to the previous match set instead of rescanning.
"""

from __future__ import annotations

WORD_BOUNDARY_CHARS = "/_- .:"


def is_case_sensitive(query: str) -> bool:
    """Smart case: any upper-case character makes the query case-sensitive."""
    return any(ch.isupper() for ch in query)


def fold_query(query: str, case_sensitive: bool) -> str:
    return query if case_sensitive else query.casefold()


def fuzzy_score(query: str, candidate: str, case_sensitive: bool = False) -> int | None:
    """Score ``candidate`` against ``query``; ``None`` when it does not match.

    ``query`` must already be folded with ``fold_query``. Consecutive runs and
    hits at word boundaries raise the score; gaps and long candidates lower it.
    """
    if not query:
        return 0
    haystack = candidate if case_sensitive else candidate.casefold()

    score = 0
    prev_idx = -1
    run = 0
    for needle in query:
        idx = haystack.find(needle, prev_idx + 1)
        if idx < 0:
            return None
        if idx == prev_idx + 1:
            run += 1
            score += 20 + min(16, run * 4)
        else:
            gap = idx - prev_idx - 1
            run = 0
            score -= min(40, gap * 2)
        if idx == 0 or haystack[idx - 1] in WORD_BOUNDARY_CHARS:
            score += 35
        prev_idx = idx

    score -= len(haystack) // 5
    return score
