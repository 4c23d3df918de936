"""Incremental search: fuzzy scoring, match engine, ingestion, redraw pacing."""

from .debounce import RedrawDebouncer
from .engine import MatchEngine, MatchSnapshot
from .searcher import QueryChange, Searcher, classify_query
from .source import SourceIngestor

__all__ = [
    "MatchEngine",
    "MatchSnapshot",
    "QueryChange",
    "RedrawDebouncer",
    "Searcher",
    "SourceIngestor",
    "classify_query",
]
