"""Fatal error types raised out of the interactive session."""

from __future__ import annotations


class TezError(Exception):
    """Base class for errors that abort the interactive session."""


class TerminalError(TezError):
    """The terminal backend failed to read input or write a frame."""
