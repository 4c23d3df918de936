"""Persistent JSON config helpers.

Stores key binds, redraw pacing, matching budget, the prompt prefix, and
the viewport placement.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

from ..input.actions import ParseActionError, parse_action
from ..input.binds import Binds
from ..input.keys import Key, ParseKeyError
from ..log import get_logger
from ..search.debounce import DEFAULT_DEBOUNCE_SECONDS
from ..search.engine import DEFAULT_MATCH_BUDGET
from ..tui.viewport import Alignment, Extent, ParseAlignmentError, ParseExtentError, Viewport

log = get_logger(__name__)

APP_NAME = "tez"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_PROMPT = "> "


@dataclass
class Settings:
    """Resolved session settings: defaults, then config file, then CLI."""

    binds: Binds = field(default_factory=Binds)
    debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS
    match_budget: int = DEFAULT_MATCH_BUDGET
    prompt: str = DEFAULT_PROMPT
    query: str = ""
    disable_default_binds: bool = False
    viewport: Viewport = field(default_factory=Viewport)


def load_config(path: Path | None = None) -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    config_path = DEFAULT_CONFIG_PATH if path is None else path
    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        log.warning("ignoring config %s: %s", config_path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _coerce_positive_int(value: object) -> int | None:
    """Accept JSON integers above zero; booleans and other types are invalid."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None


def load_binds(data: dict[str, object]) -> Binds:
    """Read the ``binds`` object, skipping entries that do not parse."""
    binds = Binds()
    raw = data.get("binds")
    if not isinstance(raw, dict):
        return binds
    for key_text, action_name in raw.items():
        if not isinstance(key_text, str) or not isinstance(action_name, str):
            log.warning("ignoring non-string bind %r: %r", key_text, action_name)
            continue
        try:
            binds.bind(Key.parse(key_text), parse_action(action_name))
        except (ParseKeyError, ParseActionError) as exc:
            log.warning("ignoring bind %r: %s", key_text, exc)
    return binds


def settings_from_config(data: dict[str, object]) -> Settings:
    settings = Settings(binds=load_binds(data))
    debounce_ms = _coerce_positive_int(data.get("debounce_ms"))
    if debounce_ms is not None:
        settings.debounce_seconds = debounce_ms / 1000.0
    match_budget = _coerce_positive_int(data.get("match_budget"))
    if match_budget is not None:
        settings.match_budget = match_budget
    prompt = data.get("prompt")
    if isinstance(prompt, str):
        settings.prompt = prompt
    if data.get("disable_default_binds") is True:
        settings.disable_default_binds = True
    settings.viewport = load_viewport(data)
    return settings


def _coerce_extent(name: str, value: object) -> Extent | None:
    """Accept a cell count or an extent string such as ``"40%"``."""
    if value is None:
        return None
    try:
        if isinstance(value, str):
            return Extent.parse(value)
        if isinstance(value, int):
            return Extent.from_cells(value)
    except ParseExtentError as exc:
        log.warning("ignoring %s %r: %s", name, value, exc)
        return None
    log.warning("ignoring %s %r: not a number or string", name, value)
    return None


def load_viewport(data: dict[str, object]) -> Viewport:
    """Read ``width``, ``height`` and ``alignment``, skipping invalid values."""
    alignment = Alignment()
    raw_alignment = data.get("alignment")
    if isinstance(raw_alignment, str):
        try:
            alignment = Alignment.parse(raw_alignment)
        except ParseAlignmentError as exc:
            log.warning("ignoring alignment %r: %s", raw_alignment, exc)
    return Viewport(
        width=_coerce_extent("width", data.get("width")),
        height=_coerce_extent("height", data.get("height")),
        alignment=alignment,
    )
