"""Command-line front door for tez.

Parses CLI options, layers them over the config file, and runs one
interactive session over the lines piped into standard input. The accepted
line is printed to standard output.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from pathlib import Path

from .errors import TezError
from .input.actions import Action
from .input.binds import ParseBindError, parse_bind
from .input.keys import Key
from .log import configure_file_logging, get_logger
from .runtime import run_app
from .runtime.config import DEFAULT_CONFIG_PATH, Settings, load_config, settings_from_config
from .tui.viewport import Alignment, Extent, ParseAlignmentError, ParseExtentError

log = get_logger(__name__)

EXIT_ACCEPTED = 0
EXIT_NO_SELECTION = 1
EXIT_ERROR = 2
EXIT_INTERRUPTED = 130


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _bind(value: str) -> tuple[Key, Action]:
    """argparse type for ``KEY:ACTION`` binds."""
    try:
        return parse_bind(value)
    except ParseBindError as exc:
        raise argparse.ArgumentTypeError(f"invalid bind {value!r}: {exc}") from exc


def _extent(value: str) -> Extent:
    """argparse type for cell counts and percentages such as ``40%``."""
    try:
        return Extent.parse(value)
    except ParseExtentError as exc:
        raise argparse.ArgumentTypeError(f"invalid extent {value!r}: {exc}") from exc


def _alignment(value: str) -> Alignment:
    try:
        return Alignment.parse(value)
    except ParseAlignmentError as exc:
        raise argparse.ArgumentTypeError(f"invalid alignment {value!r}: {exc}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tez",
        description="Interactively fuzzy-filter lines from standard input.",
    )
    parser.add_argument(
        "-b",
        "--bind",
        dest="binds",
        action="append",
        type=_bind,
        default=[],
        metavar="KEY:ACTION",
        help="Bind an action to a key, e.g. 'ctrl+j:next'. Repeatable.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        default=None,
        help=f"Config file path (default: {DEFAULT_CONFIG_PATH}).",
    )
    parser.add_argument("-C", "--no-config", action="store_true", help="Ignore the config file.")
    parser.add_argument(
        "-d",
        "--disable-default-binds",
        action="store_true",
        help="Start from an empty keymap; only configured and -b binds apply.",
    )
    parser.add_argument("-q", "--query", default=None, help="Initial query.")
    parser.add_argument("--prompt", default=None, help="Prompt shown before the query.")
    parser.add_argument(
        "--debounce-ms",
        type=_positive_int,
        default=None,
        help="Minimum milliseconds between progress redraws.",
    )
    parser.add_argument(
        "-H",
        "--height",
        type=_extent,
        default=None,
        help="Draw inline below the shell prompt, this many rows or percent tall.",
    )
    parser.add_argument(
        "-W",
        "--width",
        type=_extent,
        default=None,
        help="Width of the region in cells or percent (default: full width).",
    )
    parser.add_argument(
        "-A",
        "--alignment",
        type=_alignment,
        default=None,
        help="Horizontal placement: left, center, right, or an offset such as 'right(2)'.",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Write debug logs to this file.")
    parser.add_argument("--log-level", default="INFO", help="Log level for --log-file (default: INFO).")
    return parser


def resolve_settings(args: argparse.Namespace) -> Settings:
    """Layer command-line options over the config file over defaults."""
    data = {} if args.no_config else load_config(args.config)
    settings = settings_from_config(data)
    for key, action in args.binds:
        settings.binds.bind(key, action)
    if args.debounce_ms is not None:
        settings.debounce_seconds = args.debounce_ms / 1000.0
    if args.prompt is not None:
        settings.prompt = args.prompt
    if args.query is not None:
        settings.query = args.query
    if args.disable_default_binds:
        settings.disable_default_binds = True
    viewport = settings.viewport
    settings.viewport = replace(
        viewport,
        width=viewport.width if args.width is None else args.width,
        height=viewport.height if args.height is None else args.height,
        alignment=viewport.alignment if args.alignment is None else args.alignment,
    )
    return settings


def _report_error(error: BaseException) -> None:
    label = "error:"
    if sys.stderr.isatty():
        label = f"\033[31m{label}\033[0m"
    sys.stderr.write(f"{label} {error}\n")
    sys.stderr.flush()


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments and run the interactive filter.

    Returns the process exit status: 0 when a line was accepted, 1 when the
    session ended without a selection, 2 on a fatal error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        configure_file_logging(args.log_file, args.log_level)
    except OSError as exc:
        parser.error(f"cannot open log file: {exc}")
    settings = resolve_settings(args)

    source = None if sys.stdin.isatty() else sys.stdin.buffer
    try:
        accepted = run_app(settings, source)
    except TezError as exc:
        log.error("fatal: %s", exc)
        _report_error(exc)
        return EXIT_ERROR
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED

    if accepted is None:
        return EXIT_NO_SELECTION
    sys.stdout.write(accepted + "\n")
    sys.stdout.flush()
    return EXIT_ACCEPTED


if __name__ == "__main__":
    sys.exit(main())
