"""Command-line front door for codezoom.

Subcommands render a project outline, zoom a single file, or locate a
declaration. Unset options fall back to the persisted config defaults.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import load_render_defaults, save_default_zoom_level
from .declarations import DeclarationError, find_declaration
from .project_tree import FilterConfig, ZoomOverride, render_project_structure
from .source import read_text
from .zoom import render_zoom

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_FOUND = 2


def _non_negative_int(value: str) -> int:
    """argparse type for integer values ``>= 0``."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    parsed = _non_negative_int(value)
    if parsed == 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _zoom_override(value: str) -> ZoomOverride:
    """argparse type for ``PATH=LEVEL`` override pairs.

    Relative paths are taken from the current directory, like ``PATH`` itself.
    """
    path, sep, level = value.rpartition("=")
    if not sep or not path:
        raise argparse.ArgumentTypeError(f"expected PATH=LEVEL, got {value!r}")
    return ZoomOverride(path=Path.cwd() / path, zoom_level=_non_negative_int(level))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codezoom",
        description="Summarize a project's source structure at a chosen zoom level.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    structure = subparsers.add_parser("structure", help="Render a project outline.")
    structure.add_argument("path", nargs="?", default=None, help="Project root. Defaults to current directory.")
    structure.add_argument("-z", "--zoom", type=_non_negative_int, default=None, help="Default zoom level.")
    structure.add_argument("--tab-width", type=_positive_int, default=None, help="Spaces per tab.")
    structure.add_argument("--max-depth", type=_non_negative_int, default=None, help="Deepest directory level.")
    structure.add_argument("--tests", action="store_true", help="Include test files.")
    structure.add_argument("--docs", action="store_true", help="Include README/CHANGELOG-style docs.")
    structure.add_argument("--hidden", action="store_true", help="Include dotfiles and dot-directories.")
    structure.add_argument(
        "--override",
        metavar="PATH=LEVEL",
        type=_zoom_override,
        action="append",
        default=[],
        help="Render one file at a different zoom level (repeatable; PATH is relative to the current directory).",
    )
    structure.add_argument("--save-default", action="store_true", help="Remember --zoom as the default.")

    zoom = subparsers.add_parser("zoom", help="Render one file at a zoom level.")
    zoom.add_argument("file", help="File to render.")
    zoom.add_argument("-z", "--zoom", type=_non_negative_int, default=None, help="Zoom level.")
    zoom.add_argument("--tab-width", type=_positive_int, default=None, help="Spaces per tab.")

    find = subparsers.add_parser("find", help="Print the source of a named declaration.")
    find.add_argument("name", help="Function, class, or variable name.")
    find.add_argument("file", help="TypeScript/JavaScript file to search.")
    return parser


def _run_structure(args: argparse.Namespace) -> int:
    defaults = load_render_defaults()
    zoom_level = defaults.zoom_level if args.zoom is None else args.zoom
    config = FilterConfig(
        include_tests=args.tests or defaults.include_tests,
        include_docs=args.docs or defaults.include_docs,
        include_hidden=args.hidden or defaults.include_hidden,
    )
    root = Path(args.path) if args.path is not None else Path.cwd()
    output = render_project_structure(
        root,
        zoom_level,
        config,
        args.override,
        tab_width=defaults.tab_width if args.tab_width is None else args.tab_width,
        max_depth=defaults.max_depth if args.max_depth is None else args.max_depth,
    )
    if args.save_default and args.zoom is not None:
        save_default_zoom_level(args.zoom)
    if output:
        print(output)
    return EXIT_OK


def _run_zoom(args: argparse.Namespace) -> int:
    defaults = load_render_defaults()
    zoom_level = defaults.zoom_level if args.zoom is None else args.zoom
    tab_width = defaults.tab_width if args.tab_width is None else args.tab_width
    output = render_zoom(read_text(Path(args.file)), zoom_level, tab_width)
    if output:
        print(output)
    return EXIT_OK


def _run_find(args: argparse.Namespace) -> int:
    details = find_declaration(args.name, read_text(Path(args.file)))
    if details is None:
        print(f"{args.name}: not found in {args.file}", file=sys.stderr)
        return EXIT_NOT_FOUND
    print(f"// {details.kind.value} {details.name} (lines {details.start_line + 1}-{details.end_line + 1})")
    print(details.code)
    return EXIT_OK


_COMMANDS = {
    "structure": _run_structure,
    "zoom": _run_zoom,
    "find": _run_find,
}


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run the chosen subcommand, and return its exit status."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return _COMMANDS[args.command](args)
    except (DeclarationError, OSError) as exc:
        print(f"codezoom: {exc}", file=sys.stderr)
        return EXIT_ERROR
