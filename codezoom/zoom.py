"""Indentation-based "zoomed" views of source text.

A zoom level is a dial over structural detail:

- ``0`` (or below) hides the content entirely,
- ``FULL_DETAIL_ZOOM`` and above return the text unchanged,
- levels in between keep lines shallower than the level verbatim and fold
  each run of deeper lines into a single ``...`` marker.

Depth is measured in the file's own indent unit (the smallest positive
indentation among code lines), so two-space and four-space sources zoom the
same way. Block comments are never folded.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .source import read_text

FULL_DETAIL_ZOOM = 3
DEFAULT_TAB_WIDTH = 4
ELLIPSIS = "..."
COMMENT_OPEN = "/*"
COMMENT_CLOSE = "*/"


@dataclass
class ZoomState:
    """Per-render tracking of the current collapse run and comment block."""

    in_collapsed_run: bool = False
    in_comment_block: bool = False


def indentation_columns(line: str, tab_width: int = DEFAULT_TAB_WIDTH) -> int:
    """Return leading indentation width with tabs expanded to ``tab_width``."""
    expanded = line.replace("\t", " " * tab_width)
    return len(expanded) - len(expanded.lstrip(" "))


def _consume_comment_line(state: ZoomState, line: str) -> bool:
    """Return whether ``line`` is part of a block comment, updating ``state``."""
    stripped = line.strip()
    if state.in_comment_block:
        if COMMENT_CLOSE in stripped:
            state.in_comment_block = False
        return True
    if stripped.startswith(COMMENT_OPEN):
        state.in_comment_block = COMMENT_CLOSE not in stripped[len(COMMENT_OPEN) :]
        return True
    return False


def detect_indent_unit(lines: list[str], tab_width: int = DEFAULT_TAB_WIDTH) -> int:
    """Return the smallest positive indentation among code lines.

    Block comment lines are ignored (JSDoc interiors sit one column in).
    Falls back to ``tab_width`` for flat files.
    """
    state = ZoomState()
    unit: int | None = None
    for line in lines:
        if _consume_comment_line(state, line) or not line.strip():
            continue
        columns = indentation_columns(line, tab_width)
        if columns > 0 and (unit is None or columns < unit):
            unit = columns
    return unit or tab_width


def line_depth(line: str, unit: int, tab_width: int = DEFAULT_TAB_WIDTH) -> int:
    """Return nesting depth of ``line``; any partial unit counts as a level."""
    columns = indentation_columns(line, tab_width)
    return -(-columns // unit)


def zoom_line(
    line: str,
    zoom_level: int,
    unit: int,
    state: ZoomState,
    tab_width: int = DEFAULT_TAB_WIDTH,
) -> str | None:
    """Render one line at ``zoom_level``; ``None`` means emit nothing."""
    if _consume_comment_line(state, line):
        state.in_collapsed_run = False
        return line
    if not line.strip():
        return None

    if line_depth(line, unit, tab_width) < zoom_level:
        state.in_collapsed_run = False
        return line
    if state.in_collapsed_run:
        return None
    state.in_collapsed_run = True
    return " " * (unit * zoom_level) + ELLIPSIS


def render_zoom(content: str, zoom_level: int, tab_width: int = DEFAULT_TAB_WIDTH) -> str:
    """Return ``content`` reduced to the detail allowed by ``zoom_level``."""
    if tab_width < 1:
        raise ValueError(f"tab_width must be >= 1, got {tab_width}")
    if zoom_level <= 0:
        return ""
    if zoom_level >= FULL_DETAIL_ZOOM:
        return content.strip()

    lines = [line.rstrip("\r") for line in content.split("\n")]
    unit = detect_indent_unit(lines, tab_width)
    state = ZoomState()
    rendered: list[str] = []
    for line in lines:
        out = zoom_line(line, zoom_level, unit, state, tab_width)
        if out is not None:
            rendered.append(out)
    return "\n".join(rendered).strip()


def render_zoom_for_path(path: Path, zoom_level: int, tab_width: int = DEFAULT_TAB_WIDTH) -> str:
    """Read ``path`` and return its zoomed view; zoom ``0`` skips the read."""
    if zoom_level <= 0:
        return ""
    return render_zoom(read_text(path), zoom_level, tab_width)


__all__ = [
    "FULL_DETAIL_ZOOM",
    "DEFAULT_TAB_WIDTH",
    "ELLIPSIS",
    "ZoomState",
    "indentation_columns",
    "detect_indent_unit",
    "line_depth",
    "zoom_line",
    "render_zoom",
    "render_zoom_for_path",
]
