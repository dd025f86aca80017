"""Indented project outlines with a zoomed view of every relevant file."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from ..zoom import DEFAULT_TAB_WIDTH, render_zoom
from .filtering import is_relevant_entry
from .fs import FileSystemReader, LocalFileSystem, sorted_children
from .types import DirectoryEntry, FilterConfig, ZoomOverride

logger = logging.getLogger(__name__)

INDENT_UNIT = "  "
DEFAULT_MAX_DEPTH = 64


def _normalize(path: Path) -> Path:
    return Path(os.path.normpath(path))


def build_override_table(root: Path, overrides: Iterable[ZoomOverride]) -> dict[Path, int]:
    """Map normalized file paths to their zoom level.

    Relative override paths are taken relative to ``root``. When the same path
    is listed more than once the first entry wins and the rest are logged.
    """
    table: dict[Path, int] = {}
    for override in overrides:
        path = Path(override.path)
        if not path.is_absolute():
            path = root / path
        path = _normalize(path)
        if path in table:
            logger.warning(
                "Ignoring duplicate zoom override for %s (level %d); keeping level %d",
                path,
                override.zoom_level,
                table[path],
            )
            continue
        table[path] = override.zoom_level
    return table


def indent_block(text: str, indent: str) -> list[str]:
    """Prefix every line of ``text`` with ``indent``; empty text yields no lines."""
    if not text:
        return []
    return [indent + line for line in text.split("\n")]


def render_project_structure(
    root: Path | str,
    zoom_level: int,
    config: FilterConfig | None = None,
    overrides: Iterable[ZoomOverride] = (),
    *,
    fs: FileSystemReader | None = None,
    tab_width: int = DEFAULT_TAB_WIDTH,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> str:
    """Render the relevant part of ``root`` as an indented outline.

    Directories are written as ``name/`` and recursed into; files are written
    as ``name:`` followed by their zoomed content one level deeper. Entries
    that cannot be listed or read are logged and skipped. Failing to list
    ``root`` itself raises the underlying ``OSError``.
    """
    config = config or FilterConfig()
    reader: FileSystemReader = fs if fs is not None else LocalFileSystem()
    root_path = _normalize(Path(root).absolute())
    override_table = build_override_table(root_path, overrides)

    lines: list[str] = []
    visited: set[Path] = set()

    def render_file(entry: DirectoryEntry, indent: str) -> None:
        entry_path = _normalize(entry.path)
        level = override_table.get(entry_path, zoom_level)
        zoomed = ""
        if level > 0:
            try:
                content = reader.read_text(entry.path)
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Skipping unreadable file %s: %s", entry.path, exc)
                return
            zoomed = render_zoom(content, level, tab_width)
        lines.append(f"{indent}{entry.name}:")
        lines.extend(indent_block(zoomed, indent + INDENT_UNIT))

    def walk(depth: int, listing: list[DirectoryEntry]) -> None:
        indent = INDENT_UNIT * depth
        for entry in sorted_children(listing):
            if not is_relevant_entry(entry, config):
                continue
            if entry.is_dir:
                if entry.is_symlink:
                    logger.debug("Not following symlinked directory %s", entry.path)
                    continue
                if depth + 1 > max_depth:
                    logger.warning("Skipping %s: deeper than max_depth=%d", entry.path, max_depth)
                    continue
                resolved = entry.path.resolve()
                if resolved in visited:
                    logger.warning("Skipping %s: directory already visited", entry.path)
                    continue
                try:
                    children = reader.list_directory(entry.path)
                except OSError as exc:
                    logger.warning("Skipping unreadable directory %s: %s", entry.path, exc)
                    continue
                visited.add(resolved)
                lines.append(f"{indent}{entry.name}/")
                walk(depth + 1, children)
            elif entry.is_file:
                render_file(entry, indent)

    logger.debug("Rendering project structure for %s at zoom %d", root_path, zoom_level)
    visited.add(root_path.resolve())
    walk(0, reader.list_directory(root_path))
    return "\n".join(lines).strip()


__all__ = [
    "INDENT_UNIT",
    "DEFAULT_MAX_DEPTH",
    "build_override_table",
    "indent_block",
    "render_project_structure",
]
