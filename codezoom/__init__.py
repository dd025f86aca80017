"""Public package surface for codezoom.

Exposes the three caller-facing operations: project outlines, zoomed file
views, and declaration lookup. Implementation lives in the submodules.
"""

from __future__ import annotations

from .declarations import (
    DeclarationError,
    DeclarationParseError,
    ElementDetails,
    ElementKind,
    FileDeclarations,
    ParserUnavailableError,
    collect_declarations,
    find_declaration,
)
from .project_tree import DirectoryEntry, FilterConfig, ZoomOverride, render_project_structure
from .zoom import FULL_DETAIL_ZOOM, ZoomState, render_zoom, render_zoom_for_path


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "DeclarationError",
    "DeclarationParseError",
    "ElementDetails",
    "ElementKind",
    "FileDeclarations",
    "ParserUnavailableError",
    "collect_declarations",
    "find_declaration",
    "DirectoryEntry",
    "FilterConfig",
    "ZoomOverride",
    "render_project_structure",
    "FULL_DETAIL_ZOOM",
    "ZoomState",
    "render_zoom",
    "render_zoom_for_path",
    "main",
]
