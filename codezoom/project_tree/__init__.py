"""Project-tree traversal and outline rendering.

This package contains the non-UI pieces behind project outlines:
- entry/filter/override datatypes
- the filesystem reader protocol and its local implementation
- relevance rules
- the outline renderer that embeds zoomed file views
"""

from __future__ import annotations

from .types import DirectoryEntry, EntryPredicate, FilterConfig, ZoomOverride
from .fs import FileSystemReader, LocalFileSystem, sorted_children
from .filtering import is_relevant_entry
from .rendering import DEFAULT_MAX_DEPTH, INDENT_UNIT, build_override_table, render_project_structure

__all__ = [
    "DirectoryEntry",
    "EntryPredicate",
    "FilterConfig",
    "ZoomOverride",
    "FileSystemReader",
    "LocalFileSystem",
    "sorted_children",
    "is_relevant_entry",
    "DEFAULT_MAX_DEPTH",
    "INDENT_UNIT",
    "build_override_table",
    "render_project_structure",
]
