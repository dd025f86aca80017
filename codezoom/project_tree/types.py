"""Datatypes for project-tree traversal: entries, filters, and zoom overrides."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class DirectoryEntry:
    """One directory child as observed by the filesystem reader."""

    name: str
    path: Path
    is_dir: bool
    is_file: bool
    is_symlink: bool = False
    size: int | None = None
    mtime_ns: int | None = None


EntryPredicate = Callable[[Path, DirectoryEntry], bool]


@dataclass(frozen=True)
class FilterConfig:
    """Caller-supplied relevance switches.

    ``custom_filter`` runs before the built-in rules and can veto any entry;
    returning ``True`` only lets the built-in rules decide.
    """

    include_tests: bool = False
    include_docs: bool = False
    include_hidden: bool = False
    custom_filter: EntryPredicate | None = None


@dataclass(frozen=True)
class ZoomOverride:
    """Render one file at ``zoom_level`` instead of the traversal default."""

    path: Path
    zoom_level: int


__all__ = [
    "DirectoryEntry",
    "EntryPredicate",
    "FilterConfig",
    "ZoomOverride",
]
