"""Filesystem reader used by the project-structure renderer.

The renderer only talks to the ``FileSystemReader`` protocol so hosts can
substitute their own workspace view. ``LocalFileSystem`` is the default,
backed by ``os.scandir``. Both methods raise ``OSError`` subclasses
(``PermissionError``, ``FileNotFoundError``, ...) for unreadable targets.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol

from ..source import looks_binary, read_text
from .types import DirectoryEntry

BINARY_SNIFF_BYTES = 4_096


class FileSystemReader(Protocol):
    """Read-only directory listing and text access."""

    def list_directory(self, directory: Path) -> list[DirectoryEntry]: ...

    def read_text(self, path: Path) -> str: ...


class LocalFileSystem:
    """``FileSystemReader`` over the local disk."""

    def list_directory(self, directory: Path) -> list[DirectoryEntry]:
        children: list[DirectoryEntry] = []
        with os.scandir(directory) as entries:
            for child in entries:
                children.append(_entry_from_dirent(child))
        return children

    def read_text(self, path: Path) -> str:
        with path.open("rb") as handle:
            sample = handle.read(BINARY_SNIFF_BYTES)
        if looks_binary(sample):
            raise UnicodeDecodeError("utf-8", sample, 0, len(sample), "binary content")
        return read_text(path)


def _entry_from_dirent(child: os.DirEntry) -> DirectoryEntry:
    """Build a ``DirectoryEntry`` from a scandir result without raising."""
    try:
        is_symlink = child.is_symlink()
    except OSError:
        is_symlink = False
    try:
        is_dir = child.is_dir(follow_symlinks=True)
    except OSError:
        is_dir = False
    try:
        is_file = child.is_file(follow_symlinks=True)
    except OSError:
        is_file = False

    size: int | None = None
    mtime_ns: int | None = None
    try:
        stat = child.stat(follow_symlinks=True)
        mtime_ns = int(stat.st_mtime_ns)
        if is_file:
            size = int(stat.st_size)
    except OSError:
        pass

    return DirectoryEntry(
        name=child.name,
        path=Path(child.path),
        is_dir=is_dir,
        is_file=is_file,
        is_symlink=is_symlink,
        size=size,
        mtime_ns=mtime_ns,
    )


def sorted_children(children: list[DirectoryEntry]) -> list[DirectoryEntry]:
    """Sort directories before files and then by lowercase name."""
    return sorted(children, key=lambda item: (not item.is_dir, item.name.lower(), item.name))


__all__ = [
    "FileSystemReader",
    "LocalFileSystem",
    "sorted_children",
]
