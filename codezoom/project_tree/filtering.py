"""Relevance rules deciding which entries appear in a project outline."""

from __future__ import annotations

import re

from .types import DirectoryEntry, FilterConfig

SOURCE_SUFFIXES: frozenset[str] = frozenset(
    {
        ".ts",
        ".tsx",
        ".js",
        ".jsx",
        ".mjs",
        ".cjs",
        ".mts",
        ".cts",
        ".py",
        ".json",
    }
)
DOC_SUFFIXES: frozenset[str] = frozenset({".md", ".mdx", ".rst"})
DOC_STEMS: frozenset[str] = frozenset({"readme", "changelog", "changes", "contributing", "history"})
DOC_STEM_SUFFIXES: frozenset[str] = DOC_SUFFIXES | {"", ".txt"}
LOCKFILE_NAMES: frozenset[str] = frozenset(
    {
        "package-lock.json",
        "npm-shrinkwrap.json",
        "yarn.lock",
        "pnpm-lock.yaml",
        "bun.lockb",
    }
)
EXCLUDED_DIRECTORY_NAMES: frozenset[str] = frozenset(
    {
        "dist",
        "build",
        "out",
        "node_modules",
        "coverage",
    }
)
TEST_DIRECTORY_NAMES: frozenset[str] = frozenset({"test", "tests", "__tests__", "spec"})

_BUILD_CONFIG_RE = re.compile(r"^webpack(?:\.[\w-]+)*\.config\.(?:js|cjs|mjs|ts)$")
_TEST_FILE_RE = re.compile(r"(?:\.(?:test|spec)\.)|(?:^test_)|(?:_test\.[^.]+$)")


def is_lockfile(name: str) -> bool:
    return name in LOCKFILE_NAMES


def is_build_config(name: str) -> bool:
    """Return whether ``name`` is a webpack-style build config filename."""
    return _BUILD_CONFIG_RE.match(name) is not None


def is_test_entry(entry: DirectoryEntry) -> bool:
    """Return whether ``entry`` is a test file or a test-only directory."""
    name = entry.name.lower()
    if entry.is_dir:
        return name in TEST_DIRECTORY_NAMES
    return _TEST_FILE_RE.search(name) is not None


def _suffix(name: str) -> str:
    dot = name.rfind(".")
    if dot <= 0:
        return ""
    return name[dot:].lower()


def is_doc_file(name: str) -> bool:
    """Return whether ``name`` looks like README/CHANGELOG-style documentation.

    ``README``, ``CHANGELOG.md`` and ``HISTORY.txt`` are docs; ``history.ts``
    is source.
    """
    suffix = _suffix(name)
    if suffix in DOC_SUFFIXES:
        return True
    stem = name.lower().split(".", 1)[0]
    return stem in DOC_STEMS and suffix in DOC_STEM_SUFFIXES


def is_relevant_entry(entry: DirectoryEntry, config: FilterConfig) -> bool:
    """Apply the custom predicate, then the built-in inclusion rules.

    Directories pass unless explicitly excluded so traversal can still find
    relevant children inside them.
    """
    if config.custom_filter is not None and not config.custom_filter(entry.path, entry):
        return False

    name = entry.name
    if not config.include_hidden and name.startswith("."):
        return False
    if entry.is_dir:
        if name in EXCLUDED_DIRECTORY_NAMES:
            return False
        if not config.include_tests and is_test_entry(entry):
            return False
        return True

    if is_lockfile(name):
        return False
    if not config.include_tests and is_test_entry(entry):
        return False
    if is_doc_file(name):
        return config.include_docs
    if is_build_config(name):
        return True
    return _suffix(name) in SOURCE_SUFFIXES


__all__ = [
    "SOURCE_SUFFIXES",
    "DOC_SUFFIXES",
    "LOCKFILE_NAMES",
    "EXCLUDED_DIRECTORY_NAMES",
    "TEST_DIRECTORY_NAMES",
    "is_lockfile",
    "is_build_config",
    "is_test_entry",
    "is_doc_file",
    "is_relevant_entry",
]
