"""Tolerant source-text loading shared by the zoom and tree renderers."""

from __future__ import annotations

from pathlib import Path


def decode_source(raw: bytes) -> str:
    """Decode source bytes as UTF-8 (dropping a leading BOM), else latin-1.

    latin-1 maps every byte, so decoding never fails.
    """
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        return raw.decode("latin-1")


def read_text(path: Path) -> str:
    """Read ``path`` and decode it with ``decode_source``."""
    return decode_source(path.read_bytes())


def looks_binary(sample: bytes) -> bool:
    """Return whether a leading byte sample contains NUL bytes."""
    return b"\x00" in sample


__all__ = ["decode_source", "read_text", "looks_binary"]
