"""Utility helpers for working with files."""

from __future__ import annotations

from pathlib import Path

# 100 ns intervals between 1601-01-01 and 1970-01-01 (UTC).
FILETIME_EPOCH_OFFSET = 116_444_736_000_000_000


def to_file_time(mtime_ns: int) -> int:
    """Convert a POSIX timestamp in nanoseconds to a FILETIME tick count."""
    return mtime_ns // 100 + FILETIME_EPOCH_OFFSET


def etag_for(mtime_ns: int) -> str:
    """Return the validator for a file modified at ``mtime_ns``.

    The value is the FILETIME tick count in uppercase hexadecimal, without
    quotes, so two stat calls on an unchanged file always agree.
    """
    return format(to_file_time(mtime_ns), "X")


def read_bytes(path: Path) -> bytes:
    """Read a whole file as bytes."""
    with Path(path).open("rb") as handle:
        return handle.read()


def read_text(path: Path) -> str:
    """Read a whole file as UTF-8 text."""
    with Path(path).open("r", encoding="utf-8", newline="") as handle:
        return handle.read()
