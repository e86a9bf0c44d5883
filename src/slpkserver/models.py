"""Core slpkserver data models."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path


class PayloadKind(enum.Enum):
    """How a resolved file is sent back to the client."""

    GZIP = "gzip"
    JSON = "json"
    BINARY = "binary"
    UNCLASSIFIED = "unclassified"


@dataclass(frozen=True, slots=True)
class ResolvedFile:
    """A file picked for one request, with the stat values used for its headers."""

    path: Path
    mtime_ns: int
    size: int

    @classmethod
    def from_path(cls, path: Path) -> ResolvedFile:
        stat = Path(path).stat()
        return cls(path=Path(path), mtime_ns=stat.st_mtime_ns, size=stat.st_size)
