"""Boundary for reading game files by their in-archive path."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Protocol


class LookupFailed(LookupError):
    """Raised when a game file cannot be resolved."""


class FileLookup(Protocol):
    """Resolves a game-relative path (e.g. ``bg/ffxiv/.../planevent.lgb``) to raw bytes."""

    def lookup(self, path: str) -> bytes:
        """Return the file contents or raise LookupFailed."""


@dataclass(slots=True)
class DirectoryFileLookup(FileLookup):
    """Lookup over a directory of files extracted with their archive paths."""

    root: Path

    def __post_init__(self) -> None:
        self.root = Path(self.root).expanduser().resolve()

    def lookup(self, path: str) -> bytes:
        target = (self.root / path.strip("/")).resolve()
        if not target.is_relative_to(self.root):
            raise LookupFailed(f"Path escapes data directory: {path}")
        try:
            return target.read_bytes()
        except OSError as exc:
            raise LookupFailed(f"Game file not found: {path}") from exc


@dataclass(slots=True)
class InMemoryFileLookup(FileLookup):
    """Lookup backed by a path -> bytes mapping; used for fixtures and pre-loaded packs."""

    files: Mapping[str, bytes] = field(default_factory=dict)

    def lookup(self, path: str) -> bytes:
        try:
            return self.files[path]
        except KeyError as exc:
            raise LookupFailed(f"Game file not found: {path}") from exc
