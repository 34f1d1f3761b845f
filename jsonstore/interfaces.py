from __future__ import annotations

from pathlib import Path
from typing import Protocol


class StorageBackend(Protocol):
    """
    Minimal file-like backend: raw bytes persisted under relative paths.
    """

    def exists(self, path: str) -> bool:
        """Return True when something is stored at `path`."""
        ...

    def read(self, path: str) -> bytes:
        """Return the stored bytes; errors from the medium propagate."""
        ...

    def write(self, path: str, payload: bytes) -> None:
        """Persist `payload` at `path`, replacing any previous content."""
        ...

    def lock_file(self, path: str) -> Path:
        """Resolve `path` to a local file that can carry an OS advisory lock."""
        ...
