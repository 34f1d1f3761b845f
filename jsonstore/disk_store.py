from __future__ import annotations

import logging
from pathlib import Path

from .interfaces import StorageBackend
from .json_codec import atomic_write_bytes
from .locks import GLOBAL_PATH_LOCKS, PathLockRegistry
from .paths import ensure_dir

logger = logging.getLogger(__name__)


class LocalDiskBackend(StorageBackend):
    """
    Stores files under a root directory on the local filesystem.

    - Relative store paths map to `root / path`; leading separators are ignored.
    - Writes are atomic (temp file + replace) and create parent directories.
    - Reads and writes of one file are serialized within the process.
    """

    def __init__(self, root: Path, *, locks: PathLockRegistry = GLOBAL_PATH_LOCKS):
        self._root = Path(root)
        self._locks = locks

    @property
    def root(self) -> Path:
        return self._root

    def full_path(self, path: str) -> Path:
        return self._root / path.lstrip("/")

    def exists(self, path: str) -> bool:
        return self.full_path(path).is_file()

    def read(self, path: str) -> bytes:
        target = self.full_path(path)
        with self._locks.lock_for(target):
            return target.read_bytes()

    def write(self, path: str, payload: bytes) -> None:
        target = self.full_path(path)
        with self._locks.lock_for(target):
            atomic_write_bytes(target, payload)
        logger.debug("DISK WRITE: %s (%d bytes)", target, len(payload))

    def lock_file(self, path: str) -> Path:
        target = self.full_path(path)
        ensure_dir(target.parent)
        return target

    def __repr__(self) -> str:
        return f"LocalDiskBackend(root={str(self._root)!r})"
