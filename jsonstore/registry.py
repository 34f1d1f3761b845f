from __future__ import annotations

import threading

from .disk_store import LocalDiskBackend
from .errors import UnknownBackendError
from .interfaces import StorageBackend
from .settings import Settings


class BackendRegistry:
    """
    Named storage backends ("disks") that stores select by name.
    """

    def __init__(self, backends: dict[str, StorageBackend] | None = None) -> None:
        self._guard = threading.Lock()
        self._backends: dict[str, StorageBackend] = dict(backends or {})

    @classmethod
    def from_settings(cls, settings: Settings) -> "BackendRegistry":
        root = settings.local_root
        return cls(
            {
                "local": LocalDiskBackend(root),
                "public": LocalDiskBackend(root / "public"),
            }
        )

    def register(self, name: str, backend: StorageBackend) -> None:
        with self._guard:
            self._backends[name] = backend

    def get(self, name: str) -> StorageBackend:
        with self._guard:
            backend = self._backends.get(name)
            if backend is None:
                raise UnknownBackendError(name, sorted(self._backends))
            return backend

    def names(self) -> list[str]:
        with self._guard:
            return sorted(self._backends)

    def __contains__(self, name: object) -> bool:
        with self._guard:
            return name in self._backends
