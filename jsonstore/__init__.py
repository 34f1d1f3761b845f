from __future__ import annotations

from .disk_store import LocalDiskBackend
from .document import Document, to_document
from .errors import JsonStoreError, LockError, StoreTypeError, UnknownBackendError
from .interfaces import StorageBackend
from .locks import advisory_lock
from .memo import MemoEntry
from .registry import BackendRegistry
from .repositories import AsyncJsonStore
from .settings import Settings, get_settings
from .store import JsonStore

__all__ = [
    "JsonStore",
    "AsyncJsonStore",
    "Document",
    "to_document",
    "MemoEntry",
    "StorageBackend",
    "LocalDiskBackend",
    "BackendRegistry",
    "Settings",
    "get_settings",
    "advisory_lock",
    "JsonStoreError",
    "StoreTypeError",
    "LockError",
    "UnknownBackendError",
]
