from __future__ import annotations

import copy
import logging
import time
from types import TracebackType
from typing import Any, Callable, Mapping, TypeVar

from .document import (
    MISSING,
    Document,
    as_namespace,
    get_path,
    has_path,
    lookup,
    merge_documents,
    remove_path,
    same_value,
    set_path,
    to_document,
)
from .errors import LockError, StoreTypeError
from .interfaces import StorageBackend
from .json_codec import decode_document, encode_document
from .locks import run_locked
from .memo import MemoEntry, fresh_value
from .paths import lock_path_for, resolve_store_path
from .registry import BackendRegistry
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _unix_now() -> int:
    return int(time.time())


class JsonStore:
    """
    A single JSON document persisted under `<base>/<filename>` on a named backend.

    Construction does no I/O; the document is loaded (and created from
    `default` if missing) on first access. Changes stay in memory until
    `save()`, or until the store is closed with autosave enabled:

        with JsonStore.make("settings.json", {"theme": "light"}) as store:
            store.set("theme", "dark")

    A store is not thread-safe. Independent instances on the same file race on
    load/save; wrap read-modify-write sequences in `with_lock`.
    """

    def __init__(
        self,
        filename: str,
        default: Any = None,
        *,
        registry: BackendRegistry,
        disk: str = "local",
        base: str = "",
        autosave: bool = True,
        clock: Callable[[], int | float] | None = None,
    ):
        self._filename = filename
        self._default = {} if default is None else default
        self._registry = registry
        self._disk = disk
        self._base = base
        self._autosave = autosave
        self._clock = clock or _unix_now

        self._data: Document = None
        self._loaded = False
        self._dirty = False

    @classmethod
    def make(
        cls,
        filename: str,
        default: Any = None,
        *,
        settings: Settings | None = None,
        registry: BackendRegistry | None = None,
        disk: str | None = None,
        base: str | None = None,
        clock: Callable[[], int | float] | None = None,
    ) -> "JsonStore":
        """Build a store with disk/base/autosave taken from `settings` unless overridden."""
        settings = settings or get_settings()
        return cls(
            filename,
            default,
            registry=registry or BackendRegistry.from_settings(settings),
            disk=disk if disk is not None else settings.disk,
            base=base if base is not None else settings.base_path,
            autosave=settings.autosave,
            clock=clock,
        )

    # ------------------------------------------------------------------
    # Target
    # ------------------------------------------------------------------
    @property
    def path(self) -> str:
        return resolve_store_path(self._base, self._filename)

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def dirty(self) -> bool:
        return self._dirty

    def disk(self, name: str) -> "JsonStore":
        self._disk = name
        return self

    def base(self, path: str) -> "JsonStore":
        self._base = path
        return self

    def _backend(self) -> StorageBackend:
        return self._registry.get(self._disk)

    def exists(self) -> bool:
        return self._backend().exists(self.path)

    # ------------------------------------------------------------------
    # Load / save
    # ------------------------------------------------------------------
    def load(self) -> "JsonStore":
        if self._loaded:
            return self

        path = self.path
        backend = self._backend()
        default = to_document(self._default)

        if not backend.exists(path):
            backend.write(path, encode_document(default))
            self._data = default
            logger.debug("LOAD: created %s from defaults", path)
        else:
            persisted = decode_document(backend.read(path))
            if persisted is None:
                logger.warning("LOAD: %s is empty or not valid JSON; using defaults", path)
                self._data = default
            else:
                self._data = merge_documents(default, persisted)
            logger.debug("LOAD: read %s", path)

        self._loaded = True
        return self

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            self.load()

    def save(self) -> None:
        self._ensure_loaded()
        path = self.path
        self._backend().write(path, encode_document(self._data))
        self._dirty = False
        logger.debug("SAVE: wrote %s", path)

    def close(self) -> None:
        """Flush pending changes when autosave is enabled."""
        if self._autosave and self._dirty:
            self.save()

    def __enter__(self) -> "JsonStore":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get(self, path: str | None = None, default: Any = None, as_object: bool = False) -> Any:
        self._ensure_loaded()
        if path is None:
            return as_namespace(self._data) if as_object else copy.deepcopy(self._data)
        return copy.deepcopy(get_path(self._data, path, default))

    def has(self, path: str) -> bool:
        self._ensure_loaded()
        return has_path(self._data, path)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def set(self, path: str | Mapping[str, Any], value: Any = None) -> None:
        self._ensure_loaded()
        if isinstance(path, Mapping):
            # All pairs or none.
            data = copy.deepcopy(self._data)
            for key, item in path.items():
                data = set_path(data, key, to_document(item))
            self._data = data
        else:
            self._data = set_path(self._data, path, to_document(value))
        self._dirty = True

    def forget(self, path: str) -> None:
        self._ensure_loaded()
        remove_path(self._data, path)
        self._dirty = True

    def get_or_set(self, path: str, default: Any) -> Any:
        # A stored null counts as unset.
        value = self.get(path)
        if value is not None:
            return value

        value = to_document(default() if callable(default) else default)
        self.set(path, value)
        return copy.deepcopy(value)

    def replace(self, document: Any) -> None:
        self._ensure_loaded()
        self._data = to_document(document)
        self._dirty = True

    def update(self, partial: Any) -> None:
        self._ensure_loaded()
        self._data = merge_documents(self._data, to_document(partial))
        self._dirty = True

    def insert(self, path: str | None, value: Any) -> None:
        items = self._list_at(path)
        items.append(to_document(value))
        self._data = set_path(self._data, path, items)
        self._dirty = True

    def delete(self, path: str, default: Any = None) -> Any:
        self._ensure_loaded()
        removed = remove_path(self._data, path)
        self._dirty = True
        return default if removed is MISSING else removed

    def delete_from(self, path: str | None, value: Any) -> None:
        items = self._list_at(path)
        target = to_document(value)
        kept = [item for item in items if not same_value(item, target)]
        self._data = set_path(self._data, path, kept)
        self._dirty = True

    def _list_at(self, path: str | None) -> list[Any]:
        self._ensure_loaded()
        current = lookup(self._data, path)
        if current is MISSING:
            return []
        if not isinstance(current, list):
            raise StoreTypeError(path, "an array", current)
        return list(current)

    # ------------------------------------------------------------------
    # Memoization
    # ------------------------------------------------------------------
    def remember(self, path: str, ttl_seconds: int | float, compute: Callable[[], Any]) -> Any:
        """
        Return the value cached at `path` while it is fresh, else compute and cache it.

        The entry is stored as {"value": ..., "expires_at": now + ttl_seconds}.
        Anything at `path` that is not a fresh entry is overwritten.
        """
        self._ensure_loaded()
        now = self._clock()
        hit, cached = fresh_value(lookup(self._data, path), now)
        if hit:
            return copy.deepcopy(cached)

        value = to_document(compute())
        self.set(path, MemoEntry.create(value, now, ttl_seconds).to_document())
        return copy.deepcopy(value)

    # ------------------------------------------------------------------
    # Locking
    # ------------------------------------------------------------------
    def with_lock(self, critical_section: Callable[[], T], delete_lock_after: bool = True) -> T:
        """
        Run `critical_section` while holding the advisory lock `<path>.lock`.

        Blocks until the lock is free. Only callers that also use `with_lock`
        on the same path are excluded; the document itself is not reloaded.
        """
        lock_path = lock_path_for(self.path)
        try:
            lock_file = self._backend().lock_file(lock_path)
        except OSError as e:
            raise LockError(lock_path, "Could not open lock file") from e
        return run_locked(lock_file, critical_section, delete_after=delete_lock_after)

    def __repr__(self) -> str:
        state = "unloaded" if not self._loaded else ("dirty" if self._dirty else "clean")
        return f"JsonStore(disk={self._disk!r}, path={self.path!r}, {state})"
