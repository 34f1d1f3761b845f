from __future__ import annotations

import asyncio
from typing import Any, Callable, Mapping, TypeVar

from .store import JsonStore

T = TypeVar("T")


class AsyncJsonStore:
    """
    Async wrapper around a JsonStore.
    Uses asyncio.to_thread to avoid blocking the event loop on file I/O and lock waits.

    Calls are forwarded one at a time by the caller; the wrapped store is still
    not safe for concurrent use from several tasks.
    """

    def __init__(self, store: JsonStore) -> None:
        self._store = store

    @property
    def store(self) -> JsonStore:
        return self._store

    async def load(self) -> "AsyncJsonStore":
        await asyncio.to_thread(self._store.load)
        return self

    async def get(self, path: str | None = None, default: Any = None, as_object: bool = False) -> Any:
        return await asyncio.to_thread(self._store.get, path, default, as_object)

    async def set(self, path: str | Mapping[str, Any], value: Any = None) -> None:
        await asyncio.to_thread(self._store.set, path, value)

    async def has(self, path: str) -> bool:
        return await asyncio.to_thread(self._store.has, path)

    async def delete(self, path: str, default: Any = None) -> Any:
        return await asyncio.to_thread(self._store.delete, path, default)

    async def save(self) -> None:
        await asyncio.to_thread(self._store.save)

    async def remember(self, path: str, ttl_seconds: int | float, compute: Callable[[], Any]) -> Any:
        return await asyncio.to_thread(self._store.remember, path, ttl_seconds, compute)

    async def with_lock(self, critical_section: Callable[[], T], delete_lock_after: bool = True) -> T:
        return await asyncio.to_thread(self._store.with_lock, critical_section, delete_lock_after)

    async def close(self) -> None:
        await asyncio.to_thread(self._store.close)

    async def __aenter__(self) -> "AsyncJsonStore":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
