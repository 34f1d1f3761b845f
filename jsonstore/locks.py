from __future__ import annotations

import contextlib
import logging
import threading
from pathlib import Path
from typing import Callable, Iterator, TypeVar

from filelock import FileLock, Timeout

from .errors import LockError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PathLockRegistry:
    """
    Provides a stable lock per normalized file path to avoid global contention.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def lock_for(self, path: Path) -> threading.Lock:
        key = str(path.resolve())
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock


GLOBAL_PATH_LOCKS = PathLockRegistry()


@contextlib.contextmanager
def advisory_lock(lock_file: Path, *, delete_after: bool = True) -> Iterator[Path]:
    """
    Hold an exclusive advisory lock on `lock_file` for the duration of the block.

    Blocks without a timeout. Only cooperating callers that lock the same file
    are serialized. The lock file is removed after a clean exit when
    `delete_after` is set; it is left in place if the block raises.
    """
    # A fresh FileLock per acquisition: holders in other threads use their own
    # file descriptor, so the OS lock serializes them too.
    lock = FileLock(str(lock_file), timeout=-1)
    try:
        lock.acquire()
    except (Timeout, OSError) as e:
        raise LockError(lock_file) from e

    logger.debug("LOCK: acquired %s", lock_file)
    try:
        yield lock_file
        # Unlink while still holding the lock; a waiter that locked the
        # unlinked file sees st_nlink == 0 and retries on the new path.
        if delete_after:
            lock_file.unlink(missing_ok=True)
    finally:
        lock.release()
        logger.debug("LOCK: released %s", lock_file)


def run_locked(lock_file: Path, critical_section: Callable[[], T], *, delete_after: bool = True) -> T:
    with advisory_lock(lock_file, delete_after=delete_after):
        return critical_section()
