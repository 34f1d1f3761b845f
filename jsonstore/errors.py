from __future__ import annotations


class JsonStoreError(Exception):
    """Base exception for jsonstore failures."""


class StoreTypeError(JsonStoreError, TypeError):
    """Raised when a path holds a value of the wrong shape for the operation."""

    def __init__(self, path: str | None, expected: str, actual: object):
        self.path = path
        self.expected = expected
        self.actual_type = type(actual).__name__
        where = "<root>" if path is None else path
        super().__init__(f"Value at [{where}] is not {expected} (got {self.actual_type}).")


class LockError(JsonStoreError):
    """Raised when a lock file cannot be opened or exclusively acquired."""

    def __init__(self, lock_file: object, reason: str = "Could not acquire lock"):
        self.lock_file = lock_file
        super().__init__(f"{reason}: {lock_file}")


class UnknownBackendError(JsonStoreError, KeyError):
    """Raised when a store asks for a backend name nobody registered."""

    def __init__(self, name: str, known: list[str]):
        self.name = name
        self.known = known
        super().__init__(f"Unknown storage backend {name!r} (registered: {', '.join(known) or 'none'})")

    def __str__(self) -> str:
        return str(self.args[0])
