from __future__ import annotations

from pathlib import Path
import sys
from typing import Any, Callable


import pytest


# Ensure the repository root (parent of ./tests) is importable during pytest collection.
# This avoids ModuleNotFoundError for `import jsonstore...` when the package is not installed.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


class FakeClock:
    def __init__(self, now: int = 1_000) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: int) -> None:
        self.now += seconds


@pytest.fixture
def storage_root(tmp_path: Path) -> Path:
    """
    Root of the sandboxed "local" disk so tests never touch a real ./storage.
    """
    root = tmp_path / "storage"
    root.mkdir()
    return root


@pytest.fixture
def registry(storage_root: Path):
    from jsonstore.disk_store import LocalDiskBackend
    from jsonstore.registry import BackendRegistry

    return BackendRegistry({"local": LocalDiskBackend(storage_root)})


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_store(registry, clock) -> Callable[..., Any]:
    from jsonstore.store import JsonStore

    def _make(filename: str, default: Any = None, **kwargs: Any) -> JsonStore:
        kwargs.setdefault("base", "json")
        kwargs.setdefault("clock", clock)
        return JsonStore(filename, default, registry=registry, **kwargs)

    return _make


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    # setenv first so teardown also removes values loaded from env files during the test.
    for name in ("JSONSTORE_DISK", "JSONSTORE_BASE", "JSONSTORE_ROOT", "JSONSTORE_AUTOSAVE"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch
