from __future__ import annotations

from pathlib import Path

import pytest

from jsonstore.disk_store import LocalDiskBackend
from jsonstore.errors import UnknownBackendError
from jsonstore.registry import BackendRegistry
from jsonstore.settings import Settings, get_settings
from jsonstore.store import JsonStore


def test_settings_defaults(clean_env, tmp_path: Path):
    clean_env.chdir(tmp_path)
    s = get_settings()
    assert s.disk == "local"
    assert s.base_path == ""
    assert s.local_root == (tmp_path / "storage").resolve()
    assert s.autosave is True


def test_settings_from_env(clean_env, tmp_path: Path):
    clean_env.setenv("JSONSTORE_DISK", "public")
    clean_env.setenv("JSONSTORE_BASE", "/json/")
    clean_env.setenv("JSONSTORE_ROOT", str(tmp_path / "root"))
    clean_env.setenv("JSONSTORE_AUTOSAVE", "off")

    s = get_settings()
    assert s == Settings(disk="public", base_path="json", local_root=(tmp_path / "root").resolve(), autosave=False)


def test_settings_from_env_file(clean_env, tmp_path: Path):
    env_file = tmp_path / "jsonstore.env"
    env_file.write_text("JSONSTORE_BASE=state\nJSONSTORE_DISK=local\n", encoding="utf-8")
    clean_env.setenv("JSONSTORE_DISK", "public")  # process env wins over the file

    s = get_settings(env_file)
    assert s.base_path == "state"
    assert s.disk == "public"


def test_registry_lookup_and_unknown_names(tmp_path: Path):
    registry = BackendRegistry.from_settings(
        Settings(disk="local", base_path="", local_root=tmp_path, autosave=True)
    )
    assert registry.names() == ["local", "public"]
    assert "local" in registry
    assert isinstance(registry.get("public"), LocalDiskBackend)

    with pytest.raises(UnknownBackendError) as exc:
        registry.get("s3")
    assert exc.value.name == "s3"
    assert "local, public" in str(exc.value)


def test_store_with_unknown_disk_fails_on_access(registry):
    store = JsonStore("x.json", registry=registry, disk="missing")
    with pytest.raises(KeyError):
        store.get()


def test_make_resolves_settings_before_construction(tmp_path: Path):
    settings = Settings(disk="public", base_path="json", local_root=tmp_path, autosave=False)
    store = JsonStore.make("made.json", {"a": 1}, settings=settings)

    assert store.path == "json/made.json"
    assert store.get("a") == 1
    assert (tmp_path / "public" / "json" / "made.json").is_file()

    with store:
        store.set("a", 2)
    assert JsonStore.make("made.json", settings=settings).get("a") == 1


def test_make_overrides(tmp_path: Path):
    settings = Settings(disk="public", base_path="json", local_root=tmp_path, autosave=True)
    store = JsonStore.make("o.json", settings=settings, disk="local", base="")
    store.save()
    assert (tmp_path / "o.json").is_file()
