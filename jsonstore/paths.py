from __future__ import annotations

from pathlib import Path

LOCK_SUFFIX = ".lock"


def resolve_store_path(base: str, filename: str) -> str:
    # "json/", "/settings.json" -> "json/settings.json"; empty parts are dropped.
    parts = [p.strip("/") for p in (base, filename)]
    return "/".join(p for p in parts if p)


def lock_path_for(store_path: str) -> str:
    return store_path + LOCK_SUFFIX


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path
