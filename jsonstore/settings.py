from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DISK = "local"
DEFAULT_ROOT = "storage"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # Backend selection
    disk: str

    # Directory (inside the backend) that holds every store file
    base_path: str

    # Filesystem root of the "local" backend
    local_root: Path

    # Flush dirty stores when a `with` block exits or close() is called
    autosave: bool


def get_settings(env_file: str | os.PathLike[str] | None = None) -> Settings:
    if env_file is not None:
        # Real environment variables take precedence over the file.
        load_dotenv(env_file, override=False)

    disk = os.getenv("JSONSTORE_DISK", DEFAULT_DISK).strip() or DEFAULT_DISK
    base_path = os.getenv("JSONSTORE_BASE", "").strip().strip("/")
    local_root = Path(os.getenv("JSONSTORE_ROOT", DEFAULT_ROOT)).expanduser().resolve()
    autosave = _env_bool("JSONSTORE_AUTOSAVE", True)

    return Settings(
        disk=disk,
        base_path=base_path,
        local_root=local_root,
        autosave=autosave,
    )
