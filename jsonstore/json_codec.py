from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def encode_document(doc: Any, *, indent: int = 4) -> bytes:
    """
    Serialize a document as pretty-printed UTF-8 JSON (non-ASCII left unescaped).
    """
    text = json.dumps(doc, indent=indent, ensure_ascii=False)
    return (text + "\n").encode("utf-8")


def decode_document(raw: bytes | str) -> Any | None:
    """
    Decode persisted JSON.

    Returns None for empty payloads, undecodable bytes or invalid JSON.
    """
    try:
        text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
        if not text.strip():
            return None
        return json.loads(text)
    except (UnicodeDecodeError, ValueError) as e:
        logger.debug("DECODE: discarding malformed JSON payload: %r", e)
        return None


def atomic_write_bytes(path: Path, payload: bytes) -> None:
    """
    Atomically write bytes to disk by writing to a temp file then replacing.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    # Unique temp name per writer so concurrent saves never share a temp file.
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=path.name + ".", suffix=".tmp")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
