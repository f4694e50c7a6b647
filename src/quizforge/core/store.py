"""File-backed key-value store for the quiz library and user preferences.

Each key maps to one JSON document under the store root. Reads and writes
never raise: failures are logged and reported through the return value so the
caller's in-memory state stays authoritative for the rest of the session.
"""

from __future__ import annotations

import json
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any

__all__ = ["JsonStore"]

_KEY_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


class JsonStore:
    """Persist JSON-compatible values under ``root/<key>.json``."""

    def __init__(self, root: Path, *, logger: logging.Logger | None = None):
        self._root = root
        self._logger = logger or logging.getLogger(__name__)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, key: str) -> Path:
        if not _KEY_RE.match(key):
            raise ValueError(f"Invalid store key: {key!r}")
        return self._root / f"{key}.json"

    def load(self, key: str) -> Any | None:
        """Return the stored value for ``key`` or ``None`` when unavailable."""

        path = self.path_for(key)
        if not path.is_file():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            self._logger.error(
                "Failed to load stored value",
                extra={"key": key, "path": path, "error": str(exc)},
            )
            return None

    def save(self, key: str, value: Any) -> bool:
        path = self.path_for(key)
        try:
            _atomic_write_json(path, value)
        except (OSError, TypeError, ValueError) as exc:
            self._logger.error(
                "Failed to save value",
                extra={"key": key, "path": path, "error": str(exc)},
            )
            return False
        self._logger.debug("Saved value", extra={"key": key, "path": path})
        return True


def _atomic_write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    text = json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False)
    handle = tempfile.NamedTemporaryFile(
        "w",
        delete=False,
        encoding="utf-8",
        dir=str(path.parent),
        suffix=".tmp",
    )
    try:
        handle.write(text)
        handle.flush()
        os.fsync(handle.fileno())
    finally:
        handle.close()
    os.replace(handle.name, path)
    try:
        path.chmod(0o600)
    except PermissionError:  # pragma: no cover - depends on filesystem
        pass
