"""Local key-value storage backed by a single JSON file."""

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class LocalStorage:
    """String key-value store persisted as one JSON object.

    Values are stored as already-serialized strings, so callers decide how
    each entry is encoded and a bad entry never spoils its neighbours.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path).expanduser()

    def get_item(self, key: str) -> Optional[str]:
        """Return the raw value stored under key, or None."""
        value = self._read().get(key)
        if value is None or isinstance(value, str):
            return value
        logger.warning("Ignoring non-string value stored under %r in %s", key, self.path)
        return None

    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        """Delete key if present."""
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def keys(self) -> List[str]:
        return list(self._read())

    def _read(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            with self.path.open("r", encoding="utf-8") as fp:
                data = json.load(fp)
        except (OSError, ValueError) as exc:
            logger.warning("Unreadable storage file %s: %s", self.path, exc)
            return {}

        if not isinstance(data, dict):
            logger.warning("Storage file %s does not hold an object; ignoring it", self.path)
            return {}
        return data

    def _write(self, data: Dict[str, str]) -> None:
        """Atomically replace the storage file."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(tmp_fd, "w", encoding="utf-8") as fp:
                json.dump(data, fp, indent=2, ensure_ascii=False)
                fp.flush()
                os.fsync(fp.fileno())
            shutil.move(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
