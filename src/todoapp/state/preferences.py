"""Display preferences kept next to the task list."""

from __future__ import annotations

import json
import logging

from .storage import LocalStorage

logger = logging.getLogger(__name__)

THEME_KEY = "todoApp_darkMode"


class ThemePreference:
    """Dark mode flag, stored independently of the todos."""

    def __init__(self, storage: LocalStorage, key: str = THEME_KEY) -> None:
        self.storage = storage
        self.key = key

    def load(self) -> bool:
        raw = self.storage.get_item(self.key)
        if raw is None:
            return False
        try:
            value = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring malformed theme preference %r", raw)
            return False
        return value is True

    def save(self, dark: bool) -> None:
        self.storage.set_item(self.key, json.dumps(bool(dark)))

    def toggle(self) -> bool:
        """Flip and persist the flag; returns the new value."""
        dark = not self.load()
        self.save(dark)
        return dark
