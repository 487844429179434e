"""Configuration loader for todoapp (global + project with TOML-based defaults)."""

from __future__ import annotations

import os
import platform
from pathlib import Path
from typing import Any, Dict, Optional

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for Python <3.11
    import tomli as tomllib  # type: ignore


class ConfigLoader:
    """
    Handles configuration loading from multiple sources with priority resolution.

    Priority (highest → lowest):
    1. Command-line arguments (not handled here)
    2. Environment variables (TODOAPP_SECTION__KEY)
    3. Project config (.todoapp/config.toml)
    4. Global config (~/.config/todoapp/config.toml)
    5. Built-in defaults
    """

    ENV_PREFIX = "TODOAPP_"

    def __init__(self, global_dir: Optional[Path] = None, project_dir: Optional[Path] = None) -> None:
        self.global_dir = global_dir or self.get_global_config_dir()
        self.project_dir = project_dir or self.get_project_config_dir()

        self.config: Dict[str, Any] = {}
        self._load_all()

    # ------------------------------------------------------------------ #
    # Public getters
    # ------------------------------------------------------------------ #
    def get(self, key: str, default: Any = None) -> Any:
        """Get config value by dot-separated key."""
        keys = key.split(".")
        value: Any = self.config
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
        return value if value is not None else default

    def get_int(self, key: str, default: int) -> int:
        """Integer value; environment overrides arrive as strings."""
        try:
            return int(self.get(key, default))
        except (TypeError, ValueError):
            return default

    def get_path(self, key: str, default: str) -> Path:
        return Path(str(self.get(key, default))).expanduser()

    # ------------------------------------------------------------------ #
    # Load/merge helpers
    # ------------------------------------------------------------------ #
    def _load_all(self) -> None:
        self._load_global_config()
        if self.project_dir:
            self._load_project_config()
        self._apply_env_overrides()

    def _load_global_config(self) -> None:
        """Load global configuration, writing defaults on first run."""
        self.config = self._get_default_config()
        config_file = self.global_dir / "config.toml"
        if config_file.exists():
            with open(config_file, "rb") as f:
                self._deep_merge(self.config, tomllib.load(f))
        else:
            self._create_default_config()

    def _load_project_config(self) -> None:
        """Load project-specific config and merge with global."""
        config_file = self.project_dir / "config.toml"
        if config_file.exists():
            with open(config_file, "rb") as f:
                self._deep_merge(self.config, tomllib.load(f))

    def _apply_env_overrides(self) -> None:
        """Apply TODOAPP_SECTION__KEY environment overrides."""
        for key, value in os.environ.items():
            if not key.startswith(self.ENV_PREFIX):
                continue
            config_key = key[len(self.ENV_PREFIX) :].lower().replace("__", ".")
            if "." not in config_key:
                continue
            self._set_nested(self.config, config_key, value)

    # ------------------------------------------------------------------ #
    # Static paths/helpers
    # ------------------------------------------------------------------ #
    @staticmethod
    def get_global_config_dir() -> Path:
        """Get platform-specific global config directory following XDG spec."""
        system = platform.system()
        if system == "Windows":
            base = Path(os.environ.get("APPDATA", "~\\AppData\\Roaming")).expanduser()
        else:
            xdg = os.environ.get("XDG_CONFIG_HOME")
            base = Path(xdg).expanduser() if xdg else Path.home() / ".config"
        return base / "todoapp"

    @staticmethod
    def get_project_config_dir() -> Path | None:
        """Find .todoapp directory in current or parent directories."""
        current = Path.cwd()
        for parent in [current] + list(current.parents):
            config_dir = parent / ".todoapp"
            if config_dir.is_dir():
                return config_dir
        return None

    def _create_default_config(self) -> None:
        self.global_dir.mkdir(parents=True, exist_ok=True)
        config_file = self.global_dir / "config.toml"
        with open(config_file, "w", encoding="utf-8") as f:
            f.write(self._get_default_config_toml())

    # ------------------------------------------------------------------ #
    # Default content
    # ------------------------------------------------------------------ #
    def _get_default_config(self) -> Dict[str, Any]:
        """Built-in defaults. Data files live beside the global config."""
        return {
            "general": {
                "log_level": "warning",
                "log_file": str(self.global_dir / "todoapp.log"),
            },
            "storage": {
                "path": str(self.global_dir / "storage.json"),
                "tasks_key": "todoApp_todos",
                "theme_key": "todoApp_darkMode",
            },
            "tasks": {
                "max_text_length": 100,
            },
        }

    def _get_default_config_toml(self) -> str:
        """Default config TOML text for first-run creation."""
        default = self._get_default_config()
        return "\n".join(
            [
                "[general]",
                f'log_level = "{default["general"]["log_level"]}"',
                f"log_file = '{default['general']['log_file']}'",
                "",
                "[storage]",
                f"path = '{default['storage']['path']}'",
                f'tasks_key = "{default["storage"]["tasks_key"]}"',
                f'theme_key = "{default["storage"]["theme_key"]}"',
                "",
                "[tasks]",
                f'max_text_length = {default["tasks"]["max_text_length"]}',
                "",
            ]
        )

    # ------------------------------------------------------------------ #
    # Utility helpers
    # ------------------------------------------------------------------ #
    def _deep_merge(self, base: dict, override: dict) -> None:
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _set_nested(self, d: dict, path: str, value: Any) -> None:
        keys = path.split(".")
        for key in keys[:-1]:
            d = d.setdefault(key, {})
        d[keys[-1]] = value


Config = ConfigLoader

__all__ = ["ConfigLoader", "Config"]
