"""Thread-safe singleton configuration manager for PostScroll."""

import logging
import threading
from pathlib import Path
from typing import Any

import yaml

from src.core.exceptions import ConfigError

logger = logging.getLogger("postscroll")


SUPPORTED_LOCALES = ("ru_RU", "en_US")

# Default configuration template
DEFAULT_CONFIG = {
    "app": {
        "locale": "ru_RU",
        "version": "1.0.0",
        "log_level": "INFO",
    },
    "api": {
        "base_url": "https://jsonplaceholder.typicode.com",
        "timeout": 30,
        "mock_mode": False,
    },
    "feed": {
        "page_size": 12,
        "scroll_debounce_ms": 100,
        "skeleton_count": 12,
    },
    "translation": {
        "table": "ru_RU",
    },
    "security": {
        "mask_logs": True,
    },
}

# Integer settings and their lower bounds
_INT_MINIMUMS = {
    "api.timeout": 5,
    "feed.page_size": 1,
    "feed.scroll_debounce_ms": 0,
    "feed.skeleton_count": 0,
}


class ConfigManager:
    """Process-wide settings read from config/settings.yaml.

    - One instance per process, guarded by an RLock
    - settings.yaml is written from DEFAULT_CONFIG on first run
    - Values are addressed with dot keys ("feed.page_size")
    - Keys missing from the file fall back to DEFAULT_CONFIG
    - Bounded settings are clamped on load and on update()
    """

    _instance = None
    _lock = threading.RLock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if hasattr(self, '_initialized'):
            return

        with self._lock:
            if hasattr(self, '_initialized'):
                return

            self.PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
            self.CONFIG_PATH = self.PROJECT_ROOT / "config" / "settings.yaml"

            self._config = {}
            self._instance_lock = threading.RLock()

            self._load_or_create_config()

            self._initialized = True

    def _load_or_create_config(self):
        """Read settings.yaml over the defaults, or write the defaults out."""
        if not self.CONFIG_PATH.exists():
            logger.info(f"No settings at {self.CONFIG_PATH}, writing defaults")
            self._config = self._deep_copy(DEFAULT_CONFIG)
            self.save()
            return

        try:
            with open(self.CONFIG_PATH, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
        except (yaml.YAMLError, OSError) as e:
            logger.error(f"Cannot read {self.CONFIG_PATH}: {e}. Using defaults.")
            self._config = self._deep_copy(DEFAULT_CONFIG)
            return

        if not isinstance(loaded, dict):
            logger.error(f"{self.CONFIG_PATH} is not a mapping. Using defaults.")
            loaded = {}

        self._config = self._merge(self._deep_copy(DEFAULT_CONFIG), loaded)
        self._sanitize()
        logger.info(f"Loaded configuration from {self.CONFIG_PATH}")

    def _sanitize(self) -> None:
        """Re-validate bounded values that came from the file."""
        for key in ("app.locale", *_INT_MINIMUMS):
            current = self.get(key)
            checked = self._validate_key_value(key, current)
            if checked is None:
                checked = self.get(key, default=None, source=DEFAULT_CONFIG)
            if checked != current:
                self.set(key, checked)

    def get(self, key: str, default=None, source: dict = None) -> Any:
        """Look up a dot-notation key.

        Example:
            >>> config.get("feed.page_size")
            12
        """
        with self._instance_lock:
            node = self._config if source is None else source
            for part in key.split('.'):
                if not isinstance(node, dict) or part not in node:
                    return default
                node = node[part]
            return node

    def set(self, key: str, value: Any) -> None:
        """Set a dot-notation key in memory. Call save() to persist."""
        with self._instance_lock:
            *parents, leaf = key.split('.')
            node = self._config
            for part in parents:
                node = node.setdefault(part, {})
            node[leaf] = value

    def update(self, changes: dict) -> None:
        """Apply {dot_key: value} changes after validation, then save once.

        Invalid values are logged and skipped; out-of-range integers are
        clamped to their minimum (see _INT_MINIMUMS).
        """
        with self._instance_lock:
            for key, value in changes.items():
                checked = self._validate_key_value(key, value)
                if checked is not None:
                    self.set(key, checked)
            self.save()

    def _validate_key_value(self, key: str, value: Any) -> Any:
        """Return the value to store for key, or None to reject it."""
        if key == "app.locale":
            if value not in SUPPORTED_LOCALES:
                logger.warning(f"Unsupported locale '{value}', expected one of {SUPPORTED_LOCALES}")
                return None
            return value

        if key in _INT_MINIMUMS:
            return self._clamp_int(key, value, _INT_MINIMUMS[key])

        return value

    @staticmethod
    def _clamp_int(key: str, value: Any, minimum: int) -> Any:
        """Coerce value to int, forcing it up to minimum. None if not an int."""
        if isinstance(value, bool):
            logger.warning(f"{key} must be an integer, got {value!r}")
            return None
        try:
            number = int(value)
        except (TypeError, ValueError):
            logger.warning(f"{key} must be an integer, got {value!r}")
            return None
        if number < minimum:
            logger.warning(f"{key}={number} is below {minimum}, using {minimum}")
            return minimum
        return number

    def save(self) -> None:
        """Write the current settings to settings.yaml."""
        with self._instance_lock:
            try:
                self.CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
                with open(self.CONFIG_PATH, 'w', encoding='utf-8') as f:
                    yaml.safe_dump(self._config, f, default_flow_style=False,
                                   sort_keys=False, allow_unicode=True)
            except OSError as e:
                logger.error(f"Cannot write {self.CONFIG_PATH}: {e}")
                raise ConfigError(f"Failed to save configuration: {e}")

    def get_translation_table_path(self) -> Path:
        """Absolute path of the YAML translation table named by translation.table."""
        with self._instance_lock:
            table = self.get("translation.table", "ru_RU")
            return self.PROJECT_ROOT / "src" / "resources" / "translations" / f"{table}.yaml"

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton (tests only)."""
        with cls._lock:
            cls._instance = None

    @staticmethod
    def _merge(base: dict, override: dict) -> dict:
        """Recursively lay override on top of base (base is modified)."""
        for key, value in override.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                ConfigManager._merge(base[key], value)
            else:
                base[key] = value
        return base

    @staticmethod
    def _deep_copy(obj):
        if isinstance(obj, dict):
            return {k: ConfigManager._deep_copy(v) for k, v in obj.items()}
        if isinstance(obj, list):
            return [ConfigManager._deep_copy(item) for item in obj]
        return obj
