"""Singleton I18nManager holding the literal UI and error strings."""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOCALE_DIR = PROJECT_ROOT / "src" / "resources" / "locales"
DEFAULT_LOCALE = "ru_RU"

logger = logging.getLogger("postscroll")


class I18nManager:
    """Thread-safe singleton for UI strings.

    Strings live in LOCALE_DIR/<locale>.json and are addressed with dot keys
    ("feed.search_placeholder"), with {placeholder} substitution. A key the
    active locale lacks is looked up in DEFAULT_LOCALE, and failing that the
    key itself is returned, so a missing string is visible but never fatal.
    """

    _instance = None
    _lock = threading.RLock()

    def __new__(cls):
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._initialized = False
            return cls._instance

    def __init__(self):
        if self._initialized:
            return
        self._strings: Dict[str, Any] = {}
        self._fallback: Dict[str, Any] = {}
        self._locale: str = DEFAULT_LOCALE
        self._initialized = True

    def load_locale(self, locale: str) -> bool:
        """Make locale the active one. False (and nothing changes) on failure."""
        with self._lock:
            strings = self._read(locale)
            if strings is None:
                return False

            if locale == DEFAULT_LOCALE:
                fallback = {}
            else:
                fallback = self._read(DEFAULT_LOCALE) or {}

            self._strings = strings
            self._fallback = fallback
            self._locale = locale
            logger.info(f"Loaded locale: {locale}")
            return True

    def get(self, key: str, **kwargs) -> str:
        """Get a UI string by dot-notation key.

        Examples:
            get("feed.title") -> "Поиск постов"
            get("detail.comments_header", count=5) -> "Комментарии (5)"
        """
        with self._lock:
            template = self._resolve(self._strings, key)
            if template is None:
                template = self._resolve(self._fallback, key)
            if template is None:
                return key

            if not kwargs:
                return template

            try:
                return template.format_map(kwargs)
            except (KeyError, ValueError) as e:
                logger.warning(f"Cannot format '{key}' with {sorted(kwargs)}: {e}")
                return template

    @property
    def locale(self) -> str:
        with self._lock:
            return self._locale

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton (tests only)."""
        with cls._lock:
            cls._instance = None

    @staticmethod
    def _read(locale: str) -> Optional[dict]:
        path = LOCALE_DIR / f"{locale}.json"
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            logger.warning(f"Locale file not found: {path}")
            return None
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Unreadable locale file {path}: {e}")
            return None
        if not isinstance(data, dict):
            logger.warning(f"Locale file {path} is not a JSON object")
            return None
        return data

    @staticmethod
    def _resolve(strings: dict, key: str) -> Optional[str]:
        node = strings
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node if isinstance(node, str) else None
