"""
Theme preference store.

The store owns the single process-wide preference (light or dark theme). It
reads the persisted record once when constructed and writes it back on every
change. Persistence is best-effort: if the backend is unavailable the theme
still changes in memory for the life of the process.

Persisted record format (one key, JSON value):
    emergency-master-theme -> {"theme": "dark"}
"""

import json
import logging
import sqlite3
from typing import Callable, Dict, List, Optional

import redis

import database

logger = logging.getLogger(__name__)

PREFERENCE_KEY = "emergency-master-theme"
LIGHT = "light"
DARK = "dark"
THEMES = (LIGHT, DARK)
DEFAULT_THEME = DARK


class PersistenceUnavailable(Exception):
    """The preference backend could not be read or written."""


# ====== Backends ======

class MemoryBackend:
    """In-process storage. Used by tests and as the fallback backend."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def write(self, key: str, value: str):
        self.data[key] = value


class SQLiteBackend:
    """Stores preferences in the SQLite preferences table (database.py)."""

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path
        if not database.init_db(db_path):
            logger.warning("Preference database could not be initialized")

    def read(self, key: str) -> Optional[str]:
        try:
            return database.get_preference(key, self.db_path)
        except sqlite3.Error as e:
            raise PersistenceUnavailable(str(e)) from e

    def write(self, key: str, value: str):
        try:
            database.save_preference(key, value, self.db_path)
        except sqlite3.Error as e:
            raise PersistenceUnavailable(str(e)) from e


class RedisBackend:
    """Stores preferences in Redis alongside the session data."""

    def __init__(self, client: redis.Redis, prefix: str = "preferences:"):
        self.client = client
        self.prefix = prefix

    def read(self, key: str) -> Optional[str]:
        try:
            value = self.client.get(self.prefix + key)
        except redis.RedisError as e:
            raise PersistenceUnavailable(str(e)) from e
        if isinstance(value, bytes):
            value = value.decode("utf-8", errors="replace")
        return value

    def write(self, key: str, value: str):
        try:
            self.client.set(self.prefix + key, value)
        except redis.RedisError as e:
            raise PersistenceUnavailable(str(e)) from e


# ====== Store ======

def parse_theme(raw: Optional[str]) -> str:
    """
    Decode a persisted record. Anything absent or malformed means dark.

    Accepts {"theme": ...} and the older {"state": {"theme": ...}} shape.
    """
    if not raw:
        return DEFAULT_THEME
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed theme preference record")
        return DEFAULT_THEME
    if isinstance(data, dict) and isinstance(data.get("state"), dict):
        data = data["state"]
    theme = data.get("theme") if isinstance(data, dict) else None
    return theme if theme in THEMES else DEFAULT_THEME


def encode_theme(theme: str) -> str:
    return json.dumps({"theme": theme})


class PreferenceStore:
    """
    get/set/toggle access to the theme preference.

    Listeners registered with on_change run once immediately with the
    current theme, then synchronously inside set() before the value is
    persisted.
    """

    def __init__(self, backend, key: str = PREFERENCE_KEY):
        self.backend = backend
        self.key = key
        self._listeners: List[Callable[[str], None]] = []
        try:
            raw = backend.read(key)
        except PersistenceUnavailable as e:
            logger.warning(f"Theme preference unavailable, using default: {e}")
            raw = None
        self._theme = parse_theme(raw)
        logger.info(f"Theme preference loaded: {self._theme}")

    def get(self) -> str:
        return self._theme

    @property
    def is_dark(self) -> bool:
        return self._theme == DARK

    def on_change(self, callback: Callable[[str], None]):
        self._listeners.append(callback)
        callback(self._theme)

    def set(self, theme: str) -> str:
        if theme not in THEMES:
            raise ValueError(f"Unknown theme: {theme!r}")
        self._theme = theme
        for callback in self._listeners:
            callback(theme)
        try:
            self.backend.write(self.key, encode_theme(theme))
        except PersistenceUnavailable as e:
            logger.warning(f"Theme preference not persisted, keeping in memory: {e}")
        return theme

    def toggle(self) -> str:
        return self.set(LIGHT if self._theme == DARK else DARK)


def create_backend(kind: str, redis_client: Optional[redis.Redis] = None, db_path: Optional[str] = None):
    """
    Build a backend by name ('sqlite', 'redis' or 'memory').

    'redis' needs a connected client; without one it falls back to memory.
    """
    kind = (kind or "sqlite").lower()
    if kind == "memory":
        return MemoryBackend()
    if kind == "redis":
        if redis_client is None:
            logger.warning("Redis preference backend requested without Redis, using memory")
            return MemoryBackend()
        return RedisBackend(redis_client)
    if kind != "sqlite":
        logger.warning(f"Unknown preference backend '{kind}', using sqlite")
    return SQLiteBackend(db_path)
