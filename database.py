"""
Database module for the persisted theme preference.

This module provides SQLite-based storage for a single key/value table.
It's isolated from the rest of the app - if a database operation fails the
preference store keeps working in memory (see preferences.py).

Production database location: /var/lib/emergency-master/emergency_master.db
Development fallback: ./emergency_master.db (next to this module)
"""

import sqlite3
import os
import logging
from contextlib import contextmanager
from typing import Optional, Dict, Any

# Configure logging
logger = logging.getLogger(__name__)

# Database configuration
DB_DIR = os.getenv('EMERGENCY_MASTER_DB_DIR', '/var/lib/emergency-master')
DB_NAME = 'emergency_master.db'
DB_PATH = os.path.join(DB_DIR, DB_NAME)

# Fallback to the module directory if the production path doesn't exist
if not os.path.exists(DB_DIR):
    logger.warning(f"Production DB directory {DB_DIR} doesn't exist, using fallback")
    DB_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), DB_NAME)
    logger.info(f"Using fallback database path: {DB_PATH}")


@contextmanager
def get_db_connection(db_path: Optional[str] = None):
    """
    Context manager for database connections.
    Commits on success, rolls back on error, always closes.

    Usage:
        with get_db_connection() as conn:
            conn.execute(...)
    """
    conn = None
    try:
        conn = sqlite3.connect(db_path or DB_PATH, timeout=10.0)
        conn.row_factory = sqlite3.Row  # Enable column access by name
        yield conn
        conn.commit()
    except Exception as e:
        if conn:
            conn.rollback()
        logger.error(f"Database error: {e}")
        raise
    finally:
        if conn:
            conn.close()


def init_db(db_path: Optional[str] = None) -> bool:
    """
    Initialize the database with the preferences table.
    Safe to call multiple times - uses IF NOT EXISTS.

    Returns:
        bool: True if successful, False if error occurred
    """
    path = db_path or DB_PATH
    try:
        db_dir = os.path.dirname(path)
        if db_dir and not os.path.exists(db_dir):
            try:
                os.makedirs(db_dir, mode=0o755)
                logger.info(f"Created database directory: {db_dir}")
            except PermissionError:
                logger.error(f"Permission denied creating {db_dir}")
                return False

        with get_db_connection(path) as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS preferences (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

        logger.info(f"Database initialized successfully at {path}")
        return True

    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        return False


def get_preference(key: str, db_path: Optional[str] = None) -> Optional[str]:
    """
    Read a raw preference value.

    Args:
        key: Preference record name

    Returns:
        The stored string, or None if the key has never been written

    Raises:
        sqlite3.Error: if the database cannot be read
    """
    with get_db_connection(db_path) as conn:
        row = conn.execute(
            "SELECT value FROM preferences WHERE key = ?", (key,)
        ).fetchone()
    return row['value'] if row else None


def save_preference(key: str, value: str, db_path: Optional[str] = None) -> None:
    """
    Insert or replace a preference value.

    Raises:
        sqlite3.Error: if the database cannot be written
    """
    with get_db_connection(db_path) as conn:
        conn.execute("""
            INSERT INTO preferences (key, value, updated_at)
            VALUES (?, ?, CURRENT_TIMESTAMP)
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                updated_at = CURRENT_TIMESTAMP
        """, (key, value))
    logger.debug(f"Saved preference '{key}'")


def get_database_stats(db_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Get database statistics for the health endpoint.

    Returns:
        Dictionary with database stats
    """
    path = db_path or DB_PATH
    try:
        with get_db_connection(path) as conn:
            total = conn.execute("SELECT COUNT(*) as total FROM preferences").fetchone()['total']

        db_size = os.path.getsize(path) if os.path.exists(path) else 0
        return {
            'database_path': path,
            'database_size_kb': round(db_size / 1024, 1),
            'total_preferences': total,
            'initialized': True
        }

    except Exception as e:
        logger.error(f"Failed to get database stats: {e}")
        return {
            'database_path': path,
            'initialized': False,
            'error': str(e)
        }
