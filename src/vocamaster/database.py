import sqlite3
import os
from .config import settings


def get_db_connection():
    """Establishes a connection to the SQLite database."""
    db_path = os.path.join(settings.DB_DIR, settings.DB_FILE)
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def create_log_table():
    """Creates the log table if it doesn't exist."""
    conn = get_db_connection()
    with conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS logs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                timestamp DATETIME DEFAULT CURRENT_TIMESTAMP,
                level TEXT,
                message TEXT
            );
        """
        )
    conn.close()


def create_kv_table():
    """Creates the key/value table that holds whole-structure snapshots."""
    conn = get_db_connection()
    with conn:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at DATETIME DEFAULT CURRENT_TIMESTAMP
            );
        """
        )
    conn.close()


def init_db():
    """Initializes the database and creates necessary tables."""
    if not os.path.exists(settings.DB_DIR):
        os.makedirs(settings.DB_DIR, exist_ok=True)
    create_log_table()
    create_kv_table()


def read_value(key: str):
    """Returns the raw value stored under ``key``, or None."""
    conn = get_db_connection()
    try:
        row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
    finally:
        conn.close()
    return row["value"] if row else None


def write_value(key: str, value: str):
    """Overwrites the value stored under ``key``."""
    conn = get_db_connection()
    with conn:
        conn.execute(
            "INSERT INTO kv_store (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value, "
            "updated_at = CURRENT_TIMESTAMP",
            (key, value),
        )
    conn.close()
