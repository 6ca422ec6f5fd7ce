"""
score_db.py: SQLite key/value store backing the best score and games played.
"""

import sqlite3
from typing import Optional

from .constants import DB_FILE


class Database:
    """Handles all interaction with the SQLite database."""
    def __init__(self, db_file: str = DB_FILE):
        self.db_file = db_file
        self.conn = sqlite3.connect(db_file)
        self.cur = self.conn.cursor()
        self.setup()

    def setup(self):
        """Creates the settings table if it doesn't exist."""
        self.cur.execute("""
            CREATE TABLE IF NOT EXISTS Settings (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        """)
        self.conn.commit()

    def get(self, key: str) -> Optional[str]:
        """Returns the stored string for key, or None."""
        self.cur.execute("SELECT value FROM Settings WHERE key=?", (key,))
        row = self.cur.fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str):
        self.cur.execute(
            "INSERT INTO Settings (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value=excluded.value", (key, value))
        self.conn.commit()

    def close(self):
        self.conn.close()
