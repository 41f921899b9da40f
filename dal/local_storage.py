"""Async key/value store backed by a SQLite file.

Plays the role of browser local storage for the chat client: string keys
mapped to string values, nothing else.
"""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

import aiosqlite


class LocalStorage:
    """
    Manage the key/value SQLite file used by the chat client.

    - The file is taken from the constructor argument, falling back to the
      CHAT_STORAGE_PATH environment variable and then ./chat_storage.db.
    - The parent directory and the STORAGE table are created on first use.
      Existing data is always kept.
    """

    def __init__(self, db_path: Optional[Path | str] = None) -> None:
        if db_path is None:
            db_path = os.getenv("CHAT_STORAGE_PATH") or "chat_storage.db"
        self.db_path = Path(db_path).expanduser()
        self._initialized = False

    async def ensure_database(self) -> None:
        """Create the STORAGE table if it is missing. Later calls are no-ops."""
        if self._initialized:
            return

        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except Exception as exc:
            raise RuntimeError(f"Failed to create or access storage directory at {self.db_path.parent}") from exc

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                CREATE TABLE IF NOT EXISTS STORAGE (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
            await db.commit()

        self._initialized = True

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[aiosqlite.Connection]:
        await self.ensure_database()
        conn = await aiosqlite.connect(self.db_path)
        try:
            yield conn
        finally:
            await conn.close()

    async def get_item(self, key: str) -> Optional[str]:
        """Return the value stored under `key`, or None."""
        async with self.connection() as conn:
            cur = await conn.execute("SELECT value FROM STORAGE WHERE key = ?", (key,))
            row = await cur.fetchone()
            return row[0] if row else None

    async def set_item(self, key: str, value: str) -> None:
        async with self.connection() as conn:
            await conn.execute(
                "INSERT INTO STORAGE (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )
            await conn.commit()
