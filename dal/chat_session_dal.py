"""Data access for the persisted chat session list.

The whole list is stored as one JSON document under `STORAGE_KEY`;
timestamps are written as ISO-8601 text and parsed back into datetimes.
"""

from __future__ import annotations

import json
import logging
from typing import List, Optional, Sequence

from dal.local_storage import LocalStorage
from models.chat_models import ChatSession

LOGGER = logging.getLogger(__name__)
STORAGE_KEY = "thumbnail-generator-chats"


def serialize_sessions(sessions: Sequence[ChatSession]) -> str:
    return json.dumps([session.to_dict() for session in sessions])


def deserialize_sessions(raw: str) -> List[ChatSession]:
    """Parse a stored session list.

    Raises:
        ValueError: If the document is not a JSON list of sessions.
    """
    try:
        payload = json.loads(raw)
        if not isinstance(payload, list):
            raise ValueError("Stored chat sessions must be a JSON list.")
        return [ChatSession.from_dict(item) for item in payload]
    except (KeyError, TypeError, OverflowError, OSError) as exc:
        raise ValueError(f"Malformed chat session entry: {exc}") from exc


class ChatSessionDAL:
    """Load and save the chat session list in local storage."""

    def __init__(self, storage: LocalStorage, key: str = STORAGE_KEY) -> None:
        self._storage = storage
        self.key = key

    async def load_sessions(self) -> Optional[List[ChatSession]]:
        """Return the stored sessions, or None when nothing was saved yet."""
        raw = await self._storage.get_item(self.key)
        if raw is None:
            return None
        return deserialize_sessions(raw)

    async def save_sessions(self, sessions: Sequence[ChatSession]) -> None:
        """Persist the session list. Storage failures are logged, not raised."""
        try:
            await self._storage.set_item(self.key, serialize_sessions(sessions))
        except Exception as exc:
            LOGGER.error("Error saving chat sessions: %s", exc)
