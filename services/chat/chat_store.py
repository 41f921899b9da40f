"""Snapshot store for the chat client."""

from __future__ import annotations

from typing import Any, Callable, List, Optional

from dal.chat_session_dal import ChatSessionDAL
from models.chat_models import ChatSession, ChatState


class ChatSessionStore:
	"""Hold the current `ChatState` and mirror its session list to storage.

	State only changes through `update`, which applies a pure transition and
	then persists the session list whenever the transition produced a new one.
	"""

	def __init__(self, dal: ChatSessionDAL, state: Optional[ChatState] = None) -> None:
		self._dal = dal
		self._state = state or ChatState()

	@property
	def state(self) -> ChatState:
		return self._state

	async def load_persisted(self) -> Optional[List[ChatSession]]:
		"""Read the stored session list; None when nothing was saved yet."""
		return await self._dal.load_sessions()

	async def update(self, transition: Callable[..., ChatState], *args: Any, **kwargs: Any) -> ChatState:
		"""Apply `transition(state, *args, **kwargs)` and persist the result."""
		previous = self._state
		self._state = transition(previous, *args, **kwargs)
		if self._state.sessions is not previous.sessions:
			await self._dal.save_sessions(self._state.sessions)
		return self._state
