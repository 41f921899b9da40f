"""Controller driving the chat client: user actions in, store updates out."""

import logging
from typing import Optional

from models.chat_models import ChatState, SelectedFile
from services.chat import reducers
from services.chat.chat_store import ChatSessionStore
from services.chat.thumbnail_api import ThumbnailApiClient, ThumbnailApiError

LOGGER = logging.getLogger(__name__)


class ChatController:
    """Coordinate chat actions between the session store and the generation API."""

    def __init__(self, store: ChatSessionStore, api: ThumbnailApiClient) -> None:
        """Initialize the controller.

        Args:
            store: Session store whose DAL persists the session list.
            api: Client used to call POST /generate.
        """
        self.store = store
        self.api = api

    @property
    def state(self) -> ChatState:
        return self.store.state

    async def load(self) -> ChatState:
        """Restore persisted sessions, falling back to the welcome session."""
        try:
            sessions = await self.store.load_persisted()
        except Exception as exc:
            LOGGER.error("Error loading chat sessions: %s", exc)
            sessions = None
        return await self.store.update(reducers.restore_sessions, sessions)

    async def select_file(self, file: SelectedFile) -> ChatState:
        return await self.store.update(reducers.select_file, file)

    async def submit(self, prompt: str) -> ChatState:
        """Send the prompt for generation, or ask for an upload when there is no image yet.

        Failures never propagate: they become an apology message and an error banner.
        """
        if not prompt.strip():
            return self.state

        if reducers.needs_upload(self.state):
            return await self.store.update(reducers.request_upload, prompt)

        # Fallback names come from the history as it was before this prompt.
        previous_images = reducers.previous_image_fields(self.state)
        selected_file: Optional[SelectedFile] = self.state.selected_file

        placeholder = reducers.thinking_message(self.state)
        await self.store.update(reducers.begin_generation, prompt, placeholder)

        try:
            response = await self.api.generate(prompt, image=selected_file, previous_images=previous_images)
        except ThumbnailApiError as exc:
            LOGGER.error("Error generating thumbnail: %s", exc)
            return await self.store.update(reducers.apply_failure, placeholder.id)

        return await self.store.update(reducers.apply_generation, placeholder.id, response)

    async def new_chat(self) -> ChatState:
        return await self.store.update(reducers.start_new_chat)

    async def switch_chat(self, chat_id: str) -> ChatState:
        return await self.store.update(reducers.switch_chat, chat_id)

    async def request_delete(self, chat_id: str) -> ChatState:
        return await self.store.update(reducers.request_delete, chat_id)

    async def confirm_delete(self) -> ChatState:
        return await self.store.update(reducers.confirm_delete)

    async def cancel_delete(self) -> ChatState:
        return await self.store.update(reducers.cancel_delete)

    async def request_clear_all(self) -> ChatState:
        return await self.store.update(reducers.request_clear_all)

    async def confirm_clear_all(self) -> ChatState:
        return await self.store.update(reducers.confirm_clear_all)

    async def cancel_clear_all(self) -> ChatState:
        return await self.store.update(reducers.cancel_clear_all)
