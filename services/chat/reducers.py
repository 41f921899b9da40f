"""Pure state transitions for the chat client.

Every function takes a `ChatState` and returns a new one; nothing here
touches storage or the network.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Dict
from uuid import uuid4

from models.chat_models import WELCOME_CHAT_ID, ChatSession, ChatState, Message, SelectedFile, utcnow
from services.chat import messages as copy
from services.fallback_resolver import PREVIOUS_IMAGE_FIELDS

MAX_EXTRA_PREVIOUS_IMAGES = len(PREVIOUS_IMAGE_FIELDS) - 1


def new_id() -> str:
	return uuid4().hex


def greeting_message(chat_id: str) -> Message:
	return Message(id="1", chat_id=chat_id, role="assistant", content=copy.WELCOME_TEXT, should_have_image=False)


def welcome_session() -> ChatSession:
	return ChatSession(id=WELCOME_CHAT_ID, title="Welcome", messages=(greeting_message(WELCOME_CHAT_ID),))


def _activate(state: ChatState, session: ChatSession) -> ChatState:
	return replace(
		state,
		current_chat_id=session.id,
		messages=session.messages,
		last_generated_image=session.last_generated_image,
	)


def _update_session(state: ChatState, chat_id: str, change: Callable[[ChatSession], ChatSession]) -> ChatState:
	sessions = tuple(change(session) if session.id == chat_id else session for session in state.sessions)
	return replace(state, sessions=sessions)


def with_welcome(state: ChatState) -> ChatState:
	"""Replace the session list with the single welcome session."""
	session = welcome_session()
	return _activate(replace(state, sessions=(session,)), session)


def restore_sessions(state: ChatState, sessions) -> ChatState:
	"""Load persisted sessions and activate the last listed one."""
	sessions = tuple(sessions or ())
	if not sessions:
		return with_welcome(state)
	return _activate(replace(state, sessions=sessions), sessions[-1])


def add_message(state: ChatState, message: Message) -> ChatState:
	"""Append to the displayed list and, for a real session, to its history."""
	state = replace(state, messages=state.messages + (message,))
	if not state.in_real_session:
		return state
	return _update_session(
		state,
		state.current_chat_id,
		lambda session: replace(session, messages=session.messages + (message,), updated_at=utcnow()),
	)


def remove_message(state: ChatState, message_id: str) -> ChatState:
	"""Drop a message (the thinking placeholder) from the view and the active session."""
	state = replace(state, messages=tuple(m for m in state.messages if m.id != message_id))
	return _update_session(
		state,
		state.current_chat_id,
		lambda session: replace(session, messages=tuple(m for m in session.messages if m.id != message_id)),
	)


def select_file(state: ChatState, file: SelectedFile) -> ChatState:
	"""Attach a newly chosen image, to the active chat or to a brand new one."""
	if not file.is_image:
		return replace(state, error=copy.INVALID_FILE_ERROR)

	state = replace(state, selected_file=file, error=None)
	url = file.preview_url

	if state.in_real_session:
		chat_id = state.current_chat_id
		state = add_message(state, _upload_message(chat_id, file, url, existing_chat=True))
		state = add_message(state, _prompt_request_message(chat_id, existing_chat=True))
		return _update_session(
			state, chat_id, lambda session: replace(session, initial_image=url, updated_at=utcnow())
		)

	chat_id = new_id()
	session = ChatSession(
		id=chat_id,
		title=f"Chat {len(state.sessions) + 1}",
		initial_image=url,
		messages=(
			_upload_message(chat_id, file, url, existing_chat=False),
			_prompt_request_message(chat_id, existing_chat=False),
		),
	)
	return _activate(replace(state, sessions=state.sessions + (session,)), session)


def _upload_message(chat_id: str, file: SelectedFile, url: str, existing_chat: bool) -> Message:
	return Message(
		id=new_id(),
		chat_id=chat_id,
		role="user",
		content=copy.upload_text(file.filename, existing_chat),
		image=url,
		is_image_upload=True,
	)


def _prompt_request_message(chat_id: str, existing_chat: bool) -> Message:
	return Message(id=new_id(), chat_id=chat_id, role="assistant", content=copy.prompt_request_text(existing_chat))


def start_new_chat(state: ChatState) -> ChatState:
	"""Append an empty chat with the greeting and make it active."""
	chat_id = new_id()
	session = ChatSession(
		id=chat_id,
		title=f"Chat {len(state.sessions) + 1}",
		messages=(greeting_message(chat_id),),
	)
	state = _activate(replace(state, sessions=state.sessions + (session,)), session)
	return replace(state, selected_file=None, last_generated_image=None, error=None)


def switch_chat(state: ChatState, chat_id: str) -> ChatState:
	session = state.find_session(chat_id)
	if session is None:
		return state
	return _activate(state, session)


def request_delete(state: ChatState, chat_id: str) -> ChatState:
	if len(state.sessions) == 1:
		return replace(state, error=copy.LAST_SESSION_ERROR)
	if state.find_session(chat_id) is None:
		return state
	return replace(state, pending_delete=chat_id)


def confirm_delete(state: ChatState) -> ChatState:
	"""Remove the session awaiting confirmation; re-home the view if it was active."""
	chat_id = state.pending_delete
	if chat_id is None:
		return state

	state = replace(
		state,
		sessions=tuple(s for s in state.sessions if s.id != chat_id),
		pending_delete=None,
		error=None,
	)
	if chat_id != state.current_chat_id:
		return state
	if state.sessions:
		return _activate(state, state.sessions[-1])
	return start_new_chat(state)


def cancel_delete(state: ChatState) -> ChatState:
	return replace(state, pending_delete=None)


def request_clear_all(state: ChatState) -> ChatState:
	if len(state.sessions) <= 1:
		return replace(state, error=copy.NOTHING_TO_CLEAR_ERROR)
	return replace(state, pending_clear_all=True)


def confirm_clear_all(state: ChatState) -> ChatState:
	"""Keep only the active session."""
	if not state.pending_clear_all:
		return state
	state = replace(state, pending_clear_all=False)
	current = state.current_session
	if current is None:
		return state
	return replace(state, sessions=(current,), error=None)


def cancel_clear_all(state: ChatState) -> ChatState:
	return replace(state, pending_clear_all=False)


def previous_image_fields(state: ChatState) -> Dict[str, str]:
	"""Build the previous-image form fields for the next request.

	`previousImage` carries the last generated image. Older generated images
	from the active session follow as previousImage1..3, most recent first,
	skipping the newest one, unless a new file is being added to a chat that
	already has more than two messages.
	"""
	fields: Dict[str, str] = {}
	if state.last_generated_image:
		fields[PREVIOUS_IMAGE_FIELDS[0]] = state.last_generated_image

	session = state.current_session
	adding_to_active_chat = (
		state.selected_file is not None
		and state.current_chat_id != WELCOME_CHAT_ID
		and session is not None
		and len(session.messages) > 2
	)
	if adding_to_active_chat or session is None:
		return fields

	generated = [m.image for m in session.messages if m.image and not m.is_image_upload]
	generated.reverse()
	for index, url in enumerate(generated[1 : 1 + MAX_EXTRA_PREVIOUS_IMAGES], start=1):
		filename = url.rsplit("/", 1)[-1]
		if filename:
			fields[PREVIOUS_IMAGE_FIELDS[index]] = filename
	return fields


def needs_upload(state: ChatState) -> bool:
	"""True when neither a selected file nor an earlier generated image is available."""
	return state.selected_file is None and not state.last_generated_image


def request_upload(state: ChatState, prompt: str) -> ChatState:
	"""Record the prompt and ask the user to upload an image first."""
	chat_id = state.current_chat_id
	state = add_message(state, Message(id=new_id(), chat_id=chat_id, role="user", content=prompt))
	return add_message(
		state, Message(id=new_id(), chat_id=chat_id, role="assistant", content=copy.UPLOAD_GUIDANCE_TEXT)
	)


def thinking_message(state: ChatState) -> Message:
	return Message(
		id=new_id(),
		chat_id=state.current_chat_id,
		role="assistant",
		content=copy.thinking_text(state.selected_file is not None),
	)


def begin_generation(state: ChatState, prompt: str, placeholder: Message) -> ChatState:
	"""Append the user's prompt and the thinking placeholder; mark the request in flight."""
	state = add_message(state, Message(id=new_id(), chat_id=state.current_chat_id, role="user", content=prompt))
	state = add_message(state, placeholder)
	return replace(state, is_loading=True, error=None)


def apply_generation(state: ChatState, placeholder_id: str, response: Dict[str, Any]) -> ChatState:
	"""Swap the placeholder for the result message and remember the generated image."""
	state = remove_message(state, placeholder_id)
	result = Message(
		id=new_id(),
		chat_id=state.current_chat_id,
		role="assistant",
		content=copy.result_text(response),
		image=response.get("geminiImageUrl"),
		response_prompt_data=response.get("responsePromptData"),
		should_have_image=True,
	)
	state = add_message(state, result)

	generated_path = response.get("geminiImagePath")
	state = replace(state, last_generated_image=generated_path, is_loading=False)
	if state.in_real_session:
		state = _update_session(
			state,
			state.current_chat_id,
			lambda session: replace(session, last_generated_image=generated_path, updated_at=utcnow()),
		)
	return state


def apply_failure(state: ChatState, placeholder_id: str) -> ChatState:
	"""Swap the placeholder for the apology message and raise the error banner."""
	state = remove_message(state, placeholder_id)
	apology = Message(
		id=new_id(),
		chat_id=state.current_chat_id,
		role="assistant",
		content=copy.APOLOGY_TEXT,
		should_have_image=False,
	)
	state = add_message(state, apology)
	return replace(state, error=copy.GENERATION_FAILED_ERROR, is_loading=False)
