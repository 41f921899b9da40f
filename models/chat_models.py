"""Chat domain models for the thumbnail chat client.

All models are frozen; state changes produce new instances. The
`to_dict`/`from_dict` pairs use the camelCase keys of the persisted
session list.
"""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

WELCOME_CHAT_ID = "welcome"


def utcnow() -> datetime:
	return datetime.now(timezone.utc)


def _parse_timestamp(value: Any) -> datetime:
	"""Turn a persisted timestamp back into a datetime."""
	if isinstance(value, datetime):
		return value
	if isinstance(value, (int, float)):
		return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
	return datetime.fromisoformat(str(value))


@dataclass(frozen=True)
class Message:
	"""One chat entry, displayed in insertion order."""

	id: str
	chat_id: str
	role: str
	content: str
	timestamp: datetime = field(default_factory=utcnow)
	image: Optional[str] = None
	is_image_upload: bool = False
	response_prompt_data: Optional[str] = None
	should_have_image: Optional[bool] = None

	def to_dict(self) -> Dict[str, Any]:
		data: Dict[str, Any] = {
			"id": self.id,
			"chatId": self.chat_id,
			"role": self.role,
			"content": self.content,
			"timestamp": self.timestamp.isoformat(),
		}
		if self.image is not None:
			data["image"] = self.image
		if self.is_image_upload:
			data["isImageUpload"] = True
		if self.response_prompt_data is not None:
			data["responsePromptData"] = self.response_prompt_data
		if self.should_have_image is not None:
			data["shouldHaveImage"] = self.should_have_image
		return data

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "Message":
		return cls(
			id=str(data["id"]),
			chat_id=str(data.get("chatId", "")),
			role=data["role"],
			content=data.get("content", ""),
			timestamp=_parse_timestamp(data["timestamp"]),
			image=data.get("image"),
			is_image_upload=bool(data.get("isImageUpload", False)),
			response_prompt_data=data.get("responsePromptData"),
			should_have_image=data.get("shouldHaveImage"),
		)


@dataclass(frozen=True)
class ChatSession:
	"""A persisted conversation thread with its remembered images."""

	id: str
	title: str
	initial_image: str = ""
	last_generated_image: Optional[str] = None
	messages: Tuple[Message, ...] = ()
	created_at: datetime = field(default_factory=utcnow)
	updated_at: datetime = field(default_factory=utcnow)

	def to_dict(self) -> Dict[str, Any]:
		data: Dict[str, Any] = {
			"id": self.id,
			"title": self.title,
			"initialImage": self.initial_image,
			"messages": [message.to_dict() for message in self.messages],
			"createdAt": self.created_at.isoformat(),
			"updatedAt": self.updated_at.isoformat(),
		}
		if self.last_generated_image is not None:
			data["lastGeneratedImage"] = self.last_generated_image
		return data

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> "ChatSession":
		return cls(
			id=str(data["id"]),
			title=data.get("title", ""),
			initial_image=data.get("initialImage") or "",
			last_generated_image=data.get("lastGeneratedImage"),
			messages=tuple(Message.from_dict(item) for item in data.get("messages", [])),
			created_at=_parse_timestamp(data["createdAt"]),
			updated_at=_parse_timestamp(data["updatedAt"]),
		)


@dataclass(frozen=True)
class SelectedFile:
	"""An image picked by the user, held until the next request."""

	filename: str
	content_type: str
	data: bytes
	path: Optional[Path] = None

	@classmethod
	def from_path(cls, path: Path | str) -> "SelectedFile":
		path = Path(path)
		content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
		return cls(filename=path.name, content_type=content_type, data=path.read_bytes(), path=path.resolve())

	@property
	def is_image(self) -> bool:
		return self.content_type.lower().startswith("image/")

	@property
	def preview_url(self) -> str:
		"""Local reference shown in the upload message."""
		if self.path is not None:
			return self.path.as_uri()
		return self.filename


@dataclass(frozen=True)
class ChatState:
	"""Snapshot of everything the chat view needs.

	`messages` is the displayed list for the active chat. For the welcome
	sentinel it is not backed by any entry in `sessions`.
	"""

	sessions: Tuple[ChatSession, ...] = ()
	current_chat_id: str = ""
	messages: Tuple[Message, ...] = ()
	last_generated_image: Optional[str] = None
	selected_file: Optional[SelectedFile] = None
	error: Optional[str] = None
	is_loading: bool = False
	pending_delete: Optional[str] = None
	pending_clear_all: bool = False

	def find_session(self, chat_id: str) -> Optional[ChatSession]:
		for session in self.sessions:
			if session.id == chat_id:
				return session
		return None

	@property
	def current_session(self) -> Optional[ChatSession]:
		return self.find_session(self.current_chat_id)

	@property
	def in_real_session(self) -> bool:
		return bool(self.current_chat_id) and self.current_chat_id != WELCOME_CHAT_ID
