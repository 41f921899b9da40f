"""Assistant copy used by the chat client."""

from __future__ import annotations

from typing import Any, Dict

WELCOME_TEXT = (
	"Hello! I'm your AI thumbnail assistant. I can help you create stunning thumbnails "
	"from your images. What would you like to create today?"
)
UPLOAD_GUIDANCE_TEXT = (
	"I'd love to help you create that thumbnail! First, please upload an image by clicking "
	"the upload button below."
)
APOLOGY_TEXT = (
	"I'm sorry, I encountered an error while generating your thumbnail. Please try again "
	"or let me know if you need help."
)

INVALID_FILE_ERROR = "Please select a valid image file"
GENERATION_FAILED_ERROR = "Failed to generate thumbnail. Please try again."
LAST_SESSION_ERROR = "Cannot delete the last chat session. Please create a new one first."
NOTHING_TO_CLEAR_ERROR = "No additional chats to clear."


def upload_text(filename: str, existing_chat: bool) -> str:
	"""Return the user's upload announcement."""
	if existing_chat:
		return f"I've uploaded a new image: {filename}"
	return f"I've uploaded an image: {filename}"


def prompt_request_text(existing_chat: bool) -> str:
	"""Return the assistant's request for a transformation description."""
	subject = "your new image" if existing_chat else "your image"
	return (
		f"Great! I can see {subject}. Now, please describe how you'd like me to transform it "
		"into a thumbnail. Be specific about colors, style, text placement, and overall mood."
	)


def thinking_text(has_new_file: bool) -> str:
	if has_new_file:
		return "Perfect! I'm analyzing your image and prompt. Let me create something amazing for you..."
	return "Great! I'm working with your previous image and prompt. Let me create something amazing for you..."


def result_text(response: Dict[str, Any]) -> str:
	"""Summarise a generation response for the chat transcript."""
	uploaded = response.get("uploadedImageUrl")
	used = response.get("usedPreviousImage")
	used_note = f" (Used previous image: {used})" if used else ""
	if response.get("geminiImageUrl"):
		return (
			"🎉 Here's your generated thumbnail! I've created it based on your description. "
			f"The original image is available at: {uploaded}{used_note}"
		)
	return (
		"I've processed your request, but I wasn't able to generate an image this time. "
		"Please try again with a different prompt or image. "
		f"The original image is available at: {uploaded}{used_note}"
	)
