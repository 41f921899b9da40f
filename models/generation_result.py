from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class GenerationResult:
    """Outcome of one thumbnail request.

    Attributes:
        uploaded_image_url: Servable URL of the saved upload.
        uploaded_image_path: Absolute disk path of the saved upload.
        gemini_image_url: Absolute URL of the generated image, None when no image was produced.
        gemini_image_path: Filename of the generated image under the upload directory, or None.
        used_previous_image: Fallback filename used as generation input, if any.
        response_prompt_data: Concatenated narrative text returned by the image model.
    """

    uploaded_image_url: str
    uploaded_image_path: str
    gemini_image_url: Optional[str] = None
    gemini_image_path: Optional[str] = None
    used_previous_image: Optional[str] = None
    response_prompt_data: str = ""

    def to_response(self) -> Dict[str, Any]:
        """Render the JSON body returned by POST /generate."""
        return {
            "success": True,
            "thumbnailUrl": "",
            "uploadedImageUrl": self.uploaded_image_url,
            "uploadedImagePath": self.uploaded_image_path,
            "geminiImageUrl": self.gemini_image_url,
            "geminiImagePath": self.gemini_image_path,
            "usedPreviousImage": self.used_previous_image,
            "responsePromptData": self.response_prompt_data,
            "message": "Thumbnail generated successfully",
        }
