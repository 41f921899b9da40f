"""Stand-ins for the google-genai async client used by the handler tests."""

from types import SimpleNamespace
from typing import Any, List, Optional

GENERATED_BYTES = b"\x89PNG\r\n\x1a\nfake-generated-image"


def text_part(text: str) -> SimpleNamespace:
    return SimpleNamespace(text=text, inline_data=None)


def image_part(data: Any, mime_type: str = "image/png") -> SimpleNamespace:
    return SimpleNamespace(text=None, inline_data=SimpleNamespace(data=data, mime_type=mime_type))


def generation_response(parts: Optional[List[SimpleNamespace]]) -> SimpleNamespace:
    content = SimpleNamespace(parts=parts)
    return SimpleNamespace(candidates=[SimpleNamespace(content=content)])


class FakeModels:
    """Stands in for `client.aio.models`; text calls get a string, image calls get `image_response`."""

    def __init__(self, image_response: Any, error: Optional[Exception] = None) -> None:
        self.image_response = image_response
        self.error = error
        self.calls: List[dict] = []

    async def generate_content(self, *, model: str, contents: Any, config: Any = None) -> Any:
        self.calls.append({"model": model, "contents": contents})
        if self.error is not None:
            raise self.error
        if isinstance(contents, str):
            return SimpleNamespace(text="An enhanced, cinematic description.")
        return self.image_response


class FakeGenaiClient:
    def __init__(self, image_response: Any = None, error: Optional[Exception] = None) -> None:
        if image_response is None:
            image_response = generation_response([text_part("Here it is. "), image_part(GENERATED_BYTES)])
        self.models = FakeModels(image_response, error)
        self.aio = SimpleNamespace(models=self.models)
