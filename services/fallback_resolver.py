"""Pick the previously generated image to reuse as generation input."""

from __future__ import annotations

from typing import Callable, Iterable, Optional, Sequence

# Form fields carrying previous image filenames, highest priority first.
PREVIOUS_IMAGE_FIELDS: Sequence[str] = (
	"previousImage",
	"previousImage1",
	"previousImage2",
	"previousImage3",
)


def resolve_fallback(candidates: Iterable[Optional[str]], exists: Callable[[str], bool]) -> Optional[str]:
	"""Return the first non-empty candidate for which `exists` holds, else None."""
	for name in candidates:
		if name and exists(name):
			return name
	return None
