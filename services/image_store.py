"""Helpers for saving uploaded and generated images to the upload directory.

Filenames are derived from the millisecond timestamp of the request:
`upload_<ts>.<ext>` for the original upload and
`upload_<ts>_gemini-native-image.png` for the generated image. Files are
never removed by the application.
"""

from __future__ import annotations

import asyncio
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from utils.upload_dir import UploadDirectory

GENERATED_SUFFIX = "_gemini-native-image.png"
_EXTENSION_RE = re.compile(r"^[A-Za-z0-9]+$")


@dataclass(frozen=True)
class UploadNames:
    """Filenames reserved for one request."""

    upload: str
    generated: str


def upload_extension(filename: Optional[str]) -> str:
    """Return the extension of the client-supplied filename, defaulting to jpg."""
    suffix = Path(filename or "").suffix.lstrip(".")
    if not suffix or not _EXTENSION_RE.match(suffix):
        return "jpg"
    return suffix


def reserve_names(filename: Optional[str], timestamp_ms: Optional[int] = None) -> UploadNames:
    """Build the upload and generated-image filenames for a request."""
    if timestamp_ms is None:
        timestamp_ms = time.time_ns() // 1_000_000
    base = f"upload_{timestamp_ms}"
    return UploadNames(upload=f"{base}.{upload_extension(filename)}", generated=f"{base}{GENERATED_SUFFIX}")


class ImageStore:
    """Async facade over `UploadDirectory` for the request handler."""

    def __init__(self, directory: UploadDirectory) -> None:
        self.directory = directory

    async def prepare(self) -> None:
        await asyncio.to_thread(self.directory.ensure)

    async def load(self, name: str) -> bytes:
        return await asyncio.to_thread(self.directory.read_bytes, name)

    async def save(self, name: str, data: bytes) -> Path:
        """Write `data` under `name` and return the absolute path.

        An empty upload is written as an empty file.

        Raises:
            OSError: If the file cannot be written.
        """
        return await asyncio.to_thread(self.directory.write_bytes, name, data)
