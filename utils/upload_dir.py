import logging
import os
from pathlib import Path
from typing import Optional

LOGGER = logging.getLogger(__name__)


class UploadDirectory:
    """
    Manage the directory holding uploaded and generated images.

    - The directory is taken from the constructor argument, falling back to
      the UPLOAD_DIR environment variable and then to ./uploads.
    - `ensure()` creates the directory if needed. Failures are logged and
      swallowed; a later write will surface the real problem.
    - `resolve()` maps a relative name to a path inside the directory and
      returns None for anything that would land outside of it.
    """

    def __init__(self, root: Optional[Path | str] = None) -> None:
        env_dir = os.getenv("UPLOAD_DIR")
        if root is None:
            root = env_dir if env_dir and env_dir.strip() else Path.cwd() / "uploads"

        self.root = Path(root).expanduser().resolve()

    def ensure(self) -> None:
        """Create the upload directory; idempotent."""
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except Exception as exc:
            LOGGER.error("Error creating uploads directory %s: %s", self.root, exc)

    def resolve(self, name: str) -> Optional[Path]:
        """Return the absolute path for `name` or None if it escapes the root."""
        if not name:
            return None
        try:
            candidate = (self.root / name).resolve()
        except (ValueError, OSError):
            # Embedded NUL bytes and unresolvable names cannot exist on disk.
            return None
        if candidate == self.root or self.root not in candidate.parents:
            return None
        return candidate

    def exists(self, name: str) -> bool:
        """Return True when `name` is a regular file inside the directory."""
        path = self.resolve(name)
        return path is not None and path.is_file()

    def read_bytes(self, name: str) -> bytes:
        path = self.resolve(name)
        if path is None:
            raise FileNotFoundError(f"File not found: {name}")
        return path.read_bytes()

    def write_bytes(self, name: str, data: bytes) -> Path:
        path = self.resolve(name)
        if path is None:
            raise ValueError(f"Refusing to write outside the upload directory: {name}")
        path.write_bytes(data)
        return path
