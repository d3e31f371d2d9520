"""
Avatar file storage.

Profile pictures are written to the uploads directory and served by the
/uploads static mount.

Dependencies: None
System role: Profile image persistence
"""

import logging
import re
import time
from pathlib import Path

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


class AvatarStore:
    """Writes uploaded profile pictures under a base directory."""

    def __init__(self, base_dir: str | Path, url_prefix: str = "/uploads") -> None:
        self._base_dir = Path(base_dir)
        self._url_prefix = url_prefix.rstrip("/")

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    @staticmethod
    def stored_name(original_name: str | None) -> str:
        """<epoch-ms>-<name> with path separators and odd characters removed."""
        name = _UNSAFE_CHARS.sub("_", Path(original_name or "avatar").name) or "avatar"
        return f"{int(time.time() * 1000)}-{name}"

    def save(self, original_name: str | None, content: bytes) -> str:
        """
        Write an avatar to disk.

        Args:
            original_name: Client-supplied file name
            content: File bytes

        Returns:
            str: Public path of the stored file (e.g. /uploads/1700000000000-me.png)
        """
        self._base_dir.mkdir(parents=True, exist_ok=True)
        filename = self.stored_name(original_name)
        (self._base_dir / filename).write_bytes(content)
        logger.info("Stored avatar", extra={"avatar_file": filename, "size": len(content)})
        return f"{self._url_prefix}/{filename}"
