"""Local Asset Store — stores uploaded employee images on disk, returns reference paths.

Invariants:
    - References look like "<upload_dir>/<uuid hex>-<sanitized filename>" and are unique
    - Disallowed extension or oversize payload → DirectoryValidationError (caller's fault)
    - Filesystem failure → AssetStorageError (collaborator unavailable)
    - load() never reads outside upload_dir; unknown/foreign refs → ResourceNotFoundError

Design Decisions:
    - Blocking file IO pushed to a worker thread (asyncio.to_thread) so the loop stays free
    - Sanitized original name kept in the reference for operator readability
"""

import asyncio
import logging
import re
import uuid
from pathlib import Path

from employee_directory.core.errors import (
    AssetStorageError, DirectoryValidationError, ResourceNotFoundError,
)

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")
_MAX_NAME_LENGTH = 100


def sanitize_filename(filename: str) -> str:
    """Strip directories and unsafe characters from a client-supplied filename."""
    name = Path(filename or "").name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name[-_MAX_NAME_LENGTH:] or "image"


class LocalAssetStore:
    """Filesystem-backed AssetStore."""

    def __init__(
        self,
        upload_dir: str,
        max_bytes: int = 5 * 1024 * 1024,
        allowed_extensions: list[str] | None = None,
    ):
        self.upload_dir = Path(upload_dir)
        self.max_bytes = max_bytes
        self.allowed_extensions = {
            ext.lower() for ext in (allowed_extensions or [".jpg", ".jpeg", ".png"])
        }

    def check_upload(self, data: bytes, filename: str) -> None:
        """Reject uploads the directory will never accept."""
        extension = Path(filename or "").suffix.lower()
        if extension not in self.allowed_extensions:
            raise DirectoryValidationError(
                f"Image type not supported. Allowed: {', '.join(sorted(self.allowed_extensions))}",
                field="image",
            )
        if len(data) > self.max_bytes:
            raise DirectoryValidationError(
                f"Image too large. Maximum size: {self.max_bytes // (1024 * 1024)}MB",
                field="image",
            )
        if not data:
            raise DirectoryValidationError("Image file is empty", field="image")

    def _resolve(self, ref: str) -> Path:
        base = self.upload_dir.resolve()
        path = Path(ref).resolve()
        if base not in path.parents:
            raise ResourceNotFoundError("Image", ref)
        return path

    async def save(self, data: bytes, filename: str) -> str:
        self.check_upload(data, filename)
        ref = (self.upload_dir / f"{uuid.uuid4().hex}-{sanitize_filename(filename)}").as_posix()

        def _write() -> None:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            Path(ref).write_bytes(data)

        try:
            await asyncio.to_thread(_write)
        except OSError as e:
            raise AssetStorageError(str(e)) from e
        logger.info(f"Stored image {ref} ({len(data)} bytes)")
        return ref

    async def load(self, ref: str) -> bytes:
        path = self._resolve(ref)
        try:
            return await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError as e:
            raise ResourceNotFoundError("Image", ref) from e
        except OSError as e:
            raise AssetStorageError(str(e)) from e

    async def remove(self, ref: str) -> None:
        """Best-effort delete; a missing file is not an error."""
        try:
            path = self._resolve(ref)
            await asyncio.to_thread(path.unlink, True)
        except (ResourceNotFoundError, OSError) as e:
            logger.warning(f"Could not remove image {ref}: {e}")
