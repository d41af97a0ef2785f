"""
Local File Store

Uploaded media (person face images) lives on the local filesystem under
UPLOAD_DIR. Stored paths are relative to that root:

    UPLOAD_DIR/images/faces/people/3f2c9a...e1.jpg
               └──────────── stored path ─────────┘

Every file gets a fresh UUID name, so a replaced image never overwrites the
one still referenced by the committed row.

Saving and deleting happen outside the database transaction. Callers save
first, write the path in a transaction, and delete the superseded file
after commit (or the new file if the transaction failed).
"""

import uuid
from pathlib import Path

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from access_control.config.settings import settings
from access_control.core.exceptions import StorageError, ValidationError
from access_control.core.logging import logger


class LocalFileStore:
    """Saves and removes files below a base directory."""

    def __init__(
        self,
        base_dir: str | Path | None = None,
        allowed_extensions: list[str] | None = None,
        max_bytes: int | None = None,
    ) -> None:
        self.base_dir = Path(base_dir or settings.UPLOAD_DIR)
        self.allowed_extensions = [
            ext.lower() for ext in (allowed_extensions or settings.ALLOWED_IMAGE_EXTENSIONS)
        ]
        self.max_bytes = max_bytes or settings.MAX_FACE_IMAGE_BYTES

    def _validate(self, filename: str | None, size: int) -> str:
        extension = Path(filename or "").suffix.lower()
        if extension not in self.allowed_extensions:
            raise ValidationError(
                message=(
                    f"Unsupported file type '{extension or filename}'. "
                    f"Allowed: {', '.join(self.allowed_extensions)}"
                ),
                field="face_image",
            )
        if size == 0:
            raise ValidationError(message="Uploaded file is empty", field="face_image")
        if size > self.max_bytes:
            raise ValidationError(
                message=f"File exceeds the {self.max_bytes} byte limit",
                field="face_image",
            )
        return extension

    async def save(self, upload: UploadFile, folder: str) -> str:
        """
        Store an uploaded file under folder with a generated name.

        Args:
            upload: Incoming multipart file
            folder: Folder relative to the base directory

        Returns:
            Path of the stored file, relative to the base directory

        Raises:
            ValidationError: Wrong extension, empty, or too large
            StorageError: The file could not be written
        """
        content = await upload.read()
        extension = self._validate(upload.filename, len(content))

        relative_path = Path(folder) / f"{uuid.uuid4()}{extension}"
        target = self.base_dir / relative_path

        try:
            await run_in_threadpool(target.parent.mkdir, parents=True, exist_ok=True)
            await run_in_threadpool(target.write_bytes, content)
        except OSError as e:
            logger.error("Failed to store file", path=str(target), error=str(e))
            raise StorageError(details={"path": str(relative_path)}) from e

        logger.info("Stored file", path=relative_path.as_posix(), size=len(content))
        return relative_path.as_posix()

    async def delete(self, path: str) -> bool:
        """
        Remove a stored file.

        Cleanup is best effort: a missing or unremovable file is logged and
        reported as False, never raised.
        """
        target = self.base_dir / path
        try:
            await run_in_threadpool(target.unlink)
        except FileNotFoundError:
            logger.warning("Stored file already removed", path=path)
            return False
        except OSError as e:
            logger.warning("Failed to remove stored file", path=path, error=str(e))
            return False
        return True
