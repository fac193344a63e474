"""Storage backend for category directories on the local filesystem."""

import logging
import os
from typing import IO, Any, Final, final, override

from django.core.exceptions import SuspiciousFileOperation
from django.core.files.storage import FileSystemStorage

logger = logging.getLogger(__name__)

_CREATE_FLAGS: Final = (
    os.O_WRONLY | os.O_CREAT | os.O_EXCL | getattr(os, 'O_BINARY', 0)
)
_DEFAULT_FILE_MODE: Final = 0o666


@final
class FileStorage(FileSystemStorage):
    """Filesystem storage for one upload category.

    Extends Django's FileSystemStorage with:
    - Durable writes (flush and fsync before a save returns)
    - Cleanup of partially written files
    - Strict delete that reports missing files
    - Enhanced error logging
    """

    @override
    def save(
        self,
        name: str | None,
        content: Any,
        max_length: int | None = None,
    ) -> str:
        """Save file to disk with error handling and logging.

        Args:
            name: Requested file name inside the category directory.
            content: File content (Django File or UploadedFile).
            max_length: Optional maximum length for the filename.

        Returns:
            Actual name used (may differ from name if it was taken).

        Raises:
            OSError: If the write fails.
        """
        try:
            logger.info('Writing file to storage: %s', name)
            saved_name = super().save(name, content, max_length)
            logger.info('Successfully wrote file: %s', saved_name)
        except Exception:
            logger.exception('Failed to write file to storage: %s', name)
            raise
        else:
            return saved_name

    @override
    def _save(self, name: str, content: Any) -> str:
        """Create the file exclusively and stream content into it.

        A name that appears between ``get_available_name`` and the
        exclusive open is replaced with another available name.

        Args:
            name: Available file name.
            content: File content exposing ``chunks()``.

        Returns:
            Name of the written file.
        """
        full_path = self.path(name)
        os.makedirs(os.path.dirname(full_path), exist_ok=True)
        file_mode = self.file_permissions_mode or _DEFAULT_FILE_MODE

        fd = None
        while fd is None:
            try:
                fd = os.open(full_path, _CREATE_FLAGS, file_mode)
            except FileExistsError:
                name = self.get_available_name(name)
                full_path = self.path(name)

        try:
            with os.fdopen(fd, 'wb') as destination:
                _copy_chunks(content, destination)
        except Exception:
            self.rollback_upload(name)
            raise
        return name

    @override
    def delete(self, name: str) -> None:
        """Delete file from disk with error handling and logging.

        Unlike the base class, a missing file is reported to the caller.

        Args:
            name: Name of file to delete.

        Raises:
            FileNotFoundError: If the file does not exist.
            SuspiciousFileOperation: If the name escapes the directory.
            OSError: If the delete fails.
        """
        try:
            logger.info('Deleting file from storage: %s', name)
            os.remove(self.path(name))
            logger.info('Successfully deleted file: %s', name)
        except (FileNotFoundError, IsADirectoryError):
            logger.warning('File not found in storage: %s', name)
            raise
        except SuspiciousFileOperation:
            logger.warning('Refusing to delete outside storage: %s', name)
            raise
        except Exception:
            logger.exception('Failed to delete file from storage: %s', name)
            raise

    def rollback_upload(self, name: str) -> None:
        """Delete a written or partially written file.

        Called when a write fails midway or when a later step of the
        operation that wrote the file fails. This is a best-effort
        operation, if deletion fails the error is logged but not raised
        so the original error reaches the caller.

        Args:
            name: Name of file to delete.
        """
        try:
            logger.warning('Rolling back upload, deleting file: %s', name)
            self.delete(name)
            logger.info('Successfully rolled back file upload: %s', name)
        except Exception:
            logger.exception(
                'Failed to rollback upload, orphaned file: %s',
                name,
            )


def _copy_chunks(content: Any, destination: IO[bytes]) -> None:
    """Copy every chunk of content and force it to disk."""
    for chunk in content.chunks():
        destination.write(chunk)
    destination.flush()
    os.fsync(destination.fileno())
