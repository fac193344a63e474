"""Exceptions for files app."""

from http import HTTPStatus


class FilesError(Exception):
    """Base class for errors that end a file request."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR


class InvalidFileError(FilesError):
    """Raised when an upload is missing or rejected by its category policy."""

    status_code = HTTPStatus.BAD_REQUEST


class AssetNotFoundError(FilesError):
    """Raised when an operation targets a name absent from its category."""

    status_code = HTTPStatus.NOT_FOUND

    def __init__(self, category: str, name: str) -> None:
        """Initialize AssetNotFoundError.

        Args:
            category: Category slug that was searched.
            name: Requested file name.
        """
        self.category = category
        self.name = name
        super().__init__(f'File not found: {name}')


class StorageFailureError(FilesError):
    """Raised when the filesystem fails to read, write, delete or list."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
