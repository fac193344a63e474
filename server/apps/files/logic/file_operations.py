"""Business logic for stored asset operations."""

import logging
import os
from typing import Any

from django.core.exceptions import SuspiciousFileOperation
from django.core.files.base import File as DjangoFile
from django.core.files.uploadedfile import UploadedFile

from server.apps.files.exceptions import (
    AssetNotFoundError,
    InvalidFileError,
    StorageFailureError,
)
from server.apps.files.infrastructure.storage import FileStorage
from server.apps.files.logic.policy import (
    generate_name,
    get_policies,
    validate_size,
    validate_upload,
)
from server.apps.files.models import CategoryPolicy, StoredAsset

logger = logging.getLogger(__name__)


def _get_storage(policy: CategoryPolicy) -> FileStorage:
    """Get the storage backend rooted at a category directory.

    Args:
        policy: Category whose directory is used.

    Returns:
        FileStorage instance for the category.
    """
    return FileStorage(location=policy.directory)


def ensure_category_directories() -> None:
    """Create every configured category directory if absent."""
    for policy in get_policies():
        os.makedirs(policy.directory, exist_ok=True)
        logger.debug(
            'Storage directory ensured for %s at %s',
            policy.slug,
            policy.directory,
        )


def upload_file(
    policy: CategoryPolicy,
    uploaded_file: UploadedFile | None,
) -> StoredAsset:
    """Validate an upload and store it under a generated name.

    Args:
        policy: Category the file is uploaded to.
        uploaded_file: File taken from the multipart request, if any.

    Returns:
        The stored asset.

    Raises:
        InvalidFileError: If the file is missing or rejected by the policy.
        StorageFailureError: If writing to disk fails.
    """
    uploaded_file = _require_valid_upload(policy, uploaded_file)
    name = generate_name(policy, uploaded_file.name or '')
    return store_file(policy, name, uploaded_file)


def store_file(
    policy: CategoryPolicy,
    name: str,
    file_obj: DjangoFile,
) -> StoredAsset:
    """Write a file into a category directory.

    The size ceiling is checked before anything is written. A failed
    write leaves no partial file behind.

    Args:
        policy: Category the file belongs to.
        name: Generated file name.
        file_obj: File content.

    Returns:
        The stored asset. Its name may differ from ``name`` if that
        name was already taken.

    Raises:
        InvalidFileError: If the file exceeds the category size ceiling.
        StorageFailureError: If writing to disk fails.
    """
    size_bytes = file_obj.size
    validate_size(policy, size_bytes)

    storage = _get_storage(policy)
    try:
        saved_name = storage.save(name, file_obj)
    except OSError as error:
        raise StorageFailureError(
            f'Could not save file: {name}',
        ) from error

    logger.info(
        'Stored %s asset: %s (%d bytes)',
        policy.slug,
        saved_name,
        size_bytes,
    )
    return StoredAsset(
        category=policy.slug,
        name=saved_name,
        size_bytes=size_bytes,
        url=policy.public_url(saved_name),
    )


def open_file(policy: CategoryPolicy, name: str) -> DjangoFile:
    """Open a stored asset for reading.

    The file is opened directly, a missing file surfaces as the open
    error instead of a separate existence check.

    Args:
        policy: Category the file belongs to.
        name: Generated file name.

    Returns:
        Open binary file, the caller closes it.

    Raises:
        AssetNotFoundError: If the name does not exist in the category.
        StorageFailureError: If the file cannot be read.
    """
    storage = _get_storage(policy)
    try:
        return storage.open(name, 'rb')
    except (FileNotFoundError, IsADirectoryError, SuspiciousFileOperation):
        raise AssetNotFoundError(policy.slug, name) from None
    except OSError as error:
        logger.exception('Failed to open %s asset: %s', policy.slug, name)
        raise StorageFailureError(f'Could not read file: {name}') from error


def delete_file(policy: CategoryPolicy, name: str) -> None:
    """Delete a stored asset.

    Args:
        policy: Category the file belongs to.
        name: Generated file name.

    Raises:
        AssetNotFoundError: If the name does not exist in the category.
        StorageFailureError: If the delete fails.
    """
    storage = _get_storage(policy)
    try:
        storage.delete(name)
    except (FileNotFoundError, IsADirectoryError, SuspiciousFileOperation):
        raise AssetNotFoundError(policy.slug, name) from None
    except OSError as error:
        raise StorageFailureError(
            f'Could not delete file: {name}',
        ) from error


def replace_file(
    policy: CategoryPolicy,
    existing_name: str,
    uploaded_file: UploadedFile | None,
) -> StoredAsset:
    """Replace a stored asset with new content under a new name.

    Transaction safety: the new content is validated and durably
    written first, the old file is deleted afterwards. If the old
    file turns out to be missing or cannot be deleted, the new file
    is rolled back so exactly one of the two survives.

    Args:
        policy: Category the file belongs to.
        existing_name: Generated name of the file to replace.
        uploaded_file: New content from the multipart request, if any.

    Returns:
        The newly stored asset.

    Raises:
        InvalidFileError: If the new file is missing or rejected.
        AssetNotFoundError: If ``existing_name`` does not exist.
        StorageFailureError: If writing or deleting fails.
    """
    uploaded_file = _require_valid_upload(policy, uploaded_file)
    storage = _get_storage(policy)

    # Step 1: Write new content
    new_asset = store_file(
        policy,
        generate_name(policy, uploaded_file.name or ''),
        uploaded_file,
    )

    # Step 2: Delete old content, undo step 1 on failure
    logger.info(
        'Replacing %s asset: %s -> %s',
        policy.slug,
        existing_name,
        new_asset.name,
    )
    try:
        delete_file(policy, existing_name)
    except (AssetNotFoundError, StorageFailureError):
        storage.rollback_upload(new_asset.name)
        raise
    return new_asset


def list_directory(policy: CategoryPolicy) -> list[str]:
    """List stored assets of a category.

    Only files whose extension belongs to the category are returned,
    in filesystem order. The directory is read fresh on every call.

    Args:
        policy: Category to list.

    Returns:
        Filenames in the category directory.

    Raises:
        StorageFailureError: If the directory cannot be read.
    """
    storage = _get_storage(policy)
    try:
        _, filenames = storage.listdir('')
    except OSError as error:
        logger.exception(
            'Failed to list %s directory: %s',
            policy.slug,
            policy.directory,
        )
        raise StorageFailureError('Could not read directory') from error

    return [
        filename
        for filename in filenames
        if policy.matches_filename(filename)
    ]


def _require_valid_upload(
    policy: CategoryPolicy,
    uploaded_file: Any,
) -> UploadedFile:
    """Reject a missing upload or one the policy does not accept."""
    if uploaded_file is None:
        raise InvalidFileError(
            f'No file provided in field "{policy.field_name}"',
        )
    validate_upload(
        policy,
        uploaded_file.name or '',
        getattr(uploaded_file, 'content_type', None),
    )
    return uploaded_file
