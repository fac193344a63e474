"""Upload validation and naming policy per category."""

import logging
from pathlib import Path

from django.conf import settings

from server.apps.files.exceptions import InvalidFileError
from server.apps.files.infrastructure.metadata import (
    current_timestamp_millis,
    get_file_extension,
)
from server.apps.files.models import CategoryPolicy

logger = logging.getLogger(__name__)


def get_policy(slug: str) -> CategoryPolicy:
    """Build the policy of a configured category.

    Settings are read on every call so overridden settings apply.

    Args:
        slug: Category slug, e.g. 'imagen' or 'excel'.

    Returns:
        CategoryPolicy for the slug.

    Raises:
        KeyError: If the category is not configured.
    """
    options = settings.UPLOAD_CATEGORIES[slug]
    return CategoryPolicy(
        slug=slug,
        field_name=options['field_name'],
        directory=str(Path(options['directory'])),
        max_bytes=options['max_bytes'],
        extensions=frozenset(ext.lower() for ext in options['extensions']),
        mime_types=frozenset(options['mime_types']),
        label=options['label'],
        public_base_url=settings.PUBLIC_BASE_URL,
    )


def get_policies() -> list[CategoryPolicy]:
    """Policies of every configured category."""
    return [get_policy(slug) for slug in settings.UPLOAD_CATEGORIES]


def validate_upload(
    policy: CategoryPolicy,
    declared_filename: str,
    declared_mime_type: str | None,
) -> None:
    """Decide whether a declared file is acceptable for a category.

    A file passes when its extension OR its declared MIME type is
    allowed. Categories without a MIME allow-list therefore accept on
    extension only and ignore whatever MIME type the client sent.

    Args:
        policy: Category the file is uploaded to.
        declared_filename: Client supplied filename.
        declared_mime_type: Client supplied MIME type.

    Raises:
        InvalidFileError: If neither signal matches the category.
    """
    extension = get_file_extension(declared_filename).lower()
    logger.info(
        'Received %s upload: name=%s extension=%s mime=%s',
        policy.slug,
        declared_filename,
        extension,
        declared_mime_type,
    )

    if policy.accepts_extension(extension):
        return
    if policy.accepts_mime_type(declared_mime_type):
        return

    logger.warning(
        'Rejected %s upload: name=%s mime=%s',
        policy.slug,
        declared_filename,
        declared_mime_type,
    )
    allowed = ', '.join(sorted(policy.extensions))
    raise InvalidFileError(f'Only {allowed} files are allowed')


def validate_size(policy: CategoryPolicy, size_bytes: int) -> None:
    """Reject files larger than the category ceiling.

    Args:
        policy: Category the file is uploaded to.
        size_bytes: Size of the received file.

    Raises:
        InvalidFileError: If the file exceeds ``policy.max_bytes``.
    """
    if size_bytes > policy.max_bytes:
        logger.warning(
            'Rejected %s upload: %d bytes exceeds limit of %d',
            policy.slug,
            size_bytes,
            policy.max_bytes,
        )
        raise InvalidFileError(
            f'File too large: {size_bytes} bytes, '
            f'limit is {policy.max_bytes} bytes',
        )


def generate_name(
    policy: CategoryPolicy,
    original_name: str,
    timestamp_ms: int | None = None,
) -> str:
    """Generate the stored name of an upload.

    Format is ``<field_name>-<millis><ext>``, the extension keeps the
    case the client used.

    Args:
        policy: Category the file is uploaded to.
        original_name: Client supplied filename.
        timestamp_ms: Epoch milliseconds, defaults to now.

    Returns:
        Generated filename (e.g., 'imagen-1700000000000.png').
    """
    if timestamp_ms is None:
        timestamp_ms = current_timestamp_millis()
    extension = get_file_extension(original_name)
    return f'{policy.field_name}-{timestamp_ms}{extension}'
