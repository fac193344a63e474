"""Upload handlers enforcing size ceilings while the body streams in."""

import logging
from typing import Any, final, override

from django.core.files.uploadhandler import FileUploadHandler, StopUpload

logger = logging.getLogger(__name__)


@final
class SizeLimitUploadHandler(FileUploadHandler):
    """Abort the upload once a file part exceeds ``max_bytes``.

    Installed in front of Django's default handlers, so chunks past the
    ceiling never reach memory or the temporary file. The connection is
    reset instead of draining the rest of the body, callers check
    ``exceeded`` after parsing to report the rejection.
    """

    def __init__(self, max_bytes: int, request: Any = None) -> None:
        """Initialize SizeLimitUploadHandler.

        Args:
            max_bytes: Largest accepted size of a single file part.
            request: Django request being parsed.
        """
        super().__init__(request)
        self.max_bytes = max_bytes
        self.received_bytes = 0
        self.exceeded = False

    @override
    def new_file(self, *args: Any, **kwargs: Any) -> None:
        """Start counting a new file part."""
        super().new_file(*args, **kwargs)
        self.received_bytes = 0

    @override
    def receive_data_chunk(self, raw_data: bytes, start: int) -> bytes:
        """Count the chunk and pass it on, or stop the upload.

        Args:
            raw_data: Chunk of file data.
            start: Offset of the chunk in the file.

        Returns:
            The unchanged chunk for the next handler.

        Raises:
            StopUpload: If the file part went over the ceiling.
        """
        self.received_bytes += len(raw_data)
        if self.received_bytes > self.max_bytes:
            self.exceeded = True
            logger.warning(
                'Aborting upload of %s: more than %d bytes received',
                self.file_name,
                self.max_bytes,
            )
            raise StopUpload(connection_reset=True)
        return raw_data

    @override
    def file_complete(self, file_size: int) -> None:
        """Leave building the uploaded file to the next handlers."""
        return None
