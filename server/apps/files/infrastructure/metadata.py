"""Metadata helpers for client supplied filenames."""

import time
from pathlib import PurePosixPath, PureWindowsPath


def extract_filename(client_name: str) -> str:
    """Extract the bare filename from a client supplied name.

    Browsers may send full paths (``C:\\Users\\me\\cat.png``), so both
    separator styles are stripped.

    Args:
        client_name: Filename as sent in the multipart request.

    Returns:
        Filename without directory components (e.g., 'cat.png').
    """
    return PurePosixPath(PureWindowsPath(client_name).name).name


def get_file_extension(filename: str) -> str:
    """Get file extension from filename, keeping its original case.

    Args:
        filename: Filename (e.g., 'report.CSV').

    Returns:
        Extension with leading dot (e.g., '.CSV').
        Returns empty string if no extension.
    """
    return PurePosixPath(extract_filename(filename)).suffix


def current_timestamp_millis() -> int:
    """Milliseconds since the epoch."""
    return time.time_ns() // 1_000_000
