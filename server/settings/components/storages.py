"""Storage configuration for uploaded assets.

Every upload category gets its own directory on the local filesystem
and its own validation policy. Directories are relative to the process
working directory unless configured otherwise.
"""

from typing import Any, Final

from server.settings.components import config
from server.settings.components.server import UPLOAD_SERVER_PORT

_MEBIBYTE: Final = 1024 * 1024

# Base of the ``url`` returned to clients after an upload
PUBLIC_BASE_URL = config(
    'PUBLIC_BASE_URL',
    default=f'http://localhost:{UPLOAD_SERVER_PORT}',
)

UPLOAD_CATEGORIES: Final[dict[str, dict[str, Any]]] = {
    'imagen': {
        'field_name': 'imagen',
        'directory': config('IMAGE_UPLOAD_DIR', default='./uploads'),
        'max_bytes': 5 * _MEBIBYTE,
        'extensions': ('.jpg', '.jpeg', '.png', '.gif'),
        # MIME type is only logged, clients often mislabel images
        'mime_types': (),
        'label': 'Image',
    },
    'excel': {
        'field_name': 'excel',
        'directory': config('DATA_UPLOAD_DIR', default='./archivos'),
        'max_bytes': 10 * _MEBIBYTE,
        'extensions': ('.xlsx', '.xls', '.csv'),
        'mime_types': (
            'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
            'application/vnd.ms-excel',
            'text/csv',
            'application/csv',
        ),
        'label': 'Data file',
    },
}
