"""Upload server settings."""

from server.settings.components import config

# Upload server host and port
UPLOAD_SERVER_HOST = config('UPLOAD_SERVER_HOST', default='0.0.0.0')
UPLOAD_SERVER_PORT = config('UPLOAD_SERVER_PORT', cast=int, default=3000)
