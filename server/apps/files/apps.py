"""Django app configuration for files app."""

from typing import override

from django.apps import AppConfig


class FilesConfig(AppConfig):
    """Configuration for files app."""

    name = 'server.apps.files'
    verbose_name = 'Files'

    @override
    def ready(self) -> None:
        """Create category directories when the app is ready."""
        from server.apps.files.logic.file_operations import (  # noqa: PLC0415
            ensure_category_directories,
        )

        ensure_category_directories()
