"""Value objects for stored assets.

Stored assets are plain files in a category directory, no database
table backs them. These dataclasses only carry what an operation
returns to its caller.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CategoryPolicy:
    """Storage and validation rules of one upload category."""

    slug: str
    field_name: str
    directory: str
    max_bytes: int
    extensions: frozenset[str]
    mime_types: frozenset[str]
    label: str
    public_base_url: str

    def accepts_extension(self, extension: str) -> bool:
        """Check a dotted extension against the category, ignoring case."""
        return extension.lower() in self.extensions

    def matches_filename(self, filename: str) -> bool:
        """Check whether a stored filename ends with an allowed extension.

        A bare name such as '.png' matches too.
        """
        return filename.lower().endswith(tuple(self.extensions))

    def accepts_mime_type(self, mime_type: str | None) -> bool:
        """Check a declared MIME type against the category allow-list."""
        return mime_type is not None and mime_type in self.mime_types

    def public_url(self, name: str) -> str:
        """Build the retrieval URL for a generated name.

        Args:
            name: Generated file name.

        Returns:
            Absolute URL, e.g. ``http://localhost:3000/imagen/imagen-1.png``.
        """
        base_url = self.public_base_url.rstrip('/')
        return f'{base_url}/{self.slug}/{name}'


@dataclass(frozen=True, slots=True)
class StoredAsset:
    """A file persisted in a category directory under its generated name."""

    category: str
    name: str
    size_bytes: int
    url: str
