"""Business logic layer for files app.

This package contains all business logic for stored assets:
- Category policies, upload validation and name generation
- Upload, download, replace, delete and listing

All business logic should be implemented here, separate from
views (HTTP layer) and infrastructure (filesystem).
"""
