"""Infrastructure layer for files app.

This package contains integrations with external systems:
- Local filesystem storage backend
- Filename metadata helpers

Keep infrastructure concerns separate from business logic.
"""
