"""Translate errors raised while serving a request into JSON responses."""

import logging
from http import HTTPStatus
from typing import Any

from rest_framework.exceptions import ParseError, UnsupportedMediaType
from rest_framework.response import Response
from rest_framework.views import exception_handler

from server.apps.files.exceptions import FilesError, InvalidFileError

logger = logging.getLogger(__name__)


def handle_exception(
    exc: Exception,
    context: dict[str, Any],
) -> Response | None:
    """DRF exception handler producing ``{"error": message}`` bodies.

    Domain errors map to their own status code. A body that is not a
    readable multipart upload counts as an invalid file. Other errors
    DRF knows about (method not allowed, not found) keep DRF's status
    code but use the same body shape. Anything else is left to Django
    and ends as a 500.

    Args:
        exc: Raised exception.
        context: DRF context with the view and request.

    Returns:
        Error response, or None for unhandled exceptions.
    """
    if isinstance(exc, (UnsupportedMediaType, ParseError)):
        exc = InvalidFileError(f'Expected a multipart upload: {exc.detail}')

    if isinstance(exc, FilesError):
        status_code = int(exc.status_code)
        if status_code >= HTTPStatus.INTERNAL_SERVER_ERROR:
            logger.error(
                'Storage failure in %s: %s',
                context.get('view').__class__.__name__,
                exc,
                exc_info=exc,
            )
        else:
            logger.info('Request rejected (%d): %s', status_code, exc)
        return Response({'error': str(exc)}, status=status_code)

    response = exception_handler(exc, context)
    if response is not None and isinstance(response.data, dict):
        detail = response.data.get('detail')
        if detail is not None:
            response.data = {'error': str(detail)}
    return response
