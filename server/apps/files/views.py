"""HTTP endpoints for stored assets.

Views stay thin: they pick the category policy from the URL, delegate
to ``logic.file_operations`` and shape the JSON body. Errors propagate
to ``exception_handler.handle_exception``.
"""

from http import HTTPStatus

from django.core.files.uploadedfile import UploadedFile
from django.http import FileResponse
from rest_framework.parsers import MultiPartParser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from server.apps.files.infrastructure.upload_handlers import (
    SizeLimitUploadHandler,
)
from server.apps.files.logic.file_operations import (
    delete_file,
    list_directory,
    open_file,
    replace_file,
    upload_file,
)
from server.apps.files.logic.policy import get_policy, validate_size
from server.apps.files.models import CategoryPolicy


class AssetCollectionView(APIView):
    """List the assets of a category or upload a new one."""

    parser_classes = [MultiPartParser]

    def get(self, request: Request, category: str) -> Response:
        """Return generated names of every asset in the category."""
        return Response(list_directory(get_policy(category)))

    def post(self, request: Request, category: str) -> Response:
        """Store the uploaded file under a generated name."""
        policy = get_policy(category)
        asset = upload_file(policy, _receive_upload(request, policy))
        return Response(
            {
                'message': f'{policy.label} uploaded successfully',
                'filename': asset.name,
                'url': asset.url,
            },
            status=HTTPStatus.CREATED,
        )


class AssetDetailView(APIView):
    """Read, replace or delete a single asset by its generated name."""

    parser_classes = [MultiPartParser]

    def get(
        self,
        request: Request,
        category: str,
        filename: str,
    ) -> FileResponse:
        """Stream the raw bytes of an asset."""
        file_obj = open_file(get_policy(category), filename)
        return FileResponse(file_obj, filename=filename)

    def put(self, request: Request, category: str, filename: str) -> Response:
        """Replace an asset with new content under a new generated name."""
        policy = get_policy(category)
        asset = replace_file(
            policy,
            filename,
            _receive_upload(request, policy),
        )
        return Response(
            {
                'message': f'{policy.label} updated successfully',
                'filename': asset.name,
            },
        )

    def delete(
        self,
        request: Request,
        category: str,
        filename: str,
    ) -> Response:
        """Delete an asset."""
        delete_file(get_policy(category), filename)
        return Response({'message': 'File deleted successfully'})


def _receive_upload(
    request: Request,
    policy: CategoryPolicy,
) -> UploadedFile | None:
    """Parse the multipart body with the category size ceiling applied.

    Raises:
        InvalidFileError: If a file part exceeded the ceiling.
    """
    django_request = request._request  # noqa: SLF001
    size_limit = SizeLimitUploadHandler(policy.max_bytes, django_request)
    django_request.upload_handlers.insert(0, size_limit)

    uploaded_file = request.FILES.get(policy.field_name)
    if size_limit.exceeded:
        validate_size(policy, size_limit.received_bytes)
    return uploaded_file
