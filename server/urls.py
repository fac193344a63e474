"""Root URL configuration.

Each upload category is mounted at its own prefix. The image category
supports replace and delete, the data category is read and upload only.
"""

from django.urls import path

from server.apps.files.views import AssetCollectionView, AssetDetailView

_IMAGE: dict[str, str] = {'category': 'imagen'}
_DATA: dict[str, str] = {'category': 'excel'}

urlpatterns = [
    path(
        'imagen',
        AssetCollectionView.as_view(),
        _IMAGE,
        name='imagen-list',
    ),
    path(
        'imagen/<str:filename>',
        AssetDetailView.as_view(
            http_method_names=['get', 'put', 'delete', 'head', 'options'],
        ),
        _IMAGE,
        name='imagen-detail',
    ),
    path(
        'excel',
        AssetCollectionView.as_view(),
        _DATA,
        name='excel-list',
    ),
    path(
        'excel/<str:filename>',
        AssetDetailView.as_view(
            http_method_names=['get', 'head', 'options'],
        ),
        _DATA,
        name='excel-detail',
    ),
]
