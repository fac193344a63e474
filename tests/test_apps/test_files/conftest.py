"""Shared fixtures for files app tests."""

import copy

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient

from server.apps.files.logic.policy import get_policy

PNG_HEADER = b'\x89PNG\r\n\x1a\n'


@pytest.fixture
def upload_dirs(settings, tmp_path):
    """Point every category at its own temporary directory.

    Returns:
        Mapping of category slug to its directory.
    """
    image_dir = tmp_path / 'uploads'
    data_dir = tmp_path / 'archivos'
    image_dir.mkdir()
    data_dir.mkdir()

    categories = copy.deepcopy(settings.UPLOAD_CATEGORIES)
    categories['imagen']['directory'] = str(image_dir)
    categories['excel']['directory'] = str(data_dir)
    settings.UPLOAD_CATEGORIES = categories
    settings.PUBLIC_BASE_URL = 'http://localhost:3000'

    return {'imagen': image_dir, 'excel': data_dir}


@pytest.fixture
def image_policy(upload_dirs):
    """Policy of the image category.

    Returns:
        CategoryPolicy rooted at a temporary directory.
    """
    return get_policy('imagen')


@pytest.fixture
def data_policy(upload_dirs):
    """Policy of the tabular data category.

    Returns:
        CategoryPolicy rooted at a temporary directory.
    """
    return get_policy('excel')


@pytest.fixture
def png_upload():
    """Small PNG upload as sent by a browser.

    Returns:
        SimpleUploadedFile named cat.png.
    """
    return SimpleUploadedFile(
        'cat.png',
        PNG_HEADER + b'\x00' * 64,
        content_type='image/png',
    )


@pytest.fixture
def csv_upload():
    """Small CSV upload.

    Returns:
        SimpleUploadedFile named data.csv.
    """
    return SimpleUploadedFile(
        'data.csv',
        b'name,age\nana,31\n',
        content_type='text/csv',
    )


@pytest.fixture
def fixed_millis(monkeypatch):
    """Freeze the clock used for generated names.

    Returns:
        The frozen epoch milliseconds.
    """
    millis = 1700000000000
    monkeypatch.setattr(
        'server.apps.files.logic.policy.current_timestamp_millis',
        lambda: millis,
    )
    return millis


@pytest.fixture
def api_client():
    """DRF test client.

    Returns:
        APIClient instance.
    """
    return APIClient()
