"""Tests for upload validation and naming policy."""

import pytest

from server.apps.files.exceptions import InvalidFileError
from server.apps.files.logic.policy import (
    generate_name,
    get_policies,
    get_policy,
    validate_size,
    validate_upload,
)

_XLSX_MIME = (
    'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
)


def test_get_policy_reads_settings(upload_dirs):
    """Test policy is built from the configured category."""
    policy = get_policy('imagen')

    assert policy.slug == 'imagen'
    assert policy.field_name == 'imagen'
    assert policy.directory == str(upload_dirs['imagen'])
    assert policy.max_bytes == 5 * 1024 * 1024
    assert policy.extensions == {'.jpg', '.jpeg', '.png', '.gif'}
    assert not policy.mime_types


def test_get_policy_data_category(upload_dirs):
    """Test tabular data limits and MIME allow-list."""
    policy = get_policy('excel')

    assert policy.max_bytes == 10 * 1024 * 1024
    assert policy.extensions == {'.xlsx', '.xls', '.csv'}
    assert policy.mime_types == {
        _XLSX_MIME,
        'application/vnd.ms-excel',
        'text/csv',
        'application/csv',
    }


def test_get_policy_unknown_category(upload_dirs):
    """Test unknown category is a configuration error."""
    with pytest.raises(KeyError):
        get_policy('video')


def test_get_policies(upload_dirs):
    """Test every configured category has a policy."""
    assert {policy.slug for policy in get_policies()} == {'imagen', 'excel'}


@pytest.mark.parametrize('filename', [
    'cat.jpg',
    'cat.jpeg',
    'cat.png',
    'cat.gif',
    'CAT.PNG',
    'holiday.photo.JpEg',
])
def test_image_extensions_accepted(image_policy, filename):
    """Test image extensions are accepted ignoring case."""
    validate_upload(image_policy, filename, 'image/png')


@pytest.mark.parametrize('mime_type', [
    'application/octet-stream',
    'text/plain',
    None,
])
def test_image_mime_type_ignored(image_policy, mime_type):
    """Test mislabelled MIME type does not reject a valid image."""
    validate_upload(image_policy, 'cat.png', mime_type)


@pytest.mark.parametrize('filename', [
    'cat.bmp',
    'cat',
    'cat.png.exe',
    'pngfile',
    'cat.xjpgx',
])
def test_image_other_extensions_rejected(image_policy, filename):
    """Test non image extensions are rejected."""
    with pytest.raises(
        InvalidFileError,
        match='Only .gif, .jpeg, .jpg, .png files',
    ):
        validate_upload(image_policy, filename, 'image/png')


def test_image_rejected_regardless_of_mime(image_policy):
    """Test an image MIME type never rescues a bad extension."""
    with pytest.raises(InvalidFileError):
        validate_upload(image_policy, 'data.csv', 'image/jpeg')


@pytest.mark.parametrize('filename', ['data.xlsx', 'data.xls', 'DATA.CSV'])
def test_data_extension_accepted(data_policy, filename):
    """Test tabular extensions pass without a matching MIME type."""
    validate_upload(data_policy, filename, 'application/octet-stream')


@pytest.mark.parametrize('mime_type', [
    _XLSX_MIME,
    'application/vnd.ms-excel',
    'text/csv',
    'application/csv',
])
def test_data_mime_type_accepted(data_policy, mime_type):
    """Test allowed MIME type passes with any extension."""
    validate_upload(data_policy, 'data.bin', mime_type)


def test_data_both_signals_agree(data_policy):
    """Test matching extension and MIME type."""
    validate_upload(data_policy, 'data.csv', 'text/csv')


def test_data_neither_signal_rejected(data_policy):
    """Test file rejected when extension and MIME type both miss."""
    with pytest.raises(InvalidFileError, match='Only .csv, .xls, .xlsx files'):
        validate_upload(data_policy, 'data.bin', 'application/pdf')


def test_data_missing_mime_rejected(data_policy):
    """Test missing MIME type falls back to extension only."""
    with pytest.raises(InvalidFileError):
        validate_upload(data_policy, 'data.txt', None)


def test_validate_size_at_limit(image_policy):
    """Test file exactly at the ceiling is accepted."""
    validate_size(image_policy, 5 * 1024 * 1024)


def test_validate_size_over_limit(image_policy):
    """Test file one byte over the ceiling is rejected."""
    with pytest.raises(InvalidFileError, match='File too large'):
        validate_size(image_policy, 5 * 1024 * 1024 + 1)


def test_generate_name(image_policy):
    """Test generated name format."""
    name = generate_name(image_policy, 'cat.png', timestamp_ms=1234)

    assert name == 'imagen-1234.png'


def test_generate_name_keeps_extension_case(data_policy):
    """Test extension case of the original name is preserved."""
    assert generate_name(data_policy, 'Report.CSV', 5) == 'excel-5.CSV'


def test_generate_name_strips_client_path(image_policy):
    """Test directories in the client name do not leak into the name."""
    name = generate_name(image_policy, 'C:\\Users\\me\\..\\cat.gif', 7)

    assert name == 'imagen-7.gif'


def test_generate_name_without_extension(data_policy):
    """Test MIME-only accepted file keeps an empty extension."""
    assert generate_name(data_policy, 'upload', 9) == 'excel-9'


def test_generate_name_uses_clock(image_policy, fixed_millis):
    """Test current time is used when no timestamp is given."""
    name = generate_name(image_policy, 'cat.jpeg')

    assert name == f'imagen-{fixed_millis}.jpeg'
