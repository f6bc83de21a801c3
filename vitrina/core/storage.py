"""
Storage Utility
===============

File storage with cloud (DigitalOcean Spaces) / local branching.
Uploads never overwrite: writing to an existing key raises StorageConflictError.
"""

import os
import re
import mimetypes
from .config import get_config_value

LOCAL_URL_PREFIX = '/uploads/'


class StorageError(Exception):
    """Storage backend failed to store or read a file"""


class StorageConflictError(StorageError):
    """An object already exists under the requested key"""


def sanitize_filename(filename):
    """Replace every character outside [a-zA-Z0-9.-] with an underscore"""
    return re.sub(r'[^a-zA-Z0-9.-]', '_', filename or '')


def build_storage_name(filename, timestamp_ms):
    """Collision-resistant object name: '<millis>-<sanitized name>'"""
    return f"{timestamp_ms}-{sanitize_filename(filename)}"


def get_storage_type():
    """Get storage type (local or cloud)"""
    return get_config_value('STORAGE_TYPE', 'local')


def is_cloud_storage():
    return get_storage_type() == 'cloud'


def get_do_spaces_config():
    """Get DigitalOcean Spaces configuration"""
    return {
        'region': get_config_value('DO_SPACES_REGION'),
        'space_name': get_config_value('DO_SPACES_NAME'),
        'access_key': get_config_value('DO_SPACES_KEY'),
        'secret_key': get_config_value('DO_SPACES_SECRET'),
    }


def guess_content_type(filename):
    content_type, _ = mimetypes.guess_type(filename)
    return content_type or 'application/octet-stream'


def upload_file(file_bytes, filename, subfolder, content_type=None):
    """Upload file to cloud storage or local filesystem.

    Args:
        file_bytes: Raw bytes of the file.
        filename: Target object name (already sanitized).
        subfolder: Subfolder name (e.g. "downloads").
        content_type: MIME type; guessed from the extension when omitted.

    Returns:
        Public URL (cloud) or local path like "/uploads/downloads/123-a.pdf" (local).

    Raises:
        StorageConflictError: the key is already taken.
        StorageError: the backend rejected the upload.
    """
    content_type = content_type or guess_content_type(filename)
    if is_cloud_storage():
        return _upload_to_spaces(file_bytes, filename, subfolder, content_type)
    return _save_locally(file_bytes, filename, subfolder)


def _spaces_client(config):
    import boto3
    region = config['region']
    return boto3.client(
        's3',
        region_name=region,
        endpoint_url=f"https://{region}.digitaloceanspaces.com",
        aws_access_key_id=config['access_key'],
        aws_secret_access_key=config['secret_key'],
    )


def _upload_to_spaces(file_bytes, filename, subfolder, content_type):
    """Upload to DigitalOcean Spaces via boto3 without replacing an existing object."""
    from botocore.exceptions import ClientError

    config = get_do_spaces_config()
    region = config['region']
    space_name = config['space_name']
    if not region or not space_name:
        raise StorageError('DigitalOcean Spaces is not configured')

    app_prefix = get_config_value('SPACES_FOLDER', 'uploads')
    object_key = f"{app_prefix}/{subfolder}/{filename}"

    client = _spaces_client(config)

    try:
        client.head_object(Bucket=space_name, Key=object_key)
    except ClientError as e:
        if e.response.get('Error', {}).get('Code') not in ('404', 'NoSuchKey', 'NotFound'):
            raise StorageError(str(e)) from e
    else:
        raise StorageConflictError(f"The resource already exists: {object_key}")

    try:
        client.put_object(
            Bucket=space_name,
            Key=object_key,
            Body=file_bytes,
            ACL='public-read',
            ContentType=content_type,
            IfNoneMatch='*',
        )
    except ClientError as e:
        if e.response.get('Error', {}).get('Code') in ('PreconditionFailed', '412'):
            raise StorageConflictError(f"The resource already exists: {object_key}") from e
        raise StorageError(str(e)) from e

    return f"https://{space_name}.{region}.digitaloceanspaces.com/{object_key}"


def _local_root():
    return get_config_value('UPLOAD_FOLDER', os.path.join(os.getcwd(), 'uploads'))


def _save_locally(file_bytes, filename, subfolder):
    """Save to the local upload folder; 'xb' mode refuses to replace an existing file."""
    upload_dir = os.path.join(_local_root(), subfolder)
    os.makedirs(upload_dir, exist_ok=True)
    filepath = os.path.join(upload_dir, filename)
    try:
        with open(filepath, 'xb') as f:
            f.write(file_bytes)
    except FileExistsError as e:
        raise StorageConflictError(f"The resource already exists: {subfolder}/{filename}") from e
    except OSError as e:
        raise StorageError(str(e)) from e
    return f"{LOCAL_URL_PREFIX}{subfolder}/{filename}"


def local_path_for_url(file_url):
    """Filesystem path behind a local upload URL, or None for anything else.
    Paths escaping the upload folder are rejected."""
    if not file_url or not file_url.startswith(LOCAL_URL_PREFIX):
        return None

    root = os.path.realpath(_local_root())
    rel_path = file_url[len(LOCAL_URL_PREFIX):].split('?', 1)[0]
    full_path = os.path.realpath(os.path.join(root, rel_path))
    if not full_path.startswith(root + os.sep):
        return None
    return full_path
