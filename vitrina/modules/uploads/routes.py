"""
Uploads Routes
==============

- POST /api/upload: admin file upload into the downloads folder
- GET /api/download: force a browser download of a stored file under a chosen name
- GET /uploads/<path>: public files for the local storage backend
"""

import os
import re
import time
from urllib.parse import quote, urlparse

import requests
from flask import Response, jsonify, request, send_file, send_from_directory, stream_with_context

from vitrina.core.config import get_config_value
from vitrina.core.logging_service import LoggingService
from vitrina.core.storage import (
    StorageConflictError,
    StorageError,
    build_storage_name,
    get_do_spaces_config,
    is_cloud_storage,
    local_path_for_url,
    sanitize_filename,
    upload_file,
)
from vitrina.modules.auth.utils import admin_required, current_admin

from . import uploads_bp

CHUNK_SIZE = 64 * 1024
CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


def _now_ms():
    return int(time.time() * 1000)


def format_file_size(size):
    """Human readable size: 0 Bytes, 512 Bytes, 1.5 KB, 2.25 MB"""
    if size <= 0:
        return '0 Bytes'
    units = ['Bytes', 'KB', 'MB', 'GB']
    i = 0
    while size >= 1024 ** (i + 1) and i < len(units) - 1:
        i += 1
    value = round(size / (1024 ** i), 2)
    if value == int(value):
        value = int(value)
    return f"{value} {units[i]}"


def file_type_for(filename):
    """Upper-cased extension, FILE when there is none"""
    if '.' not in filename:
        return 'FILE'
    return filename.rsplit('.', 1)[1].upper() or 'FILE'


def clean_download_name(filename):
    """Download name without control characters, 'download' when nothing is left"""
    return CONTROL_CHARS.sub('', filename or '').strip() or 'download'


def content_disposition(filename):
    """attachment header with an ASCII fallback and an RFC 5987 UTF-8 name"""
    fallback = filename.encode('ascii', 'ignore').decode('ascii')
    fallback = fallback.replace('\\', '_').replace('"', '_') or 'download'
    header = f'attachment; filename="{fallback}"'
    if not filename.isascii():
        header += f"; filename*=UTF-8''{quote(filename)}"
    return header


@uploads_bp.route('/api/upload', methods=['POST'])
@admin_required
def upload():
    """Store an uploaded file without overwriting and return its public URL"""
    if 'file' not in request.files:
        return jsonify({'error': 'No file uploaded'}), 400

    file = request.files['file']
    if not file.filename:
        return jsonify({'error': 'No file selected'}), 400

    folder = get_config_value('DOWNLOADS_FOLDER', 'downloads')
    storage_name = build_storage_name(file.filename, _now_ms())
    file_bytes = file.read()

    try:
        file_url = upload_file(file_bytes, storage_name, folder, content_type=file.mimetype or None)
    except StorageConflictError as e:
        LoggingService.warning('uploads', f"Upload rejected, key exists: {storage_name}")
        return jsonify({'error': str(e)}), 409
    except StorageError as e:
        LoggingService.error('uploads', f"Storage error: {e}")
        return jsonify({'error': 'Failed to upload file to storage'}), 500
    except Exception as e:
        LoggingService.log_error_with_traceback('uploads', e)
        return jsonify({'error': 'Failed to upload file'}), 500

    file_name = sanitize_filename(file.filename)
    admin = current_admin()
    LoggingService.log_user_action('uploads', f"uploaded {storage_name}",
                                   user_id=admin.email if admin else None,
                                   details={'size': len(file_bytes), 'url': file_url})

    return jsonify({
        'success': True,
        'fileUrl': file_url,
        'fileName': file_name,
        'fileSize': len(file_bytes),
        'fileSizeLabel': format_file_size(len(file_bytes)),
        'fileType': file_type_for(file_name),
        'key': storage_name,
    })


def allowed_download_hosts():
    """Hosts the proxy may fetch from: DOWNLOAD_ALLOWED_HOSTS, else the configured Spaces host.
    Local storage with no list configured allows no remote host."""
    allowed = get_config_value('DOWNLOAD_ALLOWED_HOSTS') or ''
    hosts = [h.strip().lower() for h in allowed.split(',') if h.strip()]
    if hosts:
        return hosts
    if is_cloud_storage():
        spaces = get_do_spaces_config()
        if spaces['space_name'] and spaces['region']:
            return [f"{spaces['space_name']}.{spaces['region']}.digitaloceanspaces.com".lower()]
    return []


def _host_allowed(file_url):
    return (urlparse(file_url).hostname or '').lower() in allowed_download_hosts()


@uploads_bp.route('/api/download', methods=['GET'])
def download():
    """Proxy a stored file back with Content-Disposition: attachment"""
    file_url = request.args.get('url')
    filename = clean_download_name(request.args.get('filename'))

    if not file_url:
        return jsonify({'error': 'File URL is required'}), 400

    local_path = local_path_for_url(file_url)
    if local_path:
        if not os.path.isfile(local_path):
            return jsonify({'error': 'File not found'}), 404
        response = send_file(local_path, as_attachment=True, download_name=filename)
        response.headers['Content-Disposition'] = content_disposition(filename)
        return response

    if urlparse(file_url).scheme not in ('http', 'https'):
        return jsonify({'error': 'Invalid file URL'}), 400
    if not _host_allowed(file_url):
        return jsonify({'error': 'File host not allowed'}), 400

    try:
        upstream = requests.get(
            file_url,
            stream=True,
            timeout=int(get_config_value('DOWNLOAD_TIMEOUT', 30)),
        )
    except requests.RequestException as e:
        LoggingService.error('uploads', f"Download proxy error: {e}", {'url': file_url})
        return jsonify({'error': 'Failed to download file'}), 500

    if not upstream.ok:
        upstream.close()
        LoggingService.warning('uploads', f"Upstream returned {upstream.status_code}", {'url': file_url})
        return jsonify({'error': 'Failed to fetch file'}), 500

    def generate():
        try:
            for chunk in upstream.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    yield chunk
        finally:
            upstream.close()

    headers = {
        'Content-Type': upstream.headers.get('Content-Type') or 'application/octet-stream',
        'Content-Disposition': content_disposition(filename),
    }
    # iter_content decodes gzip / deflate, so the upstream length only holds for unencoded bodies
    if upstream.headers.get('Content-Length') and not upstream.headers.get('Content-Encoding'):
        headers['Content-Length'] = upstream.headers['Content-Length']

    return Response(stream_with_context(generate()), headers=headers)


@uploads_bp.route('/uploads/<path:filename>', methods=['GET'])
def serve_upload(filename):
    """Public URL for files kept by the local storage backend"""
    upload_root = get_config_value('UPLOAD_FOLDER', os.path.join(os.getcwd(), 'uploads'))
    return send_from_directory(os.path.abspath(upload_root), filename)
