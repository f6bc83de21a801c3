"""
Downloadable resource row <-> API mapping.

fileUrl / fileName come from a prior POST /api/upload; fileSize is a display
string such as "2.4 MB".
"""

from vitrina.core.localized import Localized, decode_json_list, encode_json, list_or_empty

DEFAULT_FILE_SIZE = '0 MB'
DEFAULT_FILE_TYPE = 'PDF'

COLUMNS = [
    ('id', 'TEXT PRIMARY KEY'),
    ('title_lt', 'TEXT'),
    ('title_en', 'TEXT'),
    ('description_lt', 'TEXT'),
    ('description_en', 'TEXT'),
    ('file_url', 'TEXT'),
    ('file_name', 'TEXT'),
    ('file_size', 'TEXT'),
    ('file_type', 'TEXT'),
    ('category_lt', 'TEXT'),
    ('category_en', 'TEXT'),
    ('thumbnail', 'TEXT'),
    ('download_count', 'INTEGER DEFAULT 0'),
    ('tags', 'TEXT'),
]


def row_to_resource(row):
    return {
        'id': row['id'],
        'title': Localized.text_from_row(row, 'title').to_json(),
        'description': Localized.text_from_row(row, 'description').to_json(),
        'fileUrl': row.get('file_url') or '',
        'fileName': row.get('file_name') or '',
        'fileSize': row.get('file_size') or DEFAULT_FILE_SIZE,
        'fileType': row.get('file_type') or DEFAULT_FILE_TYPE,
        'category': Localized.text_from_row(row, 'category').to_json(),
        'thumbnail': row.get('thumbnail'),
        'downloadCount': row.get('download_count') or 0,
        'tags': decode_json_list(row.get('tags')),
        'createdAt': row.get('created_at'),
    }


def _download_count(value):
    try:
        return int(value or 0)
    except (ValueError, TypeError):
        return 0


def resource_to_row(payload):
    row = {
        'file_url': payload.get('fileUrl') or '',
        'file_name': payload.get('fileName') or '',
        'file_size': payload.get('fileSize') or DEFAULT_FILE_SIZE,
        'file_type': payload.get('fileType') or DEFAULT_FILE_TYPE,
        'thumbnail': payload.get('thumbnail') or None,
        'download_count': _download_count(payload.get('downloadCount')),
        'tags': encode_json(list_or_empty(payload.get('tags'))),
    }
    row.update(Localized.text(payload.get('title')).to_columns('title'))
    row.update(Localized.text(payload.get('description')).to_columns('description'))
    row.update(Localized.text(payload.get('category')).to_columns('category'))
    return row
