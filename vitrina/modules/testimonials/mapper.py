import secrets
import string
import time

from vitrina.core.localized import Localized

COLUMNS = [
    ('id', 'TEXT PRIMARY KEY'),
    ('name', 'TEXT NOT NULL'),
    ('role', 'TEXT'),
    ('text_lt', 'TEXT'),
    ('text_en', 'TEXT'),
]

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_testimonial_id():
    """testimonial-<millis>-<9 random base36 chars>"""
    suffix = ''.join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"testimonial-{int(time.time() * 1000)}-{suffix}"


def validate_testimonial(payload):
    """Error message for an incomplete testimonial, None when valid"""
    text = payload.get('text')
    if not payload.get('name') or not payload.get('role') or not isinstance(text, dict):
        return 'Missing required fields'
    if not text.get('lt') or not text.get('en'):
        return 'Missing required fields'
    return None


def row_to_testimonial(row):
    return {
        'id': row['id'],
        'name': row.get('name') or '',
        'role': row.get('role') or '',
        'text': Localized.text_from_row(row, 'text').to_json(),
    }


def testimonial_to_row(payload):
    row = {
        'name': payload.get('name') or '',
        'role': payload.get('role') or '',
    }
    row.update(Localized.text(payload.get('text')).to_columns('text'))
    return row
