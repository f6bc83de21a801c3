"""
Localized Values
================

Bilingual (Lithuanian / English) values shared by every content type.

The API shape is a nested object ``{"lt": ..., "en": ...}`` while the database
keeps two flat columns ``<prefix>_lt`` / ``<prefix>_en``.
"""

import json
from dataclasses import dataclass
from typing import Any, Generic, List, Optional, TypeVar

T = TypeVar('T')

LANGUAGES = ('lt', 'en')
DEFAULT_LANGUAGE = 'lt'


@dataclass
class Localized(Generic[T]):
    lt: T
    en: T

    def get(self, language=DEFAULT_LANGUAGE):
        """Value for a language, falling back to Lithuanian"""
        if language == 'en':
            return self.en
        return self.lt

    def is_empty(self):
        return not self.lt and not self.en

    def to_json(self):
        return {'lt': self.lt, 'en': self.en}

    def to_columns(self, prefix, encode=None):
        """Flatten into {prefix_lt, prefix_en}; encode is applied to each value (e.g. json.dumps)"""
        lt, en = self.lt, self.en
        if encode is not None:
            lt, en = encode(lt), encode(en)
        return {f'{prefix}_lt': lt, f'{prefix}_en': en}

    @classmethod
    def text(cls, value) -> 'Localized[str]':
        """Bilingual string read from a request payload, missing parts become ''"""
        value = value if isinstance(value, dict) else {}
        return cls(lt=value.get('lt') or '', en=value.get('en') or '')

    @classmethod
    def text_list(cls, value) -> 'Localized[List[str]]':
        """Bilingual string list read from a request payload, missing parts become []"""
        value = value if isinstance(value, dict) else {}
        return cls(lt=list_or_empty(value.get('lt')), en=list_or_empty(value.get('en')))

    @classmethod
    def text_from_row(cls, row, prefix) -> 'Localized[str]':
        return cls(lt=row.get(f'{prefix}_lt') or '', en=row.get(f'{prefix}_en') or '')

    @classmethod
    def list_from_row(cls, row, prefix) -> 'Localized[List[Any]]':
        return cls(
            lt=decode_json_list(row.get(f'{prefix}_lt')),
            en=decode_json_list(row.get(f'{prefix}_en')),
        )


def list_or_empty(value):
    """value when it is a list, [] for anything else (a bare string is not split into characters)"""
    return list(value) if isinstance(value, list) else []


def optional_text(value) -> Optional[Localized]:
    """Bilingual string from a payload, or None when absent"""
    if not isinstance(value, dict):
        return None
    return Localized.text(value)


def optional_text_from_row(row, prefix) -> Optional[Localized]:
    """Bilingual string from columns, or None when both columns are empty"""
    if not row.get(f'{prefix}_lt') and not row.get(f'{prefix}_en'):
        return None
    return Localized.text_from_row(row, prefix)


def optional_list_from_row(row, prefix) -> Optional[Localized]:
    if row.get(f'{prefix}_lt') is None and row.get(f'{prefix}_en') is None:
        return None
    return Localized.list_from_row(row, prefix)


def encode_json(value):
    """JSON text for list / object columns"""
    if value is None:
        return None
    return json.dumps(value, ensure_ascii=False)


def decode_json_list(value):
    """Parse a JSON list column; anything unreadable becomes []"""
    if not value:
        return []
    if isinstance(value, list):
        return value
    try:
        parsed = json.loads(value)
    except (json.JSONDecodeError, TypeError):
        return []
    return parsed if isinstance(parsed, list) else []
