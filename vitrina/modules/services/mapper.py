"""
Service row <-> API mapping.

The icon is stored as a symbolic name ("Palette", "Search", ...) which the
front end resolves to an icon component. titleKey / descKey are i18n lookup
keys, not display text.
"""

from vitrina.core.localized import (
    Localized,
    decode_json_list,
    encode_json,
    optional_text,
    optional_text_from_row,
)

DEFAULT_ICON = 'Palette'

COLUMNS = [
    ('id', 'TEXT PRIMARY KEY'),
    ('icon', 'TEXT'),
    ('title_key', 'TEXT'),
    ('desc_key', 'TEXT'),
    ('overview_lt', 'TEXT'),
    ('overview_en', 'TEXT'),
    ('pricing_lt', 'TEXT'),
    ('pricing_en', 'TEXT'),
    ('gradient', 'TEXT'),
    ('features_lt', 'TEXT'),
    ('features_en', 'TEXT'),
    ('benefits_lt', 'TEXT'),
    ('benefits_en', 'TEXT'),
    ('process', 'TEXT'),
    ('deliverables_lt', 'TEXT'),
    ('deliverables_en', 'TEXT'),
]

LIST_FIELDS = ('features', 'benefits', 'deliverables')


def row_to_service(row):
    service = {
        'id': row['id'],
        'iconName': row.get('icon') or DEFAULT_ICON,
        'titleKey': row.get('title_key') or '',
        'descKey': row.get('desc_key') or '',
        'overview': Localized.text_from_row(row, 'overview').to_json(),
        'gradient': row.get('gradient') or '',
        'process': decode_json_list(row.get('process')),
    }
    for field in LIST_FIELDS:
        service[field] = Localized.list_from_row(row, field).to_json()

    pricing = optional_text_from_row(row, 'pricing')
    if pricing:
        service['pricing'] = pricing.to_json()

    return service


def service_to_row(payload):
    row = {
        'icon': payload.get('iconName') or DEFAULT_ICON,
        'title_key': payload.get('titleKey') or '',
        'desc_key': payload.get('descKey') or '',
        'gradient': payload.get('gradient') or '',
        'process': encode_json(payload.get('process') or []),
    }
    row.update(Localized.text(payload.get('overview')).to_columns('overview'))
    for field in LIST_FIELDS:
        row.update(Localized.text_list(payload.get(field)).to_columns(field, encode_json))

    pricing = optional_text(payload.get('pricing'))
    if pricing:
        row.update(pricing.to_columns('pricing'))
    else:
        row.update({'pricing_lt': None, 'pricing_en': None})

    return row
