"""
Project row <-> API mapping.

Case study shape:
    id, title, category, description, fullDescription, challenge, solution,
    timeline (bilingual), client {name, testimonial?}, stats, process,
    deliverables, technologies?, gradient
"""

from vitrina.core.localized import (
    Localized,
    decode_json_list,
    encode_json,
    optional_list_from_row,
    optional_text,
    optional_text_from_row,
)

COLUMNS = [
    ('id', 'TEXT PRIMARY KEY'),
    ('title', 'TEXT NOT NULL'),
    ('category_lt', 'TEXT'),
    ('category_en', 'TEXT'),
    ('description_lt', 'TEXT'),
    ('description_en', 'TEXT'),
    ('full_description_lt', 'TEXT'),
    ('full_description_en', 'TEXT'),
    ('challenge_lt', 'TEXT'),
    ('challenge_en', 'TEXT'),
    ('solution_lt', 'TEXT'),
    ('solution_en', 'TEXT'),
    ('timeline_lt', 'TEXT'),
    ('timeline_en', 'TEXT'),
    ('client_name', 'TEXT'),
    ('client_testimonial_lt', 'TEXT'),
    ('client_testimonial_en', 'TEXT'),
    ('gradient', 'TEXT'),
    ('stats', 'TEXT'),
    ('process', 'TEXT'),
    ('deliverables_lt', 'TEXT'),
    ('deliverables_en', 'TEXT'),
    ('technologies_lt', 'TEXT'),
    ('technologies_en', 'TEXT'),
]

# API field -> column prefix
TEXT_FIELDS = [
    ('category', 'category'),
    ('description', 'description'),
    ('fullDescription', 'full_description'),
    ('challenge', 'challenge'),
    ('solution', 'solution'),
    ('timeline', 'timeline'),
]


def row_to_project(row):
    project = {
        'id': row['id'],
        'title': row.get('title') or '',
        'stats': decode_json_list(row.get('stats')),
        'process': decode_json_list(row.get('process')),
        'deliverables': Localized.list_from_row(row, 'deliverables').to_json(),
        'gradient': row.get('gradient') or '',
    }
    for field, prefix in TEXT_FIELDS:
        project[field] = Localized.text_from_row(row, prefix).to_json()

    if row.get('client_name'):
        client = {'name': row['client_name']}
        testimonial = optional_text_from_row(row, 'client_testimonial')
        if testimonial:
            client['testimonial'] = testimonial.to_json()
        project['client'] = client

    technologies = optional_list_from_row(row, 'technologies')
    if technologies:
        project['technologies'] = technologies.to_json()

    return project


def project_to_row(payload):
    client = payload.get('client') if isinstance(payload.get('client'), dict) else {}
    testimonial = optional_text(client.get('testimonial'))

    row = {
        'title': payload.get('title') or '',
        'client_name': client.get('name') or None,
        'gradient': payload.get('gradient') or '',
        'stats': encode_json(payload.get('stats') or []),
        'process': encode_json(payload.get('process') or []),
    }
    for field, prefix in TEXT_FIELDS:
        row.update(Localized.text(payload.get(field)).to_columns(prefix))

    row.update(Localized.text_list(payload.get('deliverables')).to_columns('deliverables', encode_json))

    if isinstance(payload.get('technologies'), dict):
        row.update(Localized.text_list(payload['technologies']).to_columns('technologies', encode_json))
    else:
        row.update({'technologies_lt': None, 'technologies_en': None})

    if testimonial:
        row.update(testimonial.to_columns('client_testimonial'))
    else:
        row.update({'client_testimonial_lt': None, 'client_testimonial_en': None})

    return row
