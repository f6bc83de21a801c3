"""
Testimonials Routes
===================

Unlike the other content types, testimonial ids are generated server side
and name, role and both text translations are required.
"""

from vitrina.core.content import (
    ContentStore,
    handle_create,
    handle_delete,
    handle_get,
    handle_list,
    handle_update,
)
from vitrina.modules.auth.utils import admin_required

from . import testimonials_bp
from .mapper import (
    COLUMNS,
    generate_testimonial_id,
    row_to_testimonial,
    testimonial_to_row,
    validate_testimonial,
)

testimonial_store = ContentStore(
    'testimonials', 'Testimonial', COLUMNS, row_to_testimonial, testimonial_to_row,
    generate_id=generate_testimonial_id,
)


@testimonials_bp.route('', methods=['GET'])
def get_testimonials():
    """Get all testimonials - public endpoint"""
    return handle_list(testimonial_store)


@testimonials_bp.route('/<testimonial_id>', methods=['GET'])
def get_testimonial(testimonial_id):
    return handle_get(testimonial_store, testimonial_id)


@testimonials_bp.route('', methods=['POST'])
@admin_required
def create_testimonial():
    return handle_create(testimonial_store, validate=validate_testimonial)


@testimonials_bp.route('/<testimonial_id>', methods=['PUT'])
@admin_required
def update_testimonial(testimonial_id):
    return handle_update(testimonial_store, testimonial_id, validate=validate_testimonial)


@testimonials_bp.route('/<testimonial_id>', methods=['DELETE'])
@admin_required
def delete_testimonial(testimonial_id):
    return handle_delete(testimonial_store, testimonial_id)
