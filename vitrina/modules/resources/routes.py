"""
Resources Routes
================
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

from . import resources_bp
from .mapper import COLUMNS, resource_to_row, row_to_resource

resource_store = ContentStore('resources', 'Resource', COLUMNS, row_to_resource, resource_to_row)


@resources_bp.route('', methods=['GET'])
def get_resources():
    """Get all downloadable resources - public endpoint"""
    return handle_list(resource_store)


@resources_bp.route('/<resource_id>', methods=['GET'])
def get_resource(resource_id):
    return handle_get(resource_store, resource_id)


@resources_bp.route('', methods=['POST'])
@admin_required
def create_resource():
    """Create new resource (upload the file first via /api/upload)"""
    return handle_create(resource_store)


@resources_bp.route('/<resource_id>', methods=['PUT'])
@admin_required
def update_resource(resource_id):
    return handle_update(resource_store, resource_id)


@resources_bp.route('/<resource_id>', methods=['DELETE'])
@admin_required
def delete_resource(resource_id):
    """Delete the resource row; the stored file is left in place"""
    return handle_delete(resource_store, resource_id)
