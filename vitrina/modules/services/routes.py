"""
Services Routes
===============
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

from . import services_bp
from .mapper import COLUMNS, row_to_service, service_to_row

service_store = ContentStore('services', 'Service', COLUMNS, row_to_service, service_to_row)


@services_bp.route('', methods=['GET'])
def get_services():
    """Get all services - public endpoint"""
    return handle_list(service_store)


@services_bp.route('/<service_id>', methods=['GET'])
def get_service(service_id):
    return handle_get(service_store, service_id)


@services_bp.route('', methods=['POST'])
@admin_required
def create_service():
    """Create new service; iconName defaults to Palette"""
    return handle_create(service_store)


@services_bp.route('/<service_id>', methods=['PUT'])
@admin_required
def update_service(service_id):
    return handle_update(service_store, service_id)


@services_bp.route('/<service_id>', methods=['DELETE'])
@admin_required
def delete_service(service_id):
    return handle_delete(service_store, service_id)
