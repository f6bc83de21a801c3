"""
Projects Routes
===============

Project ids are slugs chosen by the admin on creation and never change afterwards.
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

from . import projects_bp
from .mapper import COLUMNS, project_to_row, row_to_project

project_store = ContentStore('projects', 'Project', COLUMNS, row_to_project, project_to_row)


@projects_bp.route('', methods=['GET'])
def get_projects():
    """Get all projects - public endpoint"""
    return handle_list(project_store)


@projects_bp.route('/<project_id>', methods=['GET'])
def get_project(project_id):
    return handle_get(project_store, project_id)


@projects_bp.route('', methods=['POST'])
@admin_required
def create_project():
    """Create new project"""
    return handle_create(project_store)


@projects_bp.route('/<project_id>', methods=['PUT'])
@admin_required
def update_project(project_id):
    """Update project; the id in the path wins over any id in the body"""
    return handle_update(project_store, project_id)


@projects_bp.route('/<project_id>', methods=['DELETE'])
@admin_required
def delete_project(project_id):
    return handle_delete(project_store, project_id)
