"""
Resources Module
================

Downloadable resources (guides, templates, checklists) listed on the
resources page. Public reads, admin-only writes under /api/resources.
"""

from flask import Blueprint

resources_bp = Blueprint('resources', __name__, url_prefix='/api/resources')

from . import routes
from .routes import resource_store

__all__ = ['resources_bp', 'resource_store']
