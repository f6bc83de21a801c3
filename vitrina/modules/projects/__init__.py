"""
Projects Module
===============

Case studies shown on the public site and edited from the admin panel.

Provides:
- GET /api/projects (public, newest first)
- GET /api/projects/<id> (public)
- POST / PUT / DELETE (admin session required)
"""

from flask import Blueprint

projects_bp = Blueprint('projects', __name__, url_prefix='/api/projects')

from . import routes
from .routes import project_store

__all__ = ['projects_bp', 'project_store']
