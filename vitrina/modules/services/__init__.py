"""
Services Module
===============

Service offerings (branding, social ads, SEO, ...) with bilingual copy.
Public list / detail reads, admin-only writes under /api/services.
"""

from flask import Blueprint

services_bp = Blueprint('services', __name__, url_prefix='/api/services')

from . import routes
from .routes import service_store

__all__ = ['services_bp', 'service_store']
