"""
Testimonials Module
===================

Client quotes with bilingual text. Public reads, admin-only writes under
/api/testimonials.
"""

from flask import Blueprint

testimonials_bp = Blueprint('testimonials', __name__, url_prefix='/api/testimonials')

from . import routes
from .routes import testimonial_store

__all__ = ['testimonials_bp', 'testimonial_store']
