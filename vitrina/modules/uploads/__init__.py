"""
Uploads Module
==============

File upload for downloadable resources, the download proxy used by the
resources page, and public serving of locally stored files.
"""

from flask import Blueprint

uploads_bp = Blueprint('uploads', __name__)

from . import routes

__all__ = ['uploads_bp']
