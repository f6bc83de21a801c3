"""
Analytics Module
================

Admin dashboard numbers from the Google Analytics Data API:
- visitors and page views for the last 30 days vs the 30 days before
- most viewed pages

Falls back to demo data (with a status explaining why) when credentials are
missing or the API call fails.
"""

from flask import Blueprint

analytics_bp = Blueprint('analytics', __name__, url_prefix='/api/analytics')

from . import routes

__all__ = ['analytics_bp']
