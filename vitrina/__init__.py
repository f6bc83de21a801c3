"""
Vitrina - Bilingual Content API for Flask
=========================================

Content backend for a Lithuanian / English marketing site:
- Projects, services, downloadable resources and testimonials
- Admin sign-in guarding every write
- File uploads to local disk or DigitalOcean Spaces, plus a download proxy
- Google Analytics dashboard numbers with a demo fallback

Usage:
    from flask import Flask
    from vitrina import Vitrina

    app = Flask(__name__)
    Vitrina(app)
"""

__version__ = '0.1.0'

from .extension import Vitrina

__all__ = ['Vitrina']
