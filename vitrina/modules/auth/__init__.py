"""
Vitrina Auth Module

Admin session handling:
- Password login issuing a signed, expiring session token
- Token read from an HttpOnly cookie or an Authorization: Bearer header
- Per-request AdminContext on flask.g
- admin_required decorator for write endpoints
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__, url_prefix='/api/admin')

from . import routes
from .utils import AdminContext, admin_required, current_admin, is_admin, issue_token

__all__ = ['auth_bp', 'AdminContext', 'admin_required', 'current_admin', 'is_admin', 'issue_token']
