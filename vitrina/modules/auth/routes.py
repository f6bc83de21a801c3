from flask import jsonify, request

from vitrina.core.config import get_config_value, is_production
from vitrina.core.logging_service import LoggingService

from . import auth_bp
from .utils import (
    admin_password_configured,
    current_admin,
    issue_token,
    load_token,
    session_max_age,
    verify_admin_password,
)


def _cookie_name():
    return get_config_value('ADMIN_COOKIE_NAME', 'admin_session')


@auth_bp.route('/login', methods=['POST'])
def login():
    """Exchange the admin password for a signed session token"""
    if not admin_password_configured():
        return jsonify({'error': 'Admin login is not configured'}), 503

    data = request.get_json(silent=True) or {}
    password = data.get('password', '')

    if not verify_admin_password(password):
        LoggingService.log_security_event('Failed admin login attempt')
        return jsonify({'error': 'Invalid password'}), 401

    email = get_config_value('ADMIN_EMAIL', 'admin')
    token = issue_token(email)
    admin = load_token(token)

    response = jsonify({
        'success': True,
        'token': token,
        'expiresAt': admin.expires_at.isoformat(),
    })
    response.set_cookie(
        _cookie_name(),
        token,
        max_age=session_max_age(),
        httponly=True,
        secure=is_production(),
        samesite='Lax',
    )
    LoggingService.log_user_action('auth', 'login', user_id=email)
    return response


@auth_bp.route('/logout', methods=['POST'])
def logout():
    """Clear the admin session cookie"""
    admin = current_admin()
    response = jsonify({'success': True})
    response.delete_cookie(_cookie_name())
    if admin:
        LoggingService.log_user_action('auth', 'logout', user_id=admin.email)
    return response


@auth_bp.route('/session', methods=['GET'])
def session_status():
    """Report whether the request carries a valid admin session"""
    admin = current_admin()
    if not admin:
        return jsonify({'authenticated': False})
    return jsonify({'authenticated': True, **admin.to_json()})
