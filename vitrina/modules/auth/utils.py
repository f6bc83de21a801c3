from dataclasses import dataclass
from datetime import datetime, timezone
from functools import wraps
import hmac

from flask import current_app, g, jsonify, request
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from werkzeug.security import check_password_hash

from vitrina.core.config import get_config_value

TOKEN_SALT = 'vitrina-admin-session'


@dataclass(frozen=True)
class AdminContext:
    """Authenticated admin for the current request"""
    email: str
    issued_at: datetime
    expires_at: datetime

    def to_json(self):
        return {
            'email': self.email,
            'issuedAt': self.issued_at.isoformat(),
            'expiresAt': self.expires_at.isoformat(),
        }


def _serializer():
    return URLSafeTimedSerializer(current_app.secret_key, salt=TOKEN_SALT)


def session_max_age():
    return int(get_config_value('ADMIN_SESSION_MAX_AGE', 12 * 60 * 60))


def issue_token(email):
    """Signed, timestamped admin token"""
    return _serializer().dumps({'email': email})


def load_token(token):
    """AdminContext for a valid token, None if missing, tampered or expired"""
    if not token:
        return None
    max_age = session_max_age()
    try:
        payload, signed_at = _serializer().loads(token, max_age=max_age, return_timestamp=True)
    except SignatureExpired:
        return None
    except BadSignature:
        return None

    if signed_at.tzinfo is None:
        signed_at = signed_at.replace(tzinfo=timezone.utc)
    expires_at = datetime.fromtimestamp(signed_at.timestamp() + max_age, tz=timezone.utc)
    return AdminContext(email=payload.get('email', 'admin'), issued_at=signed_at, expires_at=expires_at)


def token_from_request():
    """Admin token from the Authorization header or the session cookie"""
    auth_header = request.headers.get('Authorization', '')
    if auth_header.startswith('Bearer '):
        return auth_header[len('Bearer '):].strip()
    return request.cookies.get(get_config_value('ADMIN_COOKIE_NAME', 'admin_session'))


def load_admin_context():
    """before_app_request hook: attach the AdminContext (or None) to flask.g"""
    g.admin = load_token(token_from_request())


def current_admin():
    return g.get('admin')


def is_admin():
    return current_admin() is not None


def verify_admin_password(password):
    """Check a login password against ADMIN_PASSWORD_HASH or ADMIN_PASSWORD"""
    if not password:
        return False
    password_hash = get_config_value('ADMIN_PASSWORD_HASH')
    if password_hash:
        return check_password_hash(password_hash, password)
    plain = get_config_value('ADMIN_PASSWORD')
    if plain:
        return hmac.compare_digest(plain.encode('utf-8'), password.encode('utf-8'))
    return False


def admin_password_configured():
    return bool(get_config_value('ADMIN_PASSWORD_HASH') or get_config_value('ADMIN_PASSWORD'))


def admin_required(f):
    """Decorator to require an admin session on JSON API routes"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not is_admin():
            return jsonify({'error': 'Unauthorized'}), 401
        return f(*args, **kwargs)
    return decorated_function
