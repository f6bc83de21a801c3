import os
from dotenv import load_dotenv

load_dotenv(override=True)

class Config:
    """
    Base configuration for Vitrina.
    Host applications can override any of these through app.config or environment variables.
    """
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')

    # Get DB_DIR from environment, or use a default if not set
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))

    # Database paths
    CONTENT_DB = os.getenv('CONTENT_DB', os.path.join(DB_DIR, 'content.db'))
    LOGS_DB = os.getenv('LOGS_DB', os.path.join(DB_DIR, 'logs.db'))

    # Storage settings - 'local' or 'cloud' (DigitalOcean Spaces)
    STORAGE_TYPE = os.getenv('STORAGE_TYPE', 'local')
    UPLOAD_FOLDER = os.getenv('UPLOAD_FOLDER', os.path.join(os.getcwd(), 'uploads'))
    DOWNLOADS_FOLDER = os.getenv('DOWNLOADS_FOLDER', 'downloads')
    SPACES_FOLDER = os.getenv('SPACES_FOLDER', 'uploads')
    DO_SPACES_REGION = os.getenv('DO_SPACES_REGION')
    DO_SPACES_NAME = os.getenv('DO_SPACES_NAME')
    DO_SPACES_KEY = os.getenv('DO_SPACES_KEY')
    DO_SPACES_SECRET = os.getenv('DO_SPACES_SECRET')

    # Admin session settings
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD')
    ADMIN_PASSWORD_HASH = os.getenv('ADMIN_PASSWORD_HASH')
    ADMIN_EMAIL = os.getenv('ADMIN_EMAIL', 'admin')
    ADMIN_COOKIE_NAME = os.getenv('ADMIN_COOKIE_NAME', 'admin_session')
    ADMIN_SESSION_MAX_AGE = int(os.getenv('ADMIN_SESSION_MAX_AGE', str(12 * 60 * 60)))

    # Google Analytics Data API (service account)
    GA_PROPERTY_ID = os.getenv('GA_PROPERTY_ID')
    GA_SERVICE_ACCOUNT_EMAIL = os.getenv('GA_SERVICE_ACCOUNT_EMAIL')
    GA_PRIVATE_KEY = os.getenv('GA_PRIVATE_KEY')

    # Public API CORS origins, comma separated
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

    # Seconds to wait on the storage host when proxying downloads
    DOWNLOAD_TIMEOUT = int(os.getenv('DOWNLOAD_TIMEOUT', '30'))
    # Comma separated hosts the download proxy may fetch from; empty means the Spaces host only
    DOWNLOAD_ALLOWED_HOSTS = os.getenv('DOWNLOAD_ALLOWED_HOSTS', '')

    # Environment
    ENVIRONMENT = os.getenv('ENVIRONMENT', 'development')

    # Port for local server
    port = int(os.getenv('PORT', '5000'))


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config, then env var"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val is not None:
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val is not None:
        return val
    return os.getenv(key, default)


def is_production():
    """Check if running in production"""
    return get_config_value('ENVIRONMENT', 'development') == 'production'
