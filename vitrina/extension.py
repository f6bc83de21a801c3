"""
Vitrina Flask extension.

    app = Flask(__name__)
    Vitrina(app)                      # every module
    Vitrina(app, {'features': {'analytics': False}})
"""

import importlib
import logging
import os
import secrets

import click
from flask_cors import CORS
from werkzeug.security import generate_password_hash

from .core.config import Config
from .core.logging_service import LoggingService
from .modules.auth.utils import load_admin_context

logger = logging.getLogger(__name__)

# feature name -> (module path, blueprint attribute, content store attribute)
MODULES = {
    'auth': ('vitrina.modules.auth', 'auth_bp', None),
    'projects': ('vitrina.modules.projects', 'projects_bp', 'project_store'),
    'services': ('vitrina.modules.services', 'services_bp', 'service_store'),
    'resources': ('vitrina.modules.resources', 'resources_bp', 'resource_store'),
    'testimonials': ('vitrina.modules.testimonials', 'testimonials_bp', 'testimonial_store'),
    'uploads': ('vitrina.modules.uploads', 'uploads_bp', None),
    'analytics': ('vitrina.modules.analytics', 'analytics_bp', None),
}

# Public endpoints that browsers on other origins may read
PUBLIC_API_PATTERN = r'/api/(projects|services|resources|testimonials|download)(/.*)?'

CONFIG_DEFAULTS = [
    'STORAGE_TYPE', 'UPLOAD_FOLDER', 'DOWNLOADS_FOLDER', 'SPACES_FOLDER',
    'DO_SPACES_REGION', 'DO_SPACES_NAME', 'DO_SPACES_KEY', 'DO_SPACES_SECRET',
    'ADMIN_PASSWORD', 'ADMIN_PASSWORD_HASH', 'ADMIN_EMAIL', 'ADMIN_COOKIE_NAME',
    'ADMIN_SESSION_MAX_AGE', 'GA_PROPERTY_ID', 'GA_SERVICE_ACCOUNT_EMAIL',
    'GA_PRIVATE_KEY', 'CORS_ORIGINS', 'DOWNLOAD_TIMEOUT', 'DOWNLOAD_ALLOWED_HOSTS',
    'ENVIRONMENT',
]


class Vitrina:
    """Registers the content API modules on a Flask app"""

    def __init__(self, app=None, config=None):
        self._config = {'features': {name: True for name in MODULES}}
        if config:
            self._config['features'].update(config.get('features', {}))
        self._registered = []
        if app is not None:
            self.init_app(app)

    @property
    def features(self):
        return self._config['features']

    def init_app(self, app):
        self._apply_config_defaults(app)
        self._setup_secret_key(app)
        self._setup_directories(app)

        origins = [o.strip() for o in app.config['CORS_ORIGINS'].split(',') if o.strip()] or '*'
        CORS(app, resources={PUBLIC_API_PATTERN: {'origins': origins, 'methods': ['GET']}})

        app.before_request(load_admin_context)

        with app.app_context():
            for name, (module_path, bp_attr, store_attr) in MODULES.items():
                if not self.features.get(name):
                    continue
                module = importlib.import_module(module_path)
                app.register_blueprint(getattr(module, bp_attr))
                if store_attr:
                    getattr(module, store_attr).init_db()
                self._registered.append(name)

        self._register_commands(app)
        app.extensions['vitrina'] = self
        logger.info("Vitrina modules registered: %s", ', '.join(self._registered))

    def get_registered_modules(self):
        return list(self._registered)

    def content_stores(self):
        """Content stores of the registered entity modules"""
        stores = []
        for name in self._registered:
            module_path, _, store_attr = MODULES[name]
            if store_attr:
                stores.append(getattr(importlib.import_module(module_path), store_attr))
        return stores

    @staticmethod
    def _apply_config_defaults(app):
        db_dir = app.config.setdefault('DB_DIR', Config.DB_DIR)
        app.config.setdefault('CONTENT_DB', os.getenv('CONTENT_DB') or os.path.join(db_dir, 'content.db'))
        app.config.setdefault('LOGS_DB', os.getenv('LOGS_DB') or os.path.join(db_dir, 'logs.db'))
        for key in CONFIG_DEFAULTS:
            app.config.setdefault(key, getattr(Config, key))

    @staticmethod
    def _setup_secret_key(app):
        if app.secret_key:
            return
        if Config.SECRET_KEY:
            app.secret_key = Config.SECRET_KEY
            return
        if app.config.get('ENVIRONMENT') == 'production':
            raise RuntimeError('FLASK_SECRET_KEY must be set in production')
        # Sessions will not survive a restart
        logger.warning("FLASK_SECRET_KEY not set, using a random development key")
        app.secret_key = secrets.token_hex(32)

    @staticmethod
    def _setup_directories(app):
        for key in ('CONTENT_DB', 'LOGS_DB'):
            db_dir = os.path.dirname(app.config[key])
            if db_dir:
                os.makedirs(db_dir, exist_ok=True)
        if app.config['STORAGE_TYPE'] == 'local':
            os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)

    def _register_commands(self, app):
        extension = self

        @app.cli.command('init-db')
        def init_db_command():
            """Create or migrate every content table."""
            for store in extension.content_stores():
                store.init_db()
                click.echo(f"{store.table}: {store.count()} rows")

        @app.cli.command('hash-password')
        @click.argument('password')
        def hash_password_command(password):
            """Print an ADMIN_PASSWORD_HASH value for PASSWORD."""
            click.echo(generate_password_hash(password))

        @app.cli.command('cleanup-logs')
        @click.option('--days', default=30, show_default=True, help='Days of logs to keep.')
        def cleanup_logs_command(days):
            """Delete app_logs rows older than --days."""
            deleted = LoggingService.cleanup_old_logs(days)
            click.echo(f"Deleted {deleted} log entries")
