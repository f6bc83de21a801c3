"""
Shared fixtures for the Vitrina test suite.

Every test gets its own temporary directory holding the content database,
the logs database and the local upload folder.
"""

import os
import shutil
import tempfile

import pytest
from flask import Flask

from vitrina import Vitrina

ADMIN_PASSWORD = "letmein"
ADMIN_EMAIL = "admin@example.com"


def build_app(tmp_dir, features=None, **config):
    """Flask app with Vitrina registered against tmp_dir"""
    app = Flask(__name__)
    app.config.update(
        TESTING=True,
        SECRET_KEY="test-secret",
        ENVIRONMENT="testing",
        DB_DIR=tmp_dir,
        CONTENT_DB=os.path.join(tmp_dir, "content.db"),
        LOGS_DB=os.path.join(tmp_dir, "logs.db"),
        UPLOAD_FOLDER=os.path.join(tmp_dir, "uploads"),
        STORAGE_TYPE="local",
        ADMIN_PASSWORD=ADMIN_PASSWORD,
        ADMIN_PASSWORD_HASH="",
        ADMIN_EMAIL=ADMIN_EMAIL,
        # No Google Analytics credentials unless a test sets them
        GA_PROPERTY_ID="",
        GA_SERVICE_ACCOUNT_EMAIL="",
        GA_PRIVATE_KEY="",
        DOWNLOAD_ALLOWED_HOSTS="",
        CORS_ORIGINS="*",
    )
    app.config.update(config)
    Vitrina(app, {'features': features or {}})
    return app


@pytest.fixture
def tmp_db_dir():
    """Create a temporary directory for test databases, cleaned up after."""
    d = tempfile.mkdtemp(prefix="vitrina-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def app(tmp_db_dir):
    """Fully initialised Flask app with all Vitrina modules registered."""
    return build_app(tmp_db_dir)


@pytest.fixture
def client(app):
    """Anonymous client."""
    return app.test_client()


@pytest.fixture
def admin_client(app):
    """Client holding an admin session cookie from POST /api/admin/login."""
    admin = app.test_client()
    resp = admin.post("/api/admin/login", json={"password": ADMIN_PASSWORD})
    assert resp.status_code == 200, resp.get_json()
    return admin


@pytest.fixture
def admin_headers(app):
    """Authorization header carrying a freshly issued admin token."""
    resp = app.test_client().post("/api/admin/login", json={"password": ADMIN_PASSWORD})
    return {"Authorization": f"Bearer {resp.get_json()['token']}"}
