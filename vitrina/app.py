"""
Vitrina App
===========

A ready-to-run Flask application with every Vitrina module enabled.

Run with:
    python -m vitrina.app

Or through the Flask CLI:
    flask --app vitrina.app run
    flask --app vitrina.app init-db

Visit:
    http://localhost:5000/api/projects  - Public projects
    http://localhost:5000/api/admin/login - Admin sign-in (POST)
"""

import logging

from flask import Flask, jsonify

from vitrina import Vitrina
from vitrina.core.config import Config


def create_app(config=None, features=None):
    """Build a Flask app with Vitrina registered.

    config: mapping applied to app.config before the extension reads it
    features: {'analytics': False, ...} to switch modules off
    """
    app = Flask(__name__)
    app.config['SECRET_KEY'] = Config.SECRET_KEY
    if config:
        app.config.update(config)

    Vitrina(app, {'features': features or {}})

    @app.route('/api/health')
    def health():
        return jsonify({'status': 'ok', 'modules': app.extensions['vitrina'].get_registered_modules()})

    return app


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    app = create_app()

    print("\n" + "=" * 60)
    print("Vitrina")
    print("=" * 60)
    print(f"Projects API:    http://localhost:{Config.port}/api/projects")
    print(f"Admin sign-in:   http://localhost:{Config.port}/api/admin/login")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=Config.port, debug=app.config['ENVIRONMENT'] != 'production')
