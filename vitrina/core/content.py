"""
Content Tables
==============

One sqlite table per content type. Each module provides a mapper pair
(row -> API entity, API payload -> row) and gets the same public read /
admin write behaviour through ContentStore and the handle_* route helpers.
"""

import sqlite3
import logging
from flask import g, jsonify, request

from .database import Database
from .logging_service import LoggingService

logger = logging.getLogger(__name__)

TIMESTAMP_COLUMNS = [
    ('created_at', 'TEXT'),
    ('updated_at', 'TEXT'),
]


class ContentStore:
    """
    Row <-> entity adapter over one content table.

    Args:
        table: table name
        label: human name used in messages ("Project")
        columns: list of (name, sql type); timestamps are appended automatically
        to_entity: callable(row dict) -> API dict
        to_row: callable(payload dict) -> column dict
        generate_id: optional callable() -> new id; when set, client ids are ignored on create
    """

    def __init__(self, table, label, columns, to_entity, to_row, generate_id=None):
        self.table = table
        self.label = label
        self.columns = list(columns) + TIMESTAMP_COLUMNS
        self.to_entity = to_entity
        self.to_row = to_row
        self.generate_id = generate_id

    def init_db(self):
        Database.init_table(Database.content_db(), self.table, self.columns, indexes=('created_at',))

    def all(self):
        """Every entity, newest first"""
        rows = Database.fetch_all(Database.content_db(), self.table)
        return [self.to_entity(row) for row in rows]

    def get(self, entity_id):
        row = Database.fetch_one(Database.content_db(), self.table, entity_id)
        return self.to_entity(row) if row else None

    def create(self, payload):
        row = self.to_row(payload)
        row['id'] = payload['id']
        return self.to_entity(Database.insert(Database.content_db(), self.table, row))

    def update(self, entity_id, payload):
        """Replace every mapped column; None when no row has this id"""
        row = Database.update(Database.content_db(), self.table, entity_id, self.to_row(payload))
        return self.to_entity(row) if row else None

    def delete(self, entity_id):
        return Database.delete(Database.content_db(), self.table, entity_id)

    def count(self):
        return Database.count(Database.content_db(), self.table)


# ===== Route helpers =====

def _admin_email():
    admin = g.get('admin')
    return admin.email if admin else None


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def _database_error(store, action, error):
    """500 with the database message forwarded"""
    LoggingService.error(store.table, f"Database error during {action}: {error}")
    return jsonify({'error': str(error)}), 500


def _unexpected_error(store, action, error):
    LoggingService.log_error_with_traceback(store.table, error, {'action': action})
    return jsonify({'error': 'Internal server error'}), 500


def handle_list(store):
    """GET all - public, generic message on failure"""
    try:
        return jsonify(store.all())
    except Exception:
        logger.exception("Error listing %s", store.table)
        return jsonify({'error': f'Failed to fetch {store.table}'}), 500


def handle_get(store, entity_id):
    try:
        entity = store.get(entity_id)
    except Exception:
        logger.exception("Error getting %s %s", store.table, entity_id)
        return jsonify({'error': f'Failed to fetch {store.label.lower()}'}), 500
    if entity is None:
        return jsonify({'error': f'{store.label} not found'}), 404
    return jsonify(entity)


def handle_create(store, validate=None):
    """POST - admin only (decorate the route with admin_required)"""
    data = _json_body()
    if data is None:
        return jsonify({'error': 'Invalid JSON body'}), 400

    if store.generate_id is not None:
        data['id'] = store.generate_id()
    elif not str(data.get('id') or '').strip():
        return jsonify({'error': f'{store.label} ID is required'}), 400

    if validate is not None:
        error = validate(data)
        if error:
            return jsonify({'error': error}), 400

    try:
        entity = store.create(data)
    except sqlite3.Error as e:
        return _database_error(store, 'create', e)
    except Exception as e:
        return _unexpected_error(store, 'create', e)

    LoggingService.log_user_action(store.table, f"created {store.label.lower()} {entity['id']}",
                                   user_id=_admin_email())
    return jsonify({'success': True, 'data': entity}), 201


def handle_update(store, entity_id, validate=None):
    """PUT - full replacement of the entity behind the path id"""
    if not entity_id or not entity_id.strip():
        return jsonify({'error': f'{store.label} ID is required'}), 400

    data = _json_body()
    if data is None:
        return jsonify({'error': 'Invalid JSON body'}), 400

    if validate is not None:
        error = validate(data)
        if error:
            return jsonify({'error': error}), 400

    try:
        entity = store.update(entity_id, data)
    except sqlite3.Error as e:
        return _database_error(store, 'update', e)
    except Exception as e:
        return _unexpected_error(store, 'update', e)

    if entity is None:
        return jsonify({'error': f'{store.label} not found'}), 404

    LoggingService.log_user_action(store.table, f"updated {store.label.lower()} {entity_id}",
                                   user_id=_admin_email())
    return jsonify({'success': True, 'data': entity})


def handle_delete(store, entity_id):
    """DELETE - succeeds whether or not the id existed"""
    if not entity_id or not entity_id.strip():
        return jsonify({'error': f'{store.label} ID is required'}), 400

    try:
        removed = store.delete(entity_id)
    except sqlite3.Error as e:
        return _database_error(store, 'delete', e)
    except Exception as e:
        return _unexpected_error(store, 'delete', e)

    LoggingService.log_user_action(store.table, f"deleted {store.label.lower()} {entity_id}",
                                   user_id=_admin_email(), details={'removed': removed})
    return jsonify({'success': True})
