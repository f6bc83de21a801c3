import os
import sqlite3
import logging
from datetime import datetime, timezone
from .config import get_config_value

logger = logging.getLogger(__name__)


class Database:

    @staticmethod
    def connect(path):
        conn = sqlite3.connect(path)
        conn.row_factory = sqlite3.Row
        return conn

    @staticmethod
    def content_db():
        """Path of the content database for the current app"""
        return get_config_value('CONTENT_DB', 'content.db')

    @staticmethod
    def now():
        """Timestamp used for created_at / updated_at columns.
        Microsecond precision keeps newest-first ordering stable for rapid inserts."""
        return datetime.now(timezone.utc).isoformat(timespec='microseconds')

    @staticmethod
    def init_table(db_path, table, columns, indexes=()):
        """
        Create a content table if needed and add any columns missing from an older schema.

        Args:
            db_path: sqlite database path
            table: table name
            columns: list of (name, sql type) tuples; the first column is the primary key
            indexes: column names to index
        """
        db_dir = os.path.dirname(db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

        column_sql = ',\n'.join(f'{name} {col_type}' for name, col_type in columns)

        with Database.connect(db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(f'CREATE TABLE IF NOT EXISTS {table} (\n{column_sql}\n)')

            # Migration: add missing columns
            cursor.execute(f'PRAGMA table_info({table})')
            existing = [column[1] for column in cursor.fetchall()]
            for name, col_type in columns:
                if name not in existing:
                    logger.info("Adding %s column to %s table...", name, table)
                    # ALTER TABLE cannot add PRIMARY KEY / UNIQUE columns
                    col_type = col_type.replace('PRIMARY KEY', '').replace('UNIQUE', '')
                    cursor.execute(f'ALTER TABLE {table} ADD COLUMN {name} {col_type}')

            for column in indexes:
                cursor.execute(f'CREATE INDEX IF NOT EXISTS idx_{table}_{column} ON {table}({column})')

            conn.commit()
            logger.debug("%s table initialized", table)

    @staticmethod
    def fetch_all(db_path, table, order_by='created_at DESC, rowid DESC'):
        with Database.connect(db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(f'SELECT * FROM {table} ORDER BY {order_by}')
            return [dict(row) for row in cursor.fetchall()]

    @staticmethod
    def fetch_one(db_path, table, row_id):
        with Database.connect(db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(f'SELECT * FROM {table} WHERE id = ?', (row_id,))
            row = cursor.fetchone()
            return dict(row) if row else None

    @staticmethod
    def insert(db_path, table, values):
        """Insert a row and return it as stored"""
        values = dict(values)
        timestamp = Database.now()
        values.setdefault('created_at', timestamp)
        values.setdefault('updated_at', timestamp)

        columns = list(values.keys())
        placeholders = ', '.join('?' for _ in columns)

        with Database.connect(db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                f'INSERT INTO {table} ({", ".join(columns)}) VALUES ({placeholders})',
                [values[c] for c in columns]
            )
            conn.commit()

        return Database.fetch_one(db_path, table, values['id'])

    @staticmethod
    def update(db_path, table, row_id, values):
        """Overwrite every given column of a row. Returns the stored row or None if no row matched."""
        values = {k: v for k, v in values.items() if k not in ('id', 'created_at')}
        values['updated_at'] = Database.now()

        set_clause = ', '.join(f'{column} = ?' for column in values)

        with Database.connect(db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(
                f'UPDATE {table} SET {set_clause} WHERE id = ?',
                list(values.values()) + [row_id]
            )
            conn.commit()
            if cursor.rowcount == 0:
                return None

        return Database.fetch_one(db_path, table, row_id)

    @staticmethod
    def delete(db_path, table, row_id):
        """Delete a row. Returns True if a row was removed."""
        with Database.connect(db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(f'DELETE FROM {table} WHERE id = ?', (row_id,))
            conn.commit()
            return cursor.rowcount > 0

    @staticmethod
    def count(db_path, table):
        with Database.connect(db_path) as conn:
            cursor = conn.cursor()
            cursor.execute(f'SELECT COUNT(*) FROM {table}')
            return cursor.fetchone()[0]
