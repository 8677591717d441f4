"""
SQLite connection handling.
One connection per application context, opened lazily and closed on teardown.
"""

import sqlite3
import logging
from flask import g, current_app

logger = logging.getLogger(__name__)

# Applied to every new connection
CONNECTION_PRAGMAS = (
    'PRAGMA foreign_keys = ON',
    # Readers keep working while one writer holds the lock
    'PRAGMA journal_mode = WAL',
    'PRAGMA synchronous = NORMAL',
)


def _connect(db_path: str, busy_timeout: float) -> sqlite3.Connection:
    connection = sqlite3.connect(db_path, timeout=busy_timeout)
    connection.row_factory = sqlite3.Row
    for pragma in CONNECTION_PRAGMAS:
        connection.execute(pragma)
    return connection


def get_db():
    """
    Connection bound to the current app context.

    Threads serving concurrent requests each get their own. A writer waits up
    to DATABASE_BUSY_TIMEOUT seconds for the lock before sqlite3 reports
    'database is locked'.

    Returns:
        sqlite3.Connection with sqlite3.Row rows
    """
    if 'db' not in g:
        g.db = _connect(
            current_app.config.get('DATABASE_PATH', 'instance/seatdesk.db'),
            current_app.config.get('DATABASE_BUSY_TIMEOUT', 5.0)
        )
    return g.db


def close_db(e=None):
    """Teardown hook: close the context's connection if one was opened."""
    db = g.pop('db', None)
    if db is not None:
        db.close()


def init_db():
    """
    Recreate the schema from scratch and seed the administrator.
    Existing data is lost.
    """
    from database.schema import drop_tables, create_tables, create_indexes
    from database.seed import seed_database

    db = get_db()
    drop_tables(db)
    create_tables(db)
    create_indexes(db)
    seed_database(db)
    db.commit()

    logger.info('Database initialized at %s', current_app.config.get('DATABASE_PATH'))
