"""
SeatDesk storage: request-scoped sqlite3 connection, schema and seed data.
"""

from database.connection import get_db, close_db, init_db
from database.schema import drop_tables, create_tables, create_indexes
from database.seed import seed_database

__all__ = [
    'get_db',
    'close_db',
    'init_db',
    'drop_tables',
    'create_tables',
    'create_indexes',
    'seed_database',
]
