"""
Audit trail storage for seat inventory changes and manual assignments.
"""

import json
from database import get_db

# Filterable columns of audit_log, keyed by keyword argument
_FILTERS = {
    'entity_type': 'al.entity_type',
    'entity_id': 'al.entity_id',
    'user_id': 'al.user_id',
}


def create_audit_log(action: str, entity_type: str, entity_id: int = None,
                     user_id: int = None, changes: dict = None,
                     ip_address: str = None) -> int:
    """
    Append one entry and commit.

    `changes` is stored as JSON, typically {'before': ..., 'after': ...}.
    """
    db = get_db()
    encoded = None if changes is None else json.dumps(changes, default=str)
    cursor = db.execute(
        'INSERT INTO audit_log (user_id, action, entity_type, entity_id, changes, ip_address) '
        'VALUES (?, ?, ?, ?, ?, ?)',
        (user_id, action, entity_type, entity_id, encoded, ip_address)
    )
    db.commit()
    return cursor.lastrowid


def get_audit_logs(limit: int = 100, **filters) -> list:
    """
    Newest entries first, with the acting user's email.

    Args:
        limit: Maximum number of entries
        **filters: entity_type, entity_id and/or user_id; None values are ignored

    Returns:
        List of dicts with 'changes' decoded
    """
    unknown = set(filters) - set(_FILTERS)
    if unknown:
        raise TypeError(f'Unknown audit log filter: {", ".join(sorted(unknown))}')

    clauses = []
    params = []
    for name, value in filters.items():
        if value is not None:
            clauses.append(f'{_FILTERS[name]} = ?')
            params.append(value)

    query = (
        'SELECT al.*, u.email AS user_email FROM audit_log al '
        'LEFT JOIN users u ON u.id = al.user_id'
    )
    if clauses:
        query += ' WHERE ' + ' AND '.join(clauses)
    query += ' ORDER BY al.id DESC LIMIT ?'
    params.append(limit)

    entries = [dict(row) for row in get_db().execute(query, params).fetchall()]
    for entry in entries:
        entry['changes'] = json.loads(entry['changes']) if entry['changes'] else None
    return entries
