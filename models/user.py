"""
People who use SeatDesk: members book seats, administrators manage them.
Emails are stored lowercased and are unique.
"""

from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
from database import get_db

ROLE_MEMBER = 'member'
ROLE_ADMIN = 'administrator'
ROLES = (ROLE_MEMBER, ROLE_ADMIN)

PUBLIC_FIELDS = ('id', 'email', 'first_name', 'last_name', 'role', 'active', 'created_at', 'last_login')


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class User(UserMixin):
    """Session-side view of a `users` row."""

    def __init__(self, user_dict):
        self.id = user_dict['id']
        self.email = user_dict['email']
        self.first_name = user_dict['first_name']
        self.last_name = user_dict.get('last_name') or ''
        self.role = user_dict['role']
        self.active = user_dict['active']
        self.created_at = user_dict.get('created_at')
        self.last_login = user_dict.get('last_login')

    @property
    def full_name(self):
        return f'{self.first_name} {self.last_name}'.strip()

    @property
    def is_admin(self):
        return self.role == ROLE_ADMIN

    @property
    def is_active(self):
        # Deactivated people cannot log in
        return self.active == 1


def public_user(user_dict: dict) -> dict:
    """Copy of a user row without the password hash."""
    if not user_dict:
        return None
    return {field: user_dict.get(field) for field in PUBLIC_FIELDS}


def _fetch_user(where: str, value) -> dict:
    row = get_db().execute(f'SELECT * FROM users WHERE {where} = ?', (value,)).fetchone()
    return dict(row) if row else None


def get_user_by_id(user_id: int) -> dict:
    return _fetch_user('id', user_id)


def get_user_by_email(email: str) -> dict:
    """Case-insensitive lookup; None for a blank or unknown email."""
    if not email:
        return None
    return _fetch_user('email', _normalize_email(email))


def get_all_users(active_only: bool = True, role: str = None) -> list:
    """
    Directory listing, sorted by last then first name.

    Args:
        active_only: Skip deactivated people
        role: ROLE_MEMBER or ROLE_ADMIN to filter on

    Returns:
        List of public user dicts
    """
    conditions = []
    params = []
    if active_only:
        conditions.append('active = 1')
    if role:
        conditions.append('role = ?')
        params.append(role)

    query = 'SELECT * FROM users'
    if conditions:
        query += ' WHERE ' + ' AND '.join(conditions)
    query += ' ORDER BY last_name, first_name'

    rows = get_db().execute(query, params).fetchall()
    return [public_user(dict(row)) for row in rows]


def create_user(email: str, password: str, first_name: str, last_name: str = '',
                role: str = ROLE_MEMBER) -> int:
    """
    Register a person with a hashed password.

    Returns:
        New user ID

    Raises:
        ValueError: Unknown role
        sqlite3.IntegrityError: Email already registered
    """
    if role not in ROLES:
        raise ValueError(f'Unknown role: {role}')

    db = get_db()
    try:
        cursor = db.execute(
            'INSERT INTO users (email, password_hash, first_name, last_name, role) '
            'VALUES (?, ?, ?, ?, ?)',
            (_normalize_email(email), generate_password_hash(password),
             first_name, last_name or '', role)
        )
        db.commit()
    except Exception:
        db.rollback()
        raise
    return cursor.lastrowid


def deactivate_user(user_id: int) -> bool:
    """Soft delete; the person's reservations stay in the ledger."""
    db = get_db()
    cursor = db.execute('UPDATE users SET active = 0 WHERE id = ?', (user_id,))
    db.commit()
    return cursor.rowcount > 0


def update_last_login(user_id: int) -> None:
    db = get_db()
    db.execute('UPDATE users SET last_login = CURRENT_TIMESTAMP WHERE id = ?', (user_id,))
    db.commit()


def check_password(user_dict: dict, password: str) -> bool:
    return check_password_hash(user_dict['password_hash'], password)
