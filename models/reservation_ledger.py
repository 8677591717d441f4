"""
Reservation ledger data access functions.

The ledger is append-only: reservations are inserted as 'active' and can only
move to 'cancelled'. The write helpers take a cursor inside a transaction that
the allocation engine opened with BEGIN IMMEDIATE; the partial unique indexes
uq_reservations_seat_active and uq_reservations_person_active back them up.
"""

import sqlite3

from database import get_db
from models.reservation_errors import PersonAlreadyBookedError, SeatTakenError
from utils.datetime_helpers import date_to_str

STATUS_ACTIVE = 'active'
STATUS_CANCELLED = 'cancelled'

RESERVATION_SELECT = '''
    SELECT r.id, r.seat_id, r.person_id, r.reservation_date, r.status,
           r.created_by, r.created_at, r.cancelled_at,
           s.seat_number, s.location,
           u.first_name, u.last_name, u.email
    FROM reservations r
    JOIN seats s ON r.seat_id = s.id
    JOIN users u ON r.person_id = u.id
'''


def _row_to_reservation(row) -> dict:
    """Shape a joined reservation row."""
    data = dict(row)
    return {
        'id': data['id'],
        'seat_id': data['seat_id'],
        'person_id': data['person_id'],
        'reservation_date': data['reservation_date'],
        'status': data['status'],
        'created_by': data['created_by'],
        'created_at': data['created_at'],
        'cancelled_at': data['cancelled_at'],
        'seat': {
            'id': data['seat_id'],
            'seat_number': data['seat_number'],
            'location': data['location'],
        },
        'person': {
            'id': data['person_id'],
            'name': f"{data['first_name']} {data['last_name']}".strip(),
            'email': data['email'],
        },
    }


# =============================================================================
# READ
# =============================================================================

def get_reservation_by_id(reservation_id: int) -> dict:
    """
    Get reservation by ID with seat and person detail.

    Args:
        reservation_id: Reservation ID

    Returns:
        Reservation dict or None if not found
    """
    db = get_db()
    row = db.execute(RESERVATION_SELECT + ' WHERE r.id = ?', (reservation_id,)).fetchone()
    return _row_to_reservation(row) if row else None


def get_reservations_for_person(person_id: int) -> list:
    """
    Get every reservation of a person, past and future, newest date first.

    Args:
        person_id: Person ID

    Returns:
        List of reservation dicts
    """
    db = get_db()
    rows = db.execute(
        RESERVATION_SELECT + ' WHERE r.person_id = ? ORDER BY r.reservation_date DESC, r.id DESC',
        (person_id,)
    ).fetchall()
    return [_row_to_reservation(row) for row in rows]


def get_reservations_by_date(reservation_date, status: str = None) -> list:
    """
    Get all reservations for a date (admin view).

    Args:
        reservation_date: Date (YYYY-MM-DD or date)
        status: Optional status filter ('active' or 'cancelled')

    Returns:
        List of reservation dicts ordered by seat number
    """
    db = get_db()
    query = RESERVATION_SELECT + ' WHERE r.reservation_date = ?'
    params = [date_to_str(reservation_date)]

    if status:
        query += ' AND r.status = ?'
        params.append(status)

    query += ' ORDER BY s.seat_number, r.id'
    return [_row_to_reservation(row) for row in db.execute(query, params).fetchall()]


def get_active_reservations(
    seat_id: int = None,
    person_id: int = None,
    date_from=None,
    date_to=None
) -> list:
    """
    List active reservations filtered by seat, person, and/or date range.

    Args:
        seat_id: Filter by seat
        person_id: Filter by person
        date_from: Inclusive lower date bound
        date_to: Inclusive upper date bound

    Returns:
        List of reservation dicts ordered by date then seat number
    """
    db = get_db()
    query = RESERVATION_SELECT + " WHERE r.status = 'active'"
    params = []

    if seat_id is not None:
        query += ' AND r.seat_id = ?'
        params.append(seat_id)

    if person_id is not None:
        query += ' AND r.person_id = ?'
        params.append(person_id)

    if date_from:
        query += ' AND r.reservation_date >= ?'
        params.append(date_to_str(date_from))

    if date_to:
        query += ' AND r.reservation_date <= ?'
        params.append(date_to_str(date_to))

    query += ' ORDER BY r.reservation_date, s.seat_number'
    return [_row_to_reservation(row) for row in db.execute(query, params).fetchall()]


# =============================================================================
# WRITE (inside an open transaction)
# =============================================================================

def check_slot_conflicts(cursor, seat_id: int, person_id: int, reservation_date: str) -> None:
    """
    Raise if the person or the seat already holds an active reservation on the date.
    The person is checked first.

    Raises:
        PersonAlreadyBookedError: Person already has a seat that day
        SeatTakenError: Seat is already reserved that day
    """
    person_row = cursor.execute('''
        SELECT id FROM reservations
        WHERE person_id = ? AND reservation_date = ? AND status = 'active'
    ''', (person_id, reservation_date)).fetchone()
    if person_row:
        raise PersonAlreadyBookedError()

    seat_row = cursor.execute('''
        SELECT id FROM reservations
        WHERE seat_id = ? AND reservation_date = ? AND status = 'active'
    ''', (seat_id, reservation_date)).fetchone()
    if seat_row:
        raise SeatTakenError()


def insert_reservation(cursor, seat_id: int, person_id: int, reservation_date: str,
                       created_by: int = None) -> int:
    """
    Insert an active reservation.

    A uniqueness violation on either partial index is reported as the
    matching domain error rather than a storage error.

    Returns:
        New reservation ID

    Raises:
        PersonAlreadyBookedError: (person, date) slot already active
        SeatTakenError: (seat, date) slot already active
    """
    try:
        cursor.execute('''
            INSERT INTO reservations (seat_id, person_id, reservation_date, status, created_by)
            VALUES (?, ?, ?, 'active', ?)
        ''', (seat_id, person_id, reservation_date, created_by if created_by is not None else person_id))
    except sqlite3.IntegrityError as e:
        message = str(e)
        if 'reservations.person_id' in message:
            raise PersonAlreadyBookedError() from e
        if 'reservations.seat_id' in message:
            raise SeatTakenError() from e
        raise
    return cursor.lastrowid


def cancel_active_reservation(cursor, reservation_id: int, person_id: int) -> bool:
    """
    Move an active reservation owned by person_id to 'cancelled'.

    Returns:
        True if a row changed; False if missing, foreign, or already cancelled
    """
    cursor.execute('''
        UPDATE reservations
        SET status = 'cancelled', cancelled_at = CURRENT_TIMESTAMP
        WHERE id = ? AND person_id = ? AND status = 'active'
    ''', (reservation_id, person_id))
    return cursor.rowcount == 1
