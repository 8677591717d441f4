"""
Seat directory data access functions.
Each seat record is offered for exactly one calendar date. Deleting a seat
is a soft delete so the reservation ledger keeps its history.
"""

import json
import logging
import sqlite3
from datetime import timedelta

from database import get_db
from models.reservation_errors import SeatExistsError, SeatInUseError, SeatNotFoundError
from utils.datetime_helpers import date_to_str, get_today
from utils.validators import parse_date

logger = logging.getLogger(__name__)

DEFAULT_LOCATION = 'Main Floor'


def _row_to_seat(row) -> dict:
    """Convert a seats row into a dict with decoded amenities."""
    seat = dict(row)
    seat['amenities'] = json.loads(seat['amenities']) if seat.get('amenities') else []
    return seat


# =============================================================================
# READ
# =============================================================================

def get_seat_by_id(seat_id: int, include_deleted: bool = False) -> dict:
    """
    Get seat by ID.

    Args:
        seat_id: Seat ID
        include_deleted: Also return soft-deleted seats

    Returns:
        Seat dict or None if not found
    """
    db = get_db()
    query = 'SELECT * FROM seats WHERE id = ?'
    if not include_deleted:
        query += ' AND active = 1'
    row = db.execute(query, (seat_id,)).fetchone()
    return _row_to_seat(row) if row else None


def get_seat_by_number(seat_number: int, offered_date) -> dict:
    """
    Get the live seat with a given number on a given date.

    Args:
        seat_number: Seat number
        offered_date: Date (YYYY-MM-DD or date)

    Returns:
        Seat dict or None if not found
    """
    db = get_db()
    row = db.execute('''
        SELECT * FROM seats
        WHERE seat_number = ? AND offered_date = ? AND active = 1
    ''', (seat_number, date_to_str(offered_date))).fetchone()
    return _row_to_seat(row) if row else None


def get_seats_for_date(offered_date, location: str = None) -> list:
    """
    Get all live seats offered on a date, ordered by seat number.

    Args:
        offered_date: Date (YYYY-MM-DD or date)
        location: Optional location filter

    Returns:
        List of seat dicts
    """
    db = get_db()
    query = 'SELECT * FROM seats WHERE offered_date = ? AND active = 1'
    params = [date_to_str(offered_date)]

    if location:
        query += ' AND location = ?'
        params.append(location)

    query += ' ORDER BY seat_number'
    return [_row_to_seat(row) for row in db.execute(query, params).fetchall()]


def get_all_seats(offered_date=None) -> list:
    """
    Get live seats, optionally filtered by date.

    Args:
        offered_date: Optional date filter

    Returns:
        List of seat dicts ordered by date then seat number
    """
    if offered_date:
        return get_seats_for_date(offered_date)

    db = get_db()
    rows = db.execute('''
        SELECT * FROM seats WHERE active = 1
        ORDER BY offered_date, seat_number
    ''').fetchall()
    return [_row_to_seat(row) for row in rows]


def get_locations() -> list:
    """Distinct locations of live seats."""
    db = get_db()
    rows = db.execute('''
        SELECT DISTINCT location FROM seats WHERE active = 1 ORDER BY location
    ''').fetchall()
    return [row['location'] for row in rows]


# =============================================================================
# CREATE
# =============================================================================

def create_seat(seat_number: int, offered_date, location: str = None, amenities: list = None) -> dict:
    """
    Create a seat for a date.

    Args:
        seat_number: Positive seat number
        offered_date: Date the seat is offered for
        location: Free text location (default 'Main Floor')
        amenities: List of amenity strings

    Returns:
        New seat dict

    Raises:
        SeatExistsError: If the (number, date) pair already exists
    """
    date_str = date_to_str(parse_date(offered_date))
    db = get_db()
    cursor = db.cursor()

    try:
        cursor.execute('''
            INSERT INTO seats (seat_number, offered_date, location, amenities)
            VALUES (?, ?, ?, ?)
        ''', (seat_number, date_str, location or DEFAULT_LOCATION, json.dumps(sorted(amenities or []))))
        db.commit()
    except sqlite3.IntegrityError:
        db.rollback()
        raise SeatExistsError(seat_number, date_str)

    logger.info('Seat %s created for %s', seat_number, date_str)
    return get_seat_by_id(cursor.lastrowid)


def create_seats_for_range(seat_count: int, date_from, date_to, location: str = None) -> int:
    """
    Create seats 1..seat_count for every date in the inclusive range.
    Existing (number, date) pairs are left alone.

    Args:
        seat_count: Number of seats per day
        date_from: First date
        date_to: Last date
        location: Location for the new seats

    Returns:
        Number of seats created
    """
    start = parse_date(date_from)
    end = parse_date(date_to)
    if end < start:
        raise ValueError('date_to must not be before date_from')

    db = get_db()
    cursor = db.cursor()
    created = 0

    try:
        cursor.execute('BEGIN IMMEDIATE')
        current = start
        while current <= end:
            for seat_number in range(1, seat_count + 1):
                cursor.execute('''
                    INSERT INTO seats (seat_number, offered_date, location)
                    SELECT ?, ?, ?
                    WHERE NOT EXISTS (
                        SELECT 1 FROM seats
                        WHERE seat_number = ? AND offered_date = ? AND active = 1
                    )
                ''', (seat_number, current.isoformat(), location or DEFAULT_LOCATION,
                      seat_number, current.isoformat()))
                created += cursor.rowcount
            current += timedelta(days=1)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info('Seeded %d seats between %s and %s', created, start, end)
    return created


# =============================================================================
# UPDATE / DELETE
# =============================================================================

def update_seat(seat_id: int, location: str = None, amenities: list = None) -> dict:
    """
    Update the editable attributes of a seat (location and amenities).

    Args:
        seat_id: Seat ID
        location: New location, unchanged if None
        amenities: New amenity list, unchanged if None

    Returns:
        Updated seat dict

    Raises:
        SeatNotFoundError: If the seat does not exist
    """
    updates = []
    values = []

    if location is not None:
        updates.append('location = ?')
        values.append(location)

    if amenities is not None:
        updates.append('amenities = ?')
        values.append(json.dumps(sorted(amenities)))

    if not updates:
        seat = get_seat_by_id(seat_id)
        if not seat:
            raise SeatNotFoundError(seat_id)
        return seat

    updates.append('updated_at = CURRENT_TIMESTAMP')
    values.append(seat_id)

    db = get_db()
    cursor = db.cursor()
    cursor.execute(f'UPDATE seats SET {", ".join(updates)} WHERE id = ? AND active = 1', values)
    db.commit()

    if cursor.rowcount == 0:
        raise SeatNotFoundError(seat_id)
    return get_seat_by_id(seat_id)


def delete_seat(seat_id: int) -> dict:
    """
    Soft delete a seat (set active = 0).
    Refused while the seat holds an active reservation for today or later.

    Args:
        seat_id: Seat ID to delete

    Returns:
        The deleted seat dict

    Raises:
        SeatNotFoundError: If the seat does not exist
        SeatInUseError: If the seat has upcoming active reservations
    """
    today = get_today().isoformat()
    db = get_db()
    cursor = db.cursor()

    try:
        # Same write lock as bookings, so no reservation can slip in
        cursor.execute('BEGIN IMMEDIATE')

        seat_row = cursor.execute(
            'SELECT * FROM seats WHERE id = ? AND active = 1', (seat_id,)
        ).fetchone()
        if not seat_row:
            raise SeatNotFoundError(seat_id)

        in_use = cursor.execute('''
            SELECT COUNT(*) FROM reservations
            WHERE seat_id = ? AND status = 'active' AND reservation_date >= ?
        ''', (seat_id, today)).fetchone()[0]
        if in_use:
            raise SeatInUseError()

        cursor.execute('''
            UPDATE seats SET active = 0, updated_at = CURRENT_TIMESTAMP
            WHERE id = ?
        ''', (seat_id,))
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info('Seat %s deleted', seat_id)
    return _row_to_seat(seat_row)
