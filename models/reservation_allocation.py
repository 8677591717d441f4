"""
Seat allocation engine.

Book, cancel, manually assign and modify reservations. Every decision runs in
one BEGIN IMMEDIATE transaction: the write lock is taken before the first read,
so the checks and the ledger write see a serialized view and two concurrent
requests for the same seat, date or person cannot both succeed.

Expected outcomes (seat taken, too late, ...) are raised as ReservationError
subclasses and leave the ledger untouched.
"""

import logging
import sqlite3
from datetime import timedelta

from flask import current_app

from database import get_db
from models.reservation_errors import (
    ConflictRetryableError, PermissionDeniedError, PersonNotFoundError,
    ReservationNotFoundError, SeatNotFoundError, TooLateError
)
from models.reservation_ledger import (
    cancel_active_reservation, check_slot_conflicts, get_reservation_by_id,
    insert_reservation
)
from models.user import ROLE_ADMIN
from utils.audit import log_audit
from utils.datetime_helpers import as_aware, date_to_str, get_now, start_of_day
from utils.validators import parse_date, parse_id

logger = logging.getLogger(__name__)


# =============================================================================
# TRANSACTION HANDLING
# =============================================================================

def _is_lock_timeout(error: sqlite3.OperationalError) -> bool:
    message = str(error).lower()
    return 'locked' in message or 'busy' in message


def _run_atomic(operation):
    """
    Run operation(cursor) inside BEGIN IMMEDIATE and commit.

    Lock timeouts are retried up to ALLOCATION_MAX_RETRIES times; nothing was
    written when they happen. Any other error rolls back and propagates.

    Raises:
        ConflictRetryableError: If the write lock could not be acquired
    """
    attempts = max(1, current_app.config.get('ALLOCATION_MAX_RETRIES', 3))
    db = get_db()

    for attempt in range(1, attempts + 1):
        cursor = db.cursor()
        try:
            cursor.execute('BEGIN IMMEDIATE')
            result = operation(cursor)
            db.commit()
            return result
        except sqlite3.OperationalError as e:
            db.rollback()
            if not _is_lock_timeout(e):
                raise
            logger.warning('Write lock busy (attempt %d/%d)', attempt, attempts)
        except Exception:
            db.rollback()
            raise

    raise ConflictRetryableError()


def _check_lead_time(reservation_date, now) -> None:
    """
    The booking day must start at least MIN_LEAD_TIME_MINUTES after now.

    Raises:
        TooLateError: If the booking is inside the lead-time window
    """
    lead_minutes = current_app.config.get('MIN_LEAD_TIME_MINUTES', 60)
    now = as_aware(now) if now is not None else get_now()
    if start_of_day(reservation_date) - now < timedelta(minutes=lead_minutes):
        raise TooLateError(lead_minutes)


def _load_seat_for_date(cursor, seat_id: int, date_str: str):
    """
    Read the live seat inside the transaction.

    Raises:
        SeatNotFoundError: If the seat is missing, deleted, or offered on another date
    """
    seat = cursor.execute(
        'SELECT id, seat_number, offered_date FROM seats WHERE id = ? AND active = 1',
        (seat_id,)
    ).fetchone()
    if not seat or seat['offered_date'] != date_str:
        raise SeatNotFoundError(seat_id)
    return seat


# =============================================================================
# OPERATIONS
# =============================================================================

def book_seat(person_id: int, seat_id: int, reservation_date, now=None) -> dict:
    """
    Book a seat for a person on a date.

    Checks, in order: lead time, seat offered on that date, person has no
    other active reservation that day, seat has no active reservation that day.

    Args:
        person_id: Verified person ID of the caller
        seat_id: Seat ID
        reservation_date: Date (YYYY-MM-DD or date)
        now: Current instant (defaults to the configured clock)

    Returns:
        The new active reservation dict

    Raises:
        ValidationError, TooLateError, SeatNotFoundError, PersonAlreadyBookedError,
        SeatTakenError, ConflictRetryableError
    """
    target = parse_date(reservation_date, 'reservation_date')
    seat_id = parse_id(seat_id, 'seat_id')
    _check_lead_time(target, now)
    date_str = date_to_str(target)

    def _book(cursor):
        seat = _load_seat_for_date(cursor, seat_id, date_str)
        check_slot_conflicts(cursor, seat['id'], person_id, date_str)
        return insert_reservation(cursor, seat['id'], person_id, date_str, created_by=person_id)

    reservation_id = _run_atomic(_book)
    logger.info('Person %s booked seat %s for %s (reservation %s)',
                person_id, seat_id, date_str, reservation_id)
    return get_reservation_by_id(reservation_id)


def cancel_reservation(person_id: int, reservation_id: int) -> dict:
    """
    Cancel a person's own active reservation. The seat is bookable again as
    soon as this returns.

    Args:
        person_id: Verified person ID of the caller
        reservation_id: Reservation ID

    Returns:
        The cancelled reservation dict

    Raises:
        ReservationNotFoundError: If no active reservation with that id belongs to the person
    """
    def _cancel(cursor):
        if not cancel_active_reservation(cursor, reservation_id, person_id):
            raise ReservationNotFoundError(reservation_id)

    _run_atomic(_cancel)
    logger.info('Person %s cancelled reservation %s', person_id, reservation_id)
    return get_reservation_by_id(reservation_id)


def manual_assign(admin_id: int, admin_role: str, person_id: int, seat_id: int,
                  reservation_date) -> dict:
    """
    Administrator assignment of a seat to a person. Skips the lead-time rule
    but enforces the same seat and person uniqueness as booking.

    Args:
        admin_id: Person ID of the administrator
        admin_role: Role of the caller; must be 'administrator'
        person_id: Person receiving the seat
        seat_id: Seat ID
        reservation_date: Date (YYYY-MM-DD or date)

    Returns:
        The new active reservation dict

    Raises:
        PermissionDeniedError, ValidationError, PersonNotFoundError, SeatNotFoundError,
        PersonAlreadyBookedError, SeatTakenError, ConflictRetryableError
    """
    if admin_role != ROLE_ADMIN:
        raise PermissionDeniedError()

    date_str = date_to_str(parse_date(reservation_date, 'reservation_date'))
    seat_id = parse_id(seat_id, 'seat_id')
    person_id = parse_id(person_id, 'person_id')

    def _assign(cursor):
        person = cursor.execute(
            'SELECT id FROM users WHERE id = ? AND active = 1', (person_id,)
        ).fetchone()
        if not person:
            raise PersonNotFoundError(person_id)

        seat = _load_seat_for_date(cursor, seat_id, date_str)
        check_slot_conflicts(cursor, seat['id'], person_id, date_str)
        return insert_reservation(cursor, seat['id'], person_id, date_str, created_by=admin_id)

    reservation_id = _run_atomic(_assign)
    reservation = get_reservation_by_id(reservation_id)

    logger.info('Admin %s assigned seat %s to person %s for %s',
                admin_id, seat_id, person_id, date_str)
    log_audit('ASSIGN', 'reservation', reservation_id, after={
        'seat_id': seat_id,
        'person_id': person_id,
        'reservation_date': date_str,
    }, user_id=admin_id)

    return reservation


def modify_reservation(person_id: int, reservation_id: int, new_seat_id: int, now=None) -> dict:
    """
    Move a person's reservation to another seat on the same date.

    This is cancel followed by book, two separate transactions. Another
    request may take the new seat in between; the original reservation then
    stays cancelled and the booking error is raised.

    Args:
        person_id: Verified person ID of the caller
        reservation_id: Reservation to move
        new_seat_id: Seat to move to
        now: Current instant (defaults to the configured clock)

    Returns:
        The new active reservation dict (or the unchanged one for the same seat)

    Raises:
        ValidationError, ReservationNotFoundError, TooLateError, and any error of book_seat
    """
    new_seat_id = parse_id(new_seat_id, 'seat_id')
    existing = get_reservation_by_id(parse_id(reservation_id, 'reservation_id'))
    if not existing or existing['person_id'] != person_id or existing['status'] != 'active':
        raise ReservationNotFoundError(reservation_id)

    if existing['seat_id'] == new_seat_id:
        return existing

    # Fail before cancelling when the rebooking could never pass the lead-time rule
    _check_lead_time(parse_date(existing['reservation_date']), now)

    cancel_reservation(person_id, reservation_id)
    try:
        return book_seat(person_id, new_seat_id, existing['reservation_date'], now=now)
    except Exception:
        logger.info('Modify of reservation %s left it cancelled: rebooking seat %s failed',
                    reservation_id, new_seat_id)
        raise
