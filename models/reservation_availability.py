"""
Seat availability for a date.

Read-only projection of the seat directory joined with active reservations.
Each listing is a single SELECT, so it reflects one consistent snapshot.
"""

import json

from database import get_db
from models.user import ROLE_ADMIN
from utils.datetime_helpers import date_to_str

SEAT_OCCUPANCY_SELECT = '''
    SELECT s.id, s.seat_number, s.offered_date, s.location, s.amenities,
           r.id AS reservation_id, r.person_id,
           u.first_name, u.last_name, u.email
    FROM seats s
    LEFT JOIN reservations r
           ON r.seat_id = s.id
          AND r.reservation_date = s.offered_date
          AND r.status = 'active'
    LEFT JOIN users u ON u.id = r.person_id
    WHERE s.offered_date = ? AND s.active = 1
'''


def _seat_fields(row) -> dict:
    return {
        'id': row['id'],
        'seat_number': row['seat_number'],
        'offered_date': row['offered_date'],
        'location': row['location'],
        'amenities': json.loads(row['amenities']) if row['amenities'] else [],
    }


def list_seats_for_date(reservation_date, viewer_id: int = None, viewer_role: str = None) -> list:
    """
    Every seat offered on a date with its occupancy.

    The occupant is shown to administrators and to the person holding the
    seat; everyone else only sees that the seat is occupied.

    Args:
        reservation_date: Date (YYYY-MM-DD or date)
        viewer_id: Person ID of the caller
        viewer_role: Role of the caller ('member' or 'administrator')

    Returns:
        List of seat dicts with 'occupied', 'occupant', 'is_mine' and
        'reservation_id' (None when withheld), ordered by seat number
    """
    db = get_db()
    rows = db.execute(
        SEAT_OCCUPANCY_SELECT + ' ORDER BY s.seat_number',
        (date_to_str(reservation_date),)
    ).fetchall()

    is_admin = viewer_role == ROLE_ADMIN
    seats = []
    for row in rows:
        seat = _seat_fields(row)
        occupied = row['reservation_id'] is not None
        is_mine = occupied and viewer_id is not None and row['person_id'] == viewer_id

        seat['occupied'] = occupied
        seat['is_mine'] = is_mine
        seat['occupant'] = None
        seat['reservation_id'] = None

        if occupied and (is_admin or is_mine):
            seat['reservation_id'] = row['reservation_id']
            seat['occupant'] = {
                'id': row['person_id'],
                'name': f"{row['first_name']} {row['last_name']}".strip(),
                'email': row['email'],
            }
        seats.append(seat)

    return seats


def list_available_seats(reservation_date) -> list:
    """
    Seats offered on a date with no active reservation.

    Args:
        reservation_date: Date (YYYY-MM-DD or date)

    Returns:
        List of seat dicts ordered by seat number
    """
    db = get_db()
    rows = db.execute(
        SEAT_OCCUPANCY_SELECT + ' AND r.id IS NULL ORDER BY s.seat_number',
        (date_to_str(reservation_date),)
    ).fetchall()
    return [_seat_fields(row) for row in rows]


def summarize_seats(seats: list) -> dict:
    """
    Count totals for a list produced by list_seats_for_date.

    Returns:
        dict: {'total': int, 'occupied': int, 'available': int}
    """
    occupied = sum(1 for seat in seats if seat['occupied'])
    return {
        'total': len(seats),
        'occupied': occupied,
        'available': len(seats) - occupied,
    }
