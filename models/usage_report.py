"""
Seat usage reporting.
Aggregates active ledger entries over a date range.
"""

from database import get_db
from utils.datetime_helpers import date_to_str


def get_seat_usage(date_from, date_to, location: str = None) -> list:
    """
    Reservations per seat number and location over an inclusive date range.

    Args:
        date_from: First date (YYYY-MM-DD or date)
        date_to: Last date (YYYY-MM-DD or date)
        location: Optional location filter ('all' means no filter)

    Returns:
        List of dicts: seat_number, location, total_reservations, unique_people,
        ordered by total_reservations descending then seat number
    """
    db = get_db()

    query = '''
        SELECT s.seat_number, s.location,
               COUNT(r.id) AS total_reservations,
               COUNT(DISTINCT r.person_id) AS unique_people
        FROM reservations r
        JOIN seats s ON r.seat_id = s.id
        WHERE r.status = 'active'
          AND r.reservation_date BETWEEN ? AND ?
    '''
    params = [date_to_str(date_from), date_to_str(date_to)]

    if location and location != 'all':
        query += ' AND s.location = ?'
        params.append(location)

    query += '''
        GROUP BY s.seat_number, s.location
        ORDER BY total_reservations DESC, s.seat_number, s.location
    '''

    return [dict(row) for row in db.execute(query, params).fetchall()]


def get_daily_occupancy(date_from, date_to, location: str = None) -> list:
    """
    Seats offered and booked per day over an inclusive date range.

    Args:
        date_from: First date
        date_to: Last date
        location: Optional location filter ('all' means no filter)

    Returns:
        List of dicts: date, seats_offered, seats_booked, occupancy_rate (0-100)
    """
    db = get_db()

    query = '''
        SELECT s.offered_date AS date,
               COUNT(s.id) AS seats_offered,
               COUNT(r.id) AS seats_booked
        FROM seats s
        LEFT JOIN reservations r
               ON r.seat_id = s.id
              AND r.reservation_date = s.offered_date
              AND r.status = 'active'
        WHERE s.active = 1
          AND s.offered_date BETWEEN ? AND ?
    '''
    params = [date_to_str(date_from), date_to_str(date_to)]

    if location and location != 'all':
        query += ' AND s.location = ?'
        params.append(location)

    query += ' GROUP BY s.offered_date ORDER BY s.offered_date'

    days = []
    for row in db.execute(query, params).fetchall():
        day = dict(row)
        offered = day['seats_offered']
        day['occupancy_rate'] = round(day['seats_booked'] * 100.0 / offered, 1) if offered else 0.0
        days.append(day)
    return days
