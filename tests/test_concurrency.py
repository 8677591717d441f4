"""
Concurrency tests for the allocation engine.
Each thread gets its own app context and therefore its own SQLite connection.
"""

import threading
from datetime import date, datetime

from database import get_db
from models.reservation import book_seat, cancel_reservation, get_active_reservations
from models.reservation_errors import PersonAlreadyBookedError, ReservationError, SeatTakenError

DAY = date(2025, 6, 10)
NOW = datetime(2025, 6, 9, 10, 0)


def _run_concurrently(app, jobs):
    """
    Start every job at once and collect (result, error) per job.

    Args:
        app: Flask application
        jobs: List of zero-argument callables run inside an app context
    """
    barrier = threading.Barrier(len(jobs))
    outcomes = [None] * len(jobs)

    def _worker(index, job):
        with app.app_context():
            barrier.wait()
            try:
                outcomes[index] = (job(), None)
            except ReservationError as e:
                outcomes[index] = (None, e)

    threads = [threading.Thread(target=_worker, args=(i, job)) for i, job in enumerate(jobs)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)
    return outcomes


class TestConcurrentBooking:
    """Races on the same seat or the same person."""

    def test_same_seat_one_winner(self, app, make_person, make_seat):
        """Many people racing for one seat: exactly one wins."""
        people = [make_person(f'P{i}') for i in range(6)]
        seat = make_seat(1, DAY)

        outcomes = _run_concurrently(app, [
            (lambda pid=pid: book_seat(pid, seat['id'], DAY, now=NOW)) for pid in people
        ])

        winners = [result for result, error in outcomes if result]
        losers = [error for result, error in outcomes if error]
        assert len(winners) == 1
        assert len(losers) == len(people) - 1
        assert all(isinstance(error, SeatTakenError) for error in losers)
        assert len(get_active_reservations(seat_id=seat['id'])) == 1

    def test_same_person_one_seat(self, app, make_person, make_seat):
        """One person racing for several seats ends with exactly one."""
        alice = make_person('Alice')
        seats = [make_seat(n, DAY) for n in range(1, 6)]

        outcomes = _run_concurrently(app, [
            (lambda sid=seat['id']: book_seat(alice, sid, DAY, now=NOW)) for seat in seats
        ])

        winners = [result for result, error in outcomes if result]
        losers = [error for result, error in outcomes if error]
        assert len(winners) == 1
        assert all(isinstance(error, PersonAlreadyBookedError) for error in losers)
        assert len(get_active_reservations(person_id=alice)) == 1

    def test_crowd_keeps_both_invariants(self, app, make_person, make_seat):
        """Every person tries every seat; no seat or person ends up doubled."""
        people = [make_person(f'C{i}') for i in range(4)]
        seats = [make_seat(n, DAY) for n in range(1, 4)]

        jobs = [
            (lambda pid=pid, sid=seat['id']: book_seat(pid, sid, DAY, now=NOW))
            for pid in people for seat in seats
        ]
        outcomes = _run_concurrently(app, jobs)

        assert all(outcome is not None for outcome in outcomes)

        rows = get_db().execute('''
            SELECT seat_id, person_id FROM reservations
            WHERE reservation_date = ? AND status = 'active'
        ''', (DAY.isoformat(),)).fetchall()
        seat_ids = [row['seat_id'] for row in rows]
        person_ids = [row['person_id'] for row in rows]
        assert len(seat_ids) == len(set(seat_ids))
        assert len(person_ids) == len(set(person_ids))
        # Three seats, four people: every seat gets filled
        assert len(rows) == len(seats)

    def test_cancel_and_book_race(self, app, make_person, make_seat):
        """A cancel racing a booking never leaves two active reservations."""
        alice = make_person('Alice')
        bob = make_person('Bob')
        seat = make_seat(1, DAY)
        reservation = book_seat(alice, seat['id'], DAY, now=NOW)

        _run_concurrently(app, [
            lambda: cancel_reservation(alice, reservation['id']),
            lambda: book_seat(bob, seat['id'], DAY, now=NOW),
        ])

        assert len(get_active_reservations(seat_id=seat['id'])) <= 1
