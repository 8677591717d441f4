"""
Tests for seat availability listings.
"""

from datetime import date, datetime

from models.reservation import (
    book_seat, cancel_reservation, list_available_seats, list_seats_for_date,
    summarize_seats
)
from models.user import ROLE_ADMIN, ROLE_MEMBER

DAY = date(2025, 6, 10)
NOW = datetime(2025, 6, 9, 10, 0)


class TestListSeatsForDate:
    """Occupancy view with role-dependent occupant detail."""

    def test_sorted_by_seat_number(self, make_seat):
        make_seat(3, DAY)
        make_seat(1, DAY)
        make_seat(2, DAY)

        seats = list_seats_for_date(DAY)

        assert [seat['seat_number'] for seat in seats] == [1, 2, 3]
        assert all(not seat['occupied'] for seat in seats)

    def test_only_requested_date(self, make_seat):
        make_seat(1, DAY)
        make_seat(1, date(2025, 6, 11))

        seats = list_seats_for_date(DAY)

        assert len(seats) == 1
        assert seats[0]['offered_date'] == '2025-06-10'

    def test_member_sees_occupied_without_occupant(self, make_person, make_seat):
        """Other people's bookings are anonymous to members."""
        alice = make_person('Alice')
        bob = make_person('Bob')
        seat = make_seat(1, DAY)
        book_seat(alice, seat['id'], DAY, now=NOW)

        seats = list_seats_for_date(DAY, viewer_id=bob, viewer_role=ROLE_MEMBER)

        assert seats[0]['occupied'] is True
        assert seats[0]['occupant'] is None
        assert seats[0]['reservation_id'] is None
        assert seats[0]['is_mine'] is False

    def test_member_sees_own_booking(self, make_person, make_seat):
        alice = make_person('Alice')
        seat = make_seat(1, DAY)
        reservation = book_seat(alice, seat['id'], DAY, now=NOW)

        seats = list_seats_for_date(DAY, viewer_id=alice, viewer_role=ROLE_MEMBER)

        assert seats[0]['is_mine'] is True
        assert seats[0]['occupant']['id'] == alice
        assert seats[0]['reservation_id'] == reservation['id']

    def test_admin_sees_every_occupant(self, admin_id, make_person, make_seat):
        alice = make_person('Alice')
        seat = make_seat(1, DAY)
        book_seat(alice, seat['id'], DAY, now=NOW)

        seats = list_seats_for_date(DAY, viewer_id=admin_id, viewer_role=ROLE_ADMIN)

        assert seats[0]['occupant']['id'] == alice
        assert seats[0]['occupant']['name'] == 'Alice Tester'
        assert seats[0]['is_mine'] is False

    def test_cancelled_bookings_free_the_seat(self, make_person, make_seat):
        alice = make_person('Alice')
        seat = make_seat(1, DAY)
        reservation = book_seat(alice, seat['id'], DAY, now=NOW)
        cancel_reservation(alice, reservation['id'])

        seats = list_seats_for_date(DAY, viewer_id=alice, viewer_role=ROLE_MEMBER)

        assert seats[0]['occupied'] is False

    def test_summary(self, make_person, make_seat):
        alice = make_person('Alice')
        seat = make_seat(1, DAY)
        make_seat(2, DAY)
        book_seat(alice, seat['id'], DAY, now=NOW)

        summary = summarize_seats(list_seats_for_date(DAY))

        assert summary == {'total': 2, 'occupied': 1, 'available': 1}


class TestListAvailableSeats:
    """Free seats for a date."""

    def test_excludes_occupied(self, make_person, make_seat):
        alice = make_person('Alice')
        seat_a = make_seat(1, DAY)
        seat_b = make_seat(2, DAY)
        book_seat(alice, seat_a['id'], DAY, now=NOW)

        available = list_available_seats(DAY)

        assert [seat['id'] for seat in available] == [seat_b['id']]
        assert 'occupant' not in available[0]

    def test_excludes_deleted(self, make_seat):
        from models.seat import delete_seat

        seat_a = make_seat(1, DAY)
        make_seat(2, DAY)
        delete_seat(seat_a['id'])

        assert [seat['seat_number'] for seat in list_available_seats(DAY)] == [2]

    def test_empty_day(self, app):
        assert list_available_seats('2030-01-01') == []

    def test_amenities_decoded(self, make_seat):
        make_seat(1, DAY, amenities=['window', 'monitor'])

        seat = list_available_seats(DAY)[0]

        assert seat['amenities'] == ['monitor', 'window']
