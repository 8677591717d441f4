"""
Tests for the seat directory.
"""

from datetime import date, timedelta

import pytest

from models.reservation import manual_assign
from models.reservation_errors import SeatExistsError, SeatInUseError, SeatNotFoundError
from models.seat import (
    create_seat, create_seats_for_range, delete_seat, get_all_seats,
    get_locations, get_seat_by_id, get_seat_by_number, get_seats_for_date,
    update_seat
)
from models.user import ROLE_ADMIN

DAY = date(2025, 6, 10)


class TestCreateSeat:
    """Tests for seat creation."""

    def test_create_defaults(self, app):
        seat = create_seat(1, DAY)

        assert seat['seat_number'] == 1
        assert seat['offered_date'] == '2025-06-10'
        assert seat['location'] == 'Main Floor'
        assert seat['amenities'] == []

    def test_duplicate_number_and_date(self, app):
        create_seat(1, DAY)

        with pytest.raises(SeatExistsError):
            create_seat(1, DAY)

    def test_same_number_other_date(self, app):
        create_seat(1, DAY)
        other = create_seat(1, DAY + timedelta(days=1))

        assert other['offered_date'] == '2025-06-11'

    def test_number_reusable_after_delete(self, app):
        seat = create_seat(1, DAY)
        delete_seat(seat['id'])

        again = create_seat(1, DAY)

        assert again['id'] != seat['id']
        assert get_seat_by_number(1, DAY)['id'] == again['id']


class TestSeedSeats:
    """Tests for bulk seat seeding."""

    def test_seed_range(self, app):
        created = create_seats_for_range(3, DAY, DAY + timedelta(days=1), location='North Wing')

        assert created == 6
        assert [s['seat_number'] for s in get_seats_for_date(DAY)] == [1, 2, 3]
        assert get_locations() == ['North Wing']

    def test_seed_skips_existing(self, app):
        create_seat(2, DAY)

        created = create_seats_for_range(3, DAY, DAY)

        assert created == 2
        assert len(get_seats_for_date(DAY)) == 3

    def test_seed_rejects_reversed_range(self, app):
        with pytest.raises(ValueError):
            create_seats_for_range(3, DAY, DAY - timedelta(days=1))


class TestUpdateSeat:
    """Only location and amenities are editable."""

    def test_update_location_and_amenities(self, app):
        seat = create_seat(1, DAY)

        updated = update_seat(seat['id'], location='Quiet Room', amenities=['window', 'dock'])

        assert updated['location'] == 'Quiet Room'
        assert updated['amenities'] == ['dock', 'window']
        assert updated['seat_number'] == 1

    def test_update_nothing(self, app):
        seat = create_seat(1, DAY)

        assert update_seat(seat['id'])['id'] == seat['id']

    def test_update_missing(self, app):
        with pytest.raises(SeatNotFoundError):
            update_seat(999, location='Anywhere')


class TestDeleteSeat:
    """Seat deletion is soft and guarded by upcoming reservations."""

    def test_soft_delete(self, app):
        seat = create_seat(1, DAY)

        deleted = delete_seat(seat['id'])

        assert deleted['id'] == seat['id']
        assert get_seat_by_id(seat['id']) is None
        assert get_seat_by_id(seat['id'], include_deleted=True)['active'] == 0
        assert get_all_seats() == []

    def test_refused_with_upcoming_reservation(self, admin_id, make_person, future_day):
        alice = make_person('Alice')
        seat = create_seat(1, future_day)
        manual_assign(admin_id, ROLE_ADMIN, alice, seat['id'], future_day)

        with pytest.raises(SeatInUseError):
            delete_seat(seat['id'])

        assert get_seat_by_id(seat['id']) is not None

    def test_allowed_with_past_reservation(self, admin_id, make_person):
        """History stays in the ledger; the seat can go."""
        alice = make_person('Alice')
        past = date(2020, 1, 6)
        seat = create_seat(1, past)
        manual_assign(admin_id, ROLE_ADMIN, alice, seat['id'], past)

        delete_seat(seat['id'])

        assert get_seat_by_id(seat['id']) is None

    def test_delete_missing(self, app):
        with pytest.raises(SeatNotFoundError):
            delete_seat(999)

    def test_delete_twice(self, app):
        seat = create_seat(1, DAY)
        delete_seat(seat['id'])

        with pytest.raises(SeatNotFoundError):
            delete_seat(seat['id'])
