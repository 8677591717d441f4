"""
Tests for input validation utilities.
"""

from datetime import date, datetime

import pytest
from models.reservation_errors import ValidationError
from utils.validators import (
    validate_email,
    validate_date_format,
    validate_seat_number,
    parse_choice,
    parse_date,
    parse_id,
    parse_amenities,
    sanitize_input
)


class TestValidateEmail:
    """Tests for email validation."""

    def test_valid_email(self):
        assert validate_email('user@example.com') is True
        assert validate_email('user.name+tag@example.co.uk') is True

    def test_invalid_email(self):
        assert validate_email('') is False
        assert validate_email(None) is False
        assert validate_email('invalid') is False
        assert validate_email('missing@domain') is False


class TestParseDate:
    """Tests for required date parameters."""

    def test_valid(self):
        assert validate_date_format('2025-06-10') is True
        assert parse_date('2025-06-10') == date(2025, 6, 10)

    def test_missing(self):
        with pytest.raises(ValidationError, match='date is required'):
            parse_date(None)

    def test_malformed_uses_field_name(self):
        with pytest.raises(ValidationError, match='date_from'):
            parse_date('10/06/2025', 'date_from')

    def test_impossible_date(self):
        with pytest.raises(ValidationError):
            parse_date('2025-02-30')

    def test_non_string(self):
        with pytest.raises(ValidationError):
            parse_date(20250610)

    def test_date_objects_pass_through(self):
        assert parse_date(date(2025, 6, 10)) == date(2025, 6, 10)
        assert parse_date(datetime(2025, 6, 10, 14, 30)) == date(2025, 6, 10)


class TestParseChoice:
    """Tests for optional enumerated parameters."""

    def test_absent(self):
        assert parse_choice(None, 'status', ('active', 'cancelled')) is None
        assert parse_choice('', 'status', ('active', 'cancelled')) is None

    def test_allowed(self):
        assert parse_choice('cancelled', 'status', ('active', 'cancelled')) == 'cancelled'

    def test_unknown(self):
        with pytest.raises(ValidationError, match="status must be one of 'active', 'cancelled'"):
            parse_choice('pending', 'status', ('active', 'cancelled'))


class TestParseId:
    """Tests for positive integer identifiers."""

    def test_accepts_int_and_numeric_string(self):
        assert parse_id(7, 'seat_id') == 7
        assert parse_id('12', 'seat_id') == 12

    @pytest.mark.parametrize('value', [0, -3, 'abc', True, 1.5j])
    def test_rejects_invalid(self, value):
        with pytest.raises(ValidationError):
            parse_id(value, 'seat_id')

    def test_missing(self):
        with pytest.raises(ValidationError, match='seat_id is required'):
            parse_id(None, 'seat_id')

    def test_seat_number(self):
        assert validate_seat_number('4') == 4
        with pytest.raises(ValidationError):
            validate_seat_number(0)


class TestParseAmenities:
    """Tests for amenity normalization."""

    def test_list_is_sorted_and_unique(self):
        assert parse_amenities(['window', ' dock ', 'window', '']) == ['dock', 'window']

    def test_comma_separated(self):
        assert parse_amenities('monitor, standing desk') == ['monitor', 'standing desk']

    def test_empty(self):
        assert parse_amenities(None) == []
        assert parse_amenities('') == []

    def test_rejects_other_types(self):
        with pytest.raises(ValidationError):
            parse_amenities({'window': True})
        with pytest.raises(ValidationError):
            parse_amenities([1, 2])


class TestSanitizeInput:
    """Tests for input sanitization."""

    def test_strips_whitespace(self):
        assert sanitize_input('  Quiet Room  ') == 'Quiet Room'

    def test_max_length(self):
        assert sanitize_input('abcdef', max_length=3) == 'abc'

    def test_empty(self):
        assert sanitize_input('') == ''
        assert sanitize_input(None) == ''
