"""
Parsing and checks for caller-supplied values, shared by routes and models.
Parsers raise ValidationError, which routes turn into a 400.
"""

import re
from datetime import date, datetime

from models.reservation_errors import ValidationError

DATE_FORMAT = '%Y-%m-%d'
EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


def validate_email(email: str) -> bool:
    """Loose syntactic check, used for lookup parameters."""
    return bool(email) and EMAIL_PATTERN.match(email) is not None


def validate_date_format(date_str: str) -> bool:
    try:
        datetime.strptime(date_str, DATE_FORMAT)
    except (TypeError, ValueError):
        return False
    return True


def parse_date(value, field: str = 'date') -> date:
    """
    Required date: a YYYY-MM-DD string, or a date/datetime passed through.

    Raises:
        ValidationError: Missing or malformed
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        raise ValidationError(f'{field} is required')
    if not isinstance(value, str) or not validate_date_format(value):
        raise ValidationError(f'{field} must be a date in YYYY-MM-DD format')
    return datetime.strptime(value, DATE_FORMAT).date()


def parse_id(value, field: str) -> int:
    """
    Parse a required positive integer identifier.

    Raises:
        ValidationError: If the value is missing or not a positive integer
    """
    if value is None or value == '':
        raise ValidationError(f'{field} is required')
    if isinstance(value, bool):
        raise ValidationError(f'{field} must be a positive integer')
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be a positive integer')
    if parsed <= 0:
        raise ValidationError(f'{field} must be a positive integer')
    return parsed


def parse_choice(value, field: str, choices) -> str:
    """
    Optional value restricted to `choices`; None when absent.

    Raises:
        ValidationError: Value outside `choices`
    """
    if value is None or value == '':
        return None
    if value not in choices:
        allowed = ', '.join(f"'{choice}'" for choice in choices)
        raise ValidationError(f'{field} must be one of {allowed}')
    return value


def validate_seat_number(value) -> int:
    """Seat numbers are positive integers."""
    return parse_id(value, 'seat_number')


def parse_amenities(value) -> list:
    """
    Normalize amenities into a sorted list of unique, non-empty strings.
    Accepts a list or a comma-separated string.

    Raises:
        ValidationError: If the value has an unsupported type
    """
    if value is None or value == '':
        return []
    if isinstance(value, str):
        items = value.split(',')
    elif isinstance(value, (list, tuple, set)):
        items = value
    else:
        raise ValidationError('amenities must be a list of strings')

    cleaned = set()
    for item in items:
        if not isinstance(item, str):
            raise ValidationError('amenities must be a list of strings')
        item = sanitize_input(item, max_length=50)
        if item:
            cleaned.add(item)
    return sorted(cleaned)


def sanitize_input(text: str, max_length: int = None) -> str:
    """Trimmed text, cut to max_length when given; '' for None."""
    if not text:
        return ''
    cleaned = text.strip()
    return cleaned[:max_length] if max_length else cleaned
