"""Timezone-aware date/time helpers for seat bookings."""

from datetime import date, datetime, time
from typing import Union
from zoneinfo import ZoneInfo

from flask import current_app

from utils.validators import parse_date


def get_timezone() -> ZoneInfo:
    """Get the configured timezone."""
    tz_name = current_app.config.get('TIMEZONE', 'UTC')
    return ZoneInfo(tz_name)


def get_today() -> date:
    """Get today's date in the configured timezone."""
    return datetime.now(get_timezone()).date()


def get_now() -> datetime:
    """Get current datetime in the configured timezone."""
    return datetime.now(get_timezone())


def date_to_str(value: Union[str, date]) -> str:
    """Convert a date value to ISO format string."""
    if hasattr(value, 'isoformat'):
        return value.isoformat()
    return str(value)


def start_of_day(value: Union[str, date]) -> datetime:
    """Midnight of the given calendar date in the configured timezone."""
    return datetime.combine(parse_date(value), time.min, tzinfo=get_timezone())


def as_aware(moment: datetime) -> datetime:
    """Attach the configured timezone to a naive datetime."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=get_timezone())
    return moment
