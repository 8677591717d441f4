"""
Reporting routes (administrators only).
Seat usage, daily occupancy and the audit trail.
"""

from flask import request, Response, Blueprint
from flask_login import login_required

from models.audit_log import get_audit_logs
from models.reservation_errors import ReservationError, ValidationError
from models.usage_report import get_daily_occupancy, get_seat_usage
from utils.api_response import api_success, api_reservation_error
from utils.decorators import admin_required
from utils.validators import parse_date

reports_bp = Blueprint('reports', __name__)


def _date_range():
    """Parse date_from/date_to query params into an ordered pair."""
    date_from = parse_date(request.args.get('date_from'), 'date_from')
    date_to = parse_date(request.args.get('date_to'), 'date_to')
    if date_to < date_from:
        raise ValidationError('date_to must not be before date_from')
    return date_from, date_to


@reports_bp.route('/seat-usage')
@login_required
@admin_required
def seat_usage() -> tuple[Response, int]:
    """
    Active reservations per seat over a date range.

    Query params:
        date_from, date_to: YYYY-MM-DD (required, inclusive)
        location: Optional location filter
    """
    try:
        date_from, date_to = _date_range()
    except ReservationError as e:
        return api_reservation_error(e)

    location = request.args.get('location') or None
    usage = get_seat_usage(date_from, date_to, location=location)
    return api_success(
        data=usage,
        date_from=date_from.isoformat(),
        date_to=date_to.isoformat(),
        total_reservations=sum(row['total_reservations'] for row in usage)
    )


@reports_bp.route('/daily-occupancy')
@login_required
@admin_required
def daily_occupancy() -> tuple[Response, int]:
    """
    Seats offered and booked per day over a date range.

    Query params:
        date_from, date_to: YYYY-MM-DD (required, inclusive)
        location: Optional location filter
    """
    try:
        date_from, date_to = _date_range()
    except ReservationError as e:
        return api_reservation_error(e)

    location = request.args.get('location') or None
    return api_success(data=get_daily_occupancy(date_from, date_to, location=location))


@reports_bp.route('/audit-logs')
@login_required
@admin_required
def audit_logs() -> tuple[Response, int]:
    """
    Recent administrator actions, newest first.

    Query params:
        entity_type: Optional ('seat', 'reservation')
        entity_id: Optional entity ID
        user_id: Optional acting user ID
        limit: Max entries (default 100, capped at 500)
    """
    limit = min(request.args.get('limit', 100, type=int), 500)
    logs = get_audit_logs(
        entity_type=request.args.get('entity_type') or None,
        entity_id=request.args.get('entity_id', type=int),
        user_id=request.args.get('user_id', type=int),
        limit=max(limit, 1)
    )
    return api_success(data=logs, count=len(logs))
