"""
Seat directory routes (administrators only).
Create, list, edit and delete the seats offered per date.
"""

from flask import current_app, request, Response, Blueprint
from flask_login import login_required

from models.reservation_errors import ReservationError, SeatNotFoundError, ValidationError
from models.seat import (
    create_seat,
    create_seats_for_range,
    delete_seat,
    get_all_seats,
    get_locations,
    get_seat_by_id,
    update_seat,
)
from utils.api_response import api_success, api_error, api_reservation_error
from utils.audit import log_audit
from utils.decorators import admin_required
from utils.messages import MESSAGES
from utils.validators import (
    parse_amenities, parse_date, parse_id, sanitize_input, validate_seat_number
)

seats_bp = Blueprint('seats', __name__)


def _location_from(data: dict):
    """Sanitized location, or None when absent."""
    if data.get('location') is None:
        return None
    location = sanitize_input(str(data['location']), max_length=100)
    if not location:
        raise ValidationError('location must not be empty')
    return location


@seats_bp.route('/', methods=['GET'])
@login_required
@admin_required
def list_seats() -> tuple[Response, int]:
    """
    List live seats.

    Query params:
        date: Optional YYYY-MM-DD filter
    """
    offered_date = None
    if request.args.get('date'):
        try:
            offered_date = parse_date(request.args.get('date'))
        except ReservationError as e:
            return api_reservation_error(e)

    seats = get_all_seats(offered_date=offered_date)
    return api_success(data=seats, count=len(seats), locations=get_locations())


@seats_bp.route('/', methods=['POST'])
@login_required
@admin_required
def add_seat() -> tuple[Response, int]:
    """
    Offer one seat on a date.

    Request body:
        seat_number: Positive integer
        date: YYYY-MM-DD
        location: Optional free text
        amenities: Optional list (or comma-separated string)
    """
    data = request.get_json(silent=True)
    if not data:
        return api_error(MESSAGES['json_required'], 400, code='VALIDATION_ERROR')

    try:
        seat = create_seat(
            validate_seat_number(data.get('seat_number')),
            parse_date(data.get('date')),
            location=_location_from(data) or current_app.config.get('DEFAULT_SEAT_LOCATION'),
            amenities=parse_amenities(data.get('amenities'))
        )
    except ReservationError as e:
        current_app.logger.info(f"Seat creation refused: {e}")
        return api_reservation_error(e)

    log_audit('CREATE', 'seat', seat['id'], after=seat)
    return api_success(data=seat, message=MESSAGES['seat_created'], status=201)


@seats_bp.route('/seed', methods=['POST'])
@login_required
@admin_required
def seed_seats() -> tuple[Response, int]:
    """
    Offer seats 1..count on every day of a date range.

    Request body:
        count: Seats per day
        date_from: YYYY-MM-DD
        date_to: YYYY-MM-DD
        location: Optional free text
    """
    data = request.get_json(silent=True)
    if not data:
        return api_error(MESSAGES['json_required'], 400, code='VALIDATION_ERROR')

    try:
        seat_count = parse_id(data.get('count'), 'count')
        date_from = parse_date(data.get('date_from'), 'date_from')
        date_to = parse_date(data.get('date_to'), 'date_to')
        if date_to < date_from:
            raise ValidationError('date_to must not be before date_from')
        location = _location_from(data) or current_app.config.get('DEFAULT_SEAT_LOCATION')
        created = create_seats_for_range(seat_count, date_from, date_to, location=location)
    except ReservationError as e:
        return api_reservation_error(e)

    log_audit('CREATE', 'seat', None, after={
        'count': seat_count,
        'date_from': date_from.isoformat(),
        'date_to': date_to.isoformat(),
        'location': location,
        'created': created,
    })
    return api_success(data={'created': created}, message=MESSAGES['seats_seeded'].format(count=created), status=201)


@seats_bp.route('/<int:seat_id>', methods=['GET'])
@login_required
@admin_required
def seat_detail(seat_id: int) -> tuple[Response, int]:
    """Single seat."""
    seat = get_seat_by_id(seat_id)
    if not seat:
        return api_reservation_error(SeatNotFoundError(seat_id))
    return api_success(data=seat)


@seats_bp.route('/<int:seat_id>', methods=['PUT'])
@login_required
@admin_required
def edit_seat(seat_id: int) -> tuple[Response, int]:
    """
    Edit location and/or amenities. Number and date are fixed.

    Request body:
        location: Optional free text
        amenities: Optional list
    """
    data = request.get_json(silent=True)
    if not data:
        return api_error(MESSAGES['json_required'], 400, code='VALIDATION_ERROR')

    before = get_seat_by_id(seat_id)
    try:
        if 'seat_number' in data or 'date' in data:
            raise ValidationError('seat_number and date cannot be changed')
        amenities = parse_amenities(data['amenities']) if 'amenities' in data else None
        seat = update_seat(seat_id, location=_location_from(data), amenities=amenities)
    except ReservationError as e:
        return api_reservation_error(e)

    log_audit('UPDATE', 'seat', seat_id, before=before, after=seat)
    return api_success(data=seat, message=MESSAGES['seat_updated'])


@seats_bp.route('/<int:seat_id>', methods=['DELETE'])
@login_required
@admin_required
def remove_seat(seat_id: int) -> tuple[Response, int]:
    """Delete a seat that holds no upcoming active reservation."""
    try:
        seat = delete_seat(seat_id)
    except ReservationError as e:
        current_app.logger.info(f"Seat {seat_id} deletion refused: {e}")
        return api_reservation_error(e)

    log_audit('DELETE', 'seat', seat_id, before=seat)
    return api_success(
        data=seat,
        message=MESSAGES['seat_deleted'].format(seat_number=seat['seat_number'], offered_date=seat['offered_date'])
    )
