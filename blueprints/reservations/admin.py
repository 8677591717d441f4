"""
Administrator reservation routes.
Day overview, per-person lookup and manual assignment.
"""

from flask import current_app, request, Response, Blueprint
from flask_login import login_required, current_user

from models.reservation import (
    STATUS_ACTIVE,
    STATUS_CANCELLED,
    get_reservations_by_date,
    get_reservations_for_person,
    manual_assign,
)
from models.reservation_errors import PersonNotFoundError, ReservationError, ValidationError
from models.user import get_user_by_email, get_user_by_id, public_user
from utils.api_response import api_success, api_error, api_reservation_error
from utils.decorators import admin_required
from utils.messages import MESSAGES
from utils.validators import parse_choice, parse_date, parse_id, validate_email


def register_routes(bp: Blueprint) -> None:
    """Register administrator reservation routes on the blueprint."""

    @bp.route('/by-date')
    @login_required
    @admin_required
    def reservations_by_date() -> tuple[Response, int]:
        """
        All reservations on a date.

        Query params:
            date: YYYY-MM-DD (required)
            status: Optional 'active' or 'cancelled'
        """
        try:
            target = parse_date(request.args.get('date'))
            status = parse_choice(request.args.get('status'), 'status', (STATUS_ACTIVE, STATUS_CANCELLED))
        except ReservationError as e:
            return api_reservation_error(e)

        reservations = get_reservations_by_date(target, status=status)
        return api_success(data=reservations, count=len(reservations))

    @bp.route('/by-person')
    @login_required
    @admin_required
    def reservations_by_person() -> tuple[Response, int]:
        """
        Reservation history of one person.

        Query params:
            person_id: Person ID, or
            email: Person email
        """
        person_id = request.args.get('person_id')
        email = request.args.get('email', '').strip()

        if not person_id and not email:
            return api_error(MESSAGES['person_lookup_required'], 400, code='VALIDATION_ERROR')

        try:
            if person_id:
                person_id = parse_id(person_id, 'person_id')
                person = get_user_by_id(person_id)
            else:
                if not validate_email(email):
                    raise ValidationError('email must be a valid email address')
                person = get_user_by_email(email)
            if not person:
                raise PersonNotFoundError(person_id)
        except ReservationError as e:
            return api_reservation_error(e)

        reservations = get_reservations_for_person(person['id'])
        return api_success(data=reservations, person=public_user(person), count=len(reservations))

    @bp.route('/manual-assign', methods=['POST'])
    @login_required
    @admin_required
    def manual_assign_route() -> tuple[Response, int]:
        """
        Assign a seat to a person, bypassing the lead-time rule.

        Request body:
            person_id: Person receiving the seat
            seat_id: Seat ID
            date: YYYY-MM-DD
        """
        data = request.get_json(silent=True)
        if not data:
            return api_error(MESSAGES['json_required'], 400, code='VALIDATION_ERROR')

        try:
            person_id = parse_id(data.get('person_id'), 'person_id')
            seat_id = parse_id(data.get('seat_id'), 'seat_id')
            target = parse_date(data.get('date'))
            reservation = manual_assign(current_user.id, current_user.role, person_id, seat_id, target)
        except ReservationError as e:
            current_app.logger.info(f"Manual assignment refused for admin {current_user.id}: {e}")
            return api_reservation_error(e)

        return api_success(data=reservation, message=MESSAGES['seat_assigned'], status=201)
