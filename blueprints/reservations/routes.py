"""
Member reservation routes.
Availability, booking, cancellation and seat changes for the signed-in person.
"""

from flask import current_app, request, Response, Blueprint
from flask_login import login_required, current_user

from models.reservation import (
    STATUS_ACTIVE,
    STATUS_CANCELLED,
    book_seat,
    cancel_reservation,
    modify_reservation,
    get_reservations_for_person,
    list_available_seats,
    list_seats_for_date,
    summarize_seats,
)
from models.reservation_errors import ReservationError
from utils.api_response import api_success, api_error, api_reservation_error
from utils.messages import MESSAGES
from utils.validators import parse_choice, parse_date, parse_id


def register_routes(bp: Blueprint) -> None:
    """Register member reservation routes on the blueprint."""

    @bp.route('/available')
    @login_required
    def available_seats() -> tuple[Response, int]:
        """
        Seats with no active reservation on a date.

        Query params:
            date: YYYY-MM-DD (required)
        """
        try:
            target = parse_date(request.args.get('date'))
        except ReservationError as e:
            return api_reservation_error(e)

        seats = list_available_seats(target)
        return api_success(data=seats, count=len(seats))

    @bp.route('/seats')
    @login_required
    def seats_for_date() -> tuple[Response, int]:
        """
        Every seat offered on a date with occupancy.
        Occupants are visible to administrators and to the holder.

        Query params:
            date: YYYY-MM-DD (required)
        """
        try:
            target = parse_date(request.args.get('date'))
        except ReservationError as e:
            return api_reservation_error(e)

        seats = list_seats_for_date(target, viewer_id=current_user.id, viewer_role=current_user.role)
        return api_success(data=seats, summary=summarize_seats(seats))

    @bp.route('/book', methods=['POST'])
    @login_required
    def book() -> tuple[Response, int]:
        """
        Book a seat for the signed-in person.

        Request body:
            seat_id: Seat ID
            date: YYYY-MM-DD
        """
        data = request.get_json(silent=True)
        if not data:
            return api_error(MESSAGES['json_required'], 400, code='VALIDATION_ERROR')

        try:
            seat_id = parse_id(data.get('seat_id'), 'seat_id')
            target = parse_date(data.get('date'))
            reservation = book_seat(current_user.id, seat_id, target)
        except ReservationError as e:
            current_app.logger.info(f"Booking refused for person {current_user.id}: {e}")
            return api_reservation_error(e)

        return api_success(data=reservation, message=MESSAGES['seat_booked'], status=201)

    @bp.route('/mine')
    @login_required
    def my_reservations() -> tuple[Response, int]:
        """
        Every reservation of the signed-in person, newest date first.

        Query params:
            status: Optional 'active' or 'cancelled'
        """
        try:
            status = parse_choice(request.args.get('status'), 'status', (STATUS_ACTIVE, STATUS_CANCELLED))
        except ReservationError as e:
            return api_reservation_error(e)

        reservations = get_reservations_for_person(current_user.id)
        if status:
            reservations = [r for r in reservations if r['status'] == status]
        return api_success(data=reservations, count=len(reservations))

    @bp.route('/<int:reservation_id>/cancel', methods=['POST'])
    @login_required
    def cancel(reservation_id: int) -> tuple[Response, int]:
        """Cancel one of the signed-in person's active reservations."""
        try:
            reservation = cancel_reservation(current_user.id, reservation_id)
        except ReservationError as e:
            current_app.logger.info(f"Cancel refused for person {current_user.id}: {e}")
            return api_reservation_error(e)

        return api_success(data=reservation, message=MESSAGES['reservation_cancelled'])

    @bp.route('/<int:reservation_id>/modify', methods=['POST'])
    @login_required
    def modify(reservation_id: int) -> tuple[Response, int]:
        """
        Move a reservation to another seat on the same date.

        Request body:
            seat_id: New seat ID

        If the new seat cannot be booked the original stays cancelled.
        """
        data = request.get_json(silent=True)
        if not data:
            return api_error(MESSAGES['json_required'], 400, code='VALIDATION_ERROR')

        try:
            new_seat_id = parse_id(data.get('seat_id'), 'seat_id')
            reservation = modify_reservation(current_user.id, reservation_id, new_seat_id)
        except ReservationError as e:
            current_app.logger.info(
                f"Modify of reservation {reservation_id} refused for person {current_user.id}: {e}"
            )
            return api_reservation_error(e)

        return api_success(
            data=reservation,
            message=MESSAGES['reservation_modified'].format(seat_number=reservation['seat']['seat_number'])
        )
