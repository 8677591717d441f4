"""
Centralized UI messages.
All user-facing success text in one place for consistency.
"""

MESSAGES = {
    # Success messages
    'login_success': 'Welcome {name}',
    'logout_success': 'Signed out',
    'register_success': 'Account created',
    'seat_booked': 'Seat booked successfully',
    'seat_assigned': 'Seat assigned successfully',
    'reservation_cancelled': 'Reservation cancelled',
    'reservation_modified': 'Reservation moved to seat {seat_number}',
    'seat_created': 'Seat added successfully',
    'seats_seeded': '{count} seats created',
    'seat_updated': 'Seat updated successfully',
    'seat_deleted': 'Seat {seat_number} on {offered_date} deleted successfully',

    # Error messages
    'invalid_credentials': 'Invalid email or password',
    'account_disabled': 'This account has been disabled',
    'email_exists': 'An account with this email already exists',
    'json_required': 'A JSON body is required',
    'person_lookup_required': 'Provide person_id or email to search',
    'internal_error': 'Internal server error',
    'not_found': 'Resource not found',
    'forbidden': 'Administrator access required',
}
