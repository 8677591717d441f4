"""
Reservation data access functions.

This module re-exports the reservation API from the split modules:
- reservation_allocation.py: Book, cancel, manual assignment, modify
- reservation_ledger.py: Ledger reads and conditional writes
- reservation_availability.py: Seat occupancy per date
- reservation_errors.py: Error codes raised by all of the above
"""

# Allocation engine
from .reservation_allocation import (
    book_seat,
    cancel_reservation,
    manual_assign,
    modify_reservation,
)

# Ledger reads
from .reservation_ledger import (
    STATUS_ACTIVE,
    STATUS_CANCELLED,
    get_reservation_by_id,
    get_reservations_for_person,
    get_reservations_by_date,
    get_active_reservations,
)

# Availability
from .reservation_availability import (
    list_seats_for_date,
    list_available_seats,
    summarize_seats,
)

__all__ = [
    # Allocation
    'book_seat',
    'cancel_reservation',
    'manual_assign',
    'modify_reservation',

    # Ledger
    'STATUS_ACTIVE',
    'STATUS_CANCELLED',
    'get_reservation_by_id',
    'get_reservations_for_person',
    'get_reservations_by_date',
    'get_active_reservations',

    # Availability
    'list_seats_for_date',
    'list_available_seats',
    'summarize_seats',
]
