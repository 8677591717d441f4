"""
JSON envelopes returned by every SeatDesk endpoint.

    {"success": true, "data": {...}, "message": "..."}
    {"success": false, "error": "...", "code": "SEAT_TAKEN"}
"""

from flask import jsonify
from typing import Any


def _envelope(success: bool, status: int, body: dict, extra_fields: dict) -> tuple:
    payload = {'success': success}
    payload.update(body)
    payload.update(extra_fields)
    return jsonify(payload), status


def api_success(
    data: Any = None,
    message: str | None = None,
    status: int = 200,
    **extra_fields: Any
) -> tuple:
    """
    Success response; `data` and `message` are omitted when empty.

    Returns:
        Tuple of (Response, status_code)
    """
    body = {}
    if data is not None:
        body['data'] = data
    if message:
        body['message'] = message
    return _envelope(True, status, body, extra_fields)


def api_error(error: str, status: int = 400, **extra_fields: Any) -> tuple:
    """Error response; pass `code=` for a machine-readable kind."""
    return _envelope(False, status, {'error': error}, extra_fields)


def api_reservation_error(exc) -> tuple:
    """Map a ReservationError onto its HTTP status and error code."""
    return api_error(exc.message, status=exc.http_status, code=exc.code.value)
