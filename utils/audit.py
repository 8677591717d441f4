"""
Request-aware wrapper around the audit trail.
"""

import logging
import sqlite3
from flask import request, has_request_context
from flask_login import current_user

logger = logging.getLogger(__name__)


def _client_ip():
    if not has_request_context():
        return None
    forwarded = request.headers.get('X-Forwarded-For')
    if forwarded:
        # First hop is the client
        return forwarded.split(',')[0].strip()
    return request.remote_addr


def log_audit(action: str, entity_type: str, entity_id: int = None,
              before: dict = None, after: dict = None, user_id: int = None) -> int:
    """
    Record an administrator action.

    The acting user defaults to current_user and the IP comes from the
    request when there is one (CLI commands have neither). The audited
    change is already committed, so a failed write is logged and None
    is returned.

    Args:
        action: CREATE, UPDATE, DELETE or ASSIGN
        entity_type: 'seat' or 'reservation'
        entity_id: Affected row
        before: State before the change
        after: State after the change
        user_id: Acting user when not the logged-in one
    """
    from models.audit_log import create_audit_log

    if user_id is None and getattr(current_user, 'is_authenticated', False):
        user_id = current_user.id

    changes = None
    if before is not None or after is not None:
        changes = {'before': before, 'after': after}

    try:
        return create_audit_log(action, entity_type, entity_id=entity_id, user_id=user_id,
                                changes=changes, ip_address=_client_ip())
    except sqlite3.Error as e:
        logger.error('Failed to log audit entry %s %s #%s: %s', action, entity_type, entity_id, e,
                     exc_info=True)
        return None
