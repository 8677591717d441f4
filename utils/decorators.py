"""
Route decorators for authentication and authorization.
Provides role-based access control for JSON routes.
"""

from functools import wraps
from flask_login import login_required, current_user

from utils.api_response import api_error
from utils.messages import MESSAGES


def admin_required(func):
    """
    Decorator to restrict a route to administrators.

    Usage:
        @bp.route('/manual-assign', methods=['POST'])
        @login_required
        @admin_required
        def manual_assign_route():
            ...

    Unauthenticated callers are answered by login_required first;
    authenticated members get a JSON 403.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        if not getattr(current_user, 'is_admin', False):
            return api_error(MESSAGES['forbidden'], 403, code='PERMISSION_DENIED')
        return func(*args, **kwargs)
    return wrapper


# Re-export login_required for convenience
__all__ = ['login_required', 'admin_required']
