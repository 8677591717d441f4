"""
Flask extension instances, bound to the app in create_app.
"""

from flask_login import LoginManager
from flask_wtf.csrf import CSRFProtect

login_manager = LoginManager()
login_manager.session_protection = 'strong'

csrf = CSRFProtect()


@login_manager.user_loader
def load_user(user_id):
    """
    Rebuild the session user; deactivated people are signed out.

    Args:
        user_id: ID stored in the session (string)

    Returns:
        User or None
    """
    from models.user import get_user_by_id, User

    user_dict = get_user_by_id(int(user_id))
    if user_dict and user_dict.get('active'):
        return User(user_dict)
    return None


@login_manager.unauthorized_handler
def unauthorized():
    """JSON 401 instead of a redirect to a login page."""
    from utils.api_response import api_error
    return api_error('Authentication required', 401, code='UNAUTHORIZED')
