"""
Authentication routes: register, login, logout, current user.
JSON endpoints backed by Flask-Login sessions.
"""

import sqlite3

from flask import current_app, Blueprint
from flask_login import login_user, logout_user, login_required, current_user
from flask_wtf.csrf import generate_csrf

from blueprints.auth.forms import LoginForm, RegisterForm
from models.user import (
    User, create_user, get_user_by_email, get_user_by_id, public_user,
    update_last_login, check_password
)
from utils.api_response import api_success, api_error
from utils.messages import MESSAGES
from utils.validators import sanitize_input

auth_bp = Blueprint('auth', __name__)


def _form_errors(form) -> str:
    """First validation message of a form."""
    for messages in form.errors.values():
        if messages:
            return messages[0]
    return 'Invalid input'


@auth_bp.route('/register', methods=['POST'])
def register():
    """
    Create a member account and sign it in.

    Request body:
        email, password, first_name, last_name (optional)
    """
    form = RegisterForm()
    if not form.validate_on_submit():
        return api_error(_form_errors(form), 400, code='VALIDATION_ERROR')

    if get_user_by_email(form.email.data):
        return api_error(MESSAGES['email_exists'], 409, code='EMAIL_EXISTS')

    try:
        user_id = create_user(
            email=form.email.data,
            password=form.password.data,
            first_name=sanitize_input(form.first_name.data, max_length=100),
            last_name=sanitize_input(form.last_name.data or '', max_length=100)
        )
    except sqlite3.IntegrityError:
        # Lost a race against a registration with the same email
        return api_error(MESSAGES['email_exists'], 409, code='EMAIL_EXISTS')

    user_dict = get_user_by_id(user_id)
    login_user(User(user_dict))
    update_last_login(user_id)
    current_app.logger.info(f"Registered member {user_id}")

    return api_success(data=public_user(user_dict), message=MESSAGES['register_success'], status=201)


@auth_bp.route('/login', methods=['POST'])
def login():
    """
    Sign in with email and password.

    Request body:
        email, password, remember_me (optional)
    """
    form = LoginForm()
    if not form.validate_on_submit():
        return api_error(_form_errors(form), 400, code='VALIDATION_ERROR')

    user_dict = get_user_by_email(form.email.data)

    if user_dict is None or not check_password(user_dict, form.password.data):
        return api_error(MESSAGES['invalid_credentials'], 401, code='INVALID_CREDENTIALS')

    if not user_dict.get('active'):
        return api_error(MESSAGES['account_disabled'], 403, code='ACCOUNT_DISABLED')

    user = User(user_dict)
    login_user(user, remember=form.remember_me.data)
    update_last_login(user.id)

    return api_success(
        data=public_user(user_dict),
        message=MESSAGES['login_success'].format(name=user.full_name or user.email)
    )


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    """Sign out the current user."""
    logout_user()
    return api_success(message=MESSAGES['logout_success'])


@auth_bp.route('/me')
@login_required
def me():
    """Current user with a fresh CSRF token for subsequent writes."""
    user_dict = get_user_by_id(current_user.id)
    return api_success(data=public_user(user_dict), csrf_token=generate_csrf())
