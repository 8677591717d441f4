"""
Authentication forms using Flask-WTF.
Accept form posts or JSON bodies; CSRF protection applies to both.
"""

from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, BooleanField
from wtforms.validators import DataRequired, Email, Length, Optional


class LoginForm(FlaskForm):
    """Login form with email and password."""

    email = StringField('Email', validators=[
        DataRequired(message='Email is required')
    ])

    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required')
    ])

    remember_me = BooleanField('Remember me')


class RegisterForm(FlaskForm):
    """Member self-registration form."""

    email = StringField('Email', validators=[
        DataRequired(message='Email is required'),
        Email(message='Invalid email format'),
        Length(max=254)
    ])

    password = PasswordField('Password', validators=[
        DataRequired(message='Password is required'),
        Length(min=8, message='Password must be at least 8 characters')
    ])

    first_name = StringField('First name', validators=[
        DataRequired(message='First name is required'),
        Length(max=100)
    ])

    last_name = StringField('Last name', validators=[
        Optional(),
        Length(max=100)
    ])
