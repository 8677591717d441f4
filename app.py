"""
SeatDesk: shared seat reservation service.
Application factory, JSON error handling and CLI commands.
"""

import os
import click
import logging
from flask import Flask, g
from dotenv import load_dotenv

load_dotenv()

from config import config
from extensions import login_manager, csrf
from database import close_db, init_db
from utils.api_response import api_error
from utils.messages import MESSAGES

# (blueprint import path, attribute, url prefix)
BLUEPRINTS = (
    ('blueprints.auth.routes', 'auth_bp', '/auth'),
    ('blueprints.reservations', 'reservations_bp', '/api/reservations'),
    ('blueprints.seats.routes', 'seats_bp', '/api/seats'),
    ('blueprints.reports.routes', 'reports_bp', '/api/reports'),
    ('blueprints.api.routes', 'api_bp', '/api'),
)


def create_app(config_name=None):
    """
    Build a SeatDesk app.

    Args:
        config_name: 'development', 'production' or 'test'; defaults to FLASK_ENV

    Raises:
        ValueError: Production settings failed validation
    """
    config_name = config_name or os.environ.get('FLASK_ENV', 'development')
    config_class = config[config_name]
    if config_name == 'production':
        config_class.validate()

    app = Flask(__name__)
    app.config.from_object(config_class)

    login_manager.init_app(app)
    csrf.init_app(app)

    register_blueprints(app)
    register_error_handlers(app)
    register_cli_commands(app)
    register_teardown_handlers(app)
    configure_logging(app)

    return app


def register_blueprints(app):
    from importlib import import_module

    for module_path, attribute, url_prefix in BLUEPRINTS:
        blueprint = getattr(import_module(module_path), attribute)
        app.register_blueprint(blueprint, url_prefix=url_prefix)


def register_error_handlers(app):
    """Every error leaves as the standard JSON envelope."""

    @app.errorhandler(404)
    def not_found_error(error):
        return api_error(MESSAGES['not_found'], 404, code='NOT_FOUND')

    @app.errorhandler(405)
    def method_not_allowed_error(error):
        return api_error('Method not allowed', 405, code='METHOD_NOT_ALLOWED')

    @app.errorhandler(403)
    def forbidden_error(error):
        return api_error(MESSAGES['forbidden'], 403, code='PERMISSION_DENIED')

    @app.errorhandler(500)
    def internal_error(error):
        """Roll back the request connection and hide the cause."""
        db = g.get('db')
        if db:
            db.rollback()
        original = getattr(error, 'original_exception', None) or error
        app.logger.error(f"Unhandled error: {original}", exc_info=original)
        return api_error(MESSAGES['internal_error'], 500, code='INTERNAL_ERROR')


def register_cli_commands(app):
    """`flask init-db`, `flask create-admin`, `flask seed-seats`."""

    @app.cli.command('init-db')
    def init_db_command():
        """Drop and recreate all tables, then seed the default administrator."""
        click.echo('Recreating SeatDesk schema...')
        with app.app_context():
            init_db()
        click.echo('Database ready.')

    @app.cli.command('create-admin')
    @click.argument('email')
    @click.option('--first-name', default='Admin', help='First name')
    @click.option('--last-name', default='', help='Last name')
    @click.password_option()
    def create_admin_command(email, first_name, last_name, password):
        """Create an administrator account."""
        import sqlite3
        from models.user import ROLE_ADMIN, create_user

        with app.app_context():
            try:
                user_id = create_user(
                    email=email,
                    password=password,
                    first_name=first_name,
                    last_name=last_name,
                    role=ROLE_ADMIN
                )
                click.echo(f'Administrator created: #{user_id} {email.lower()}')
            except (sqlite3.IntegrityError, ValueError) as e:
                click.echo(f'Error creating administrator: {str(e)}', err=True)

    @app.cli.command('seed-seats')
    @click.option('--count', 'seat_count', type=int, required=True, help='Seats per day')
    @click.option('--from', 'date_from', required=True, help='First date (YYYY-MM-DD)')
    @click.option('--to', 'date_to', required=True, help='Last date (YYYY-MM-DD)')
    @click.option('--location', default=None, help='Location for the new seats')
    def seed_seats_command(seat_count, date_from, date_to, location):
        """Offer seats 1..COUNT on every day of a date range."""
        from models.seat import create_seats_for_range
        from models.reservation_errors import ReservationError
        from utils.validators import parse_date

        with app.app_context():
            try:
                created = create_seats_for_range(
                    seat_count,
                    parse_date(date_from, 'from'),
                    parse_date(date_to, 'to'),
                    location=location
                )
                click.echo(MESSAGES['seats_seeded'].format(count=created))
            except (ReservationError, ValueError) as e:
                click.echo(f'Error seeding seats: {str(e)}', err=True)


def register_teardown_handlers(app):

    def teardown_db(error):
        """Close database connection at end of request."""
        close_db(error)


def configure_logging(app):
    """File log under LOG_DIR outside debug/testing; console debug otherwise."""
    if app.debug or app.testing:
        app.logger.setLevel(logging.DEBUG)
        return

    log_dir = app.config.get('LOG_DIR', 'logs')
    os.makedirs(log_dir, exist_ok=True)
    level = logging.getLevelName(app.config.get('LOG_LEVEL', 'INFO').upper())
    if not isinstance(level, int):
        level = logging.INFO

    file_handler = logging.FileHandler(os.path.join(log_dir, 'seatdesk.log'))
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s %(levelname)s %(name)s: %(message)s [in %(pathname)s:%(lineno)d]'
    ))
    file_handler.setLevel(level)

    # Model and database modules log through their own module loggers
    for logger_name in ('models', 'database', 'utils'):
        module_logger = logging.getLogger(logger_name)
        module_logger.addHandler(file_handler)
        module_logger.setLevel(level)

    app.logger.addHandler(file_handler)
    app.logger.setLevel(level)
    app.logger.info('%s %s startup', app.config['APP_NAME'], app.config['APP_VERSION'])


# Create application instance for development server
if __name__ == '__main__':
    app = create_app()
    app.run(host='0.0.0.0', debug=True)
