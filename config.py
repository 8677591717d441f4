"""
SeatDesk configuration.
One class per environment, selected through FLASK_ENV by the app factory.
"""

import os
from datetime import timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


class Config:
    """Settings shared by every environment."""

    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production'

    # SQLite storage
    DATABASE_PATH = os.environ.get('DATABASE_PATH') or 'instance/seatdesk.db'
    DATABASE_BUSY_TIMEOUT = float(os.environ.get('DATABASE_BUSY_TIMEOUT', 5))

    # Sessions and CSRF
    WTF_CSRF_ENABLED = True
    WTF_CSRF_TIME_LIMIT = 3600
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    SESSION_COOKIE_SECURE = False
    PERMANENT_SESSION_LIFETIME = timedelta(
        hours=int(os.environ.get('SESSION_TIMEOUT_HOURS', 8))
    )

    # Booking rules
    MIN_LEAD_TIME_MINUTES = int(os.environ.get('MIN_LEAD_TIME_MINUTES', 60))
    ALLOCATION_MAX_RETRIES = int(os.environ.get('ALLOCATION_MAX_RETRIES', 3))
    DEFAULT_SEAT_LOCATION = os.environ.get('DEFAULT_SEAT_LOCATION', 'Main Floor')
    TIMEZONE = os.environ.get('TIMEZONE', 'UTC')

    # Logging
    LOG_DIR = os.environ.get('LOG_DIR', 'logs')
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    APP_NAME = 'SeatDesk'
    APP_VERSION = '1.0.0'


class DevelopmentConfig(Config):
    """Local development."""

    DEBUG = True
    TESTING = False
    WTF_CSRF_SSL_STRICT = False


class ProductionConfig(Config):
    """Deployed behind gunicorn."""

    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = os.environ.get('SESSION_COOKIE_SECURE', 'true').lower() == 'true'
    WTF_CSRF_SSL_STRICT = SESSION_COOKIE_SECURE
    PREFERRED_URL_SCHEME = 'https' if SESSION_COOKIE_SECURE else 'http'

    @classmethod
    def validate(cls) -> None:
        """
        Refuse to start with unsafe or inconsistent settings.

        Raises:
            ValueError: Naming the first offending setting
        """
        secret_key = os.environ.get('SECRET_KEY')
        if not secret_key:
            raise ValueError("SECRET_KEY environment variable must be set in production")
        if len(secret_key) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters in production")
        if not os.environ.get('DATABASE_PATH'):
            raise ValueError("DATABASE_PATH environment variable must be set in production")
        if cls.MIN_LEAD_TIME_MINUTES < 0:
            raise ValueError("MIN_LEAD_TIME_MINUTES must not be negative")
        if cls.ALLOCATION_MAX_RETRIES < 1:
            raise ValueError("ALLOCATION_MAX_RETRIES must be at least 1")
        try:
            ZoneInfo(cls.TIMEZONE)
        except ZoneInfoNotFoundError:
            raise ValueError(f"Unknown TIMEZONE: {cls.TIMEZONE}")


class TestConfig(Config):
    """pytest runs; CSRF off, short lock wait."""

    TESTING = True
    DEBUG = True
    WTF_CSRF_ENABLED = False
    DATABASE_PATH = os.environ.get('DATABASE_PATH', ':memory:')
    DATABASE_BUSY_TIMEOUT = 2.0
    SECRET_KEY = 'test-secret-key'


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'test': TestConfig,
    'default': DevelopmentConfig
}
