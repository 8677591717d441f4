"""
Pytest configuration and fixtures.
Ensures tests use an isolated file database, never the production one.
"""

import os
import pytest
import tempfile
from datetime import datetime, timedelta, timezone

# Set test database path BEFORE importing app.
# A file (not :memory:) so threads with their own connections share it.
TEST_DB_PATH = os.path.join(tempfile.gettempdir(), 'seatdesk_test.db')
os.environ['DATABASE_PATH'] = TEST_DB_PATH

MEMBER_PASSWORD = 'member-pass-123'
ADMIN_EMAIL = 'admin@seatdesk.local'
ADMIN_PASSWORD = 'admin123'


@pytest.fixture(scope='session', autouse=True)
def setup_test_environment():
    """Set up test environment before any tests run."""
    os.environ['DATABASE_PATH'] = TEST_DB_PATH
    os.environ['FLASK_ENV'] = 'test'
    os.environ['ADMIN_EMAIL'] = ADMIN_EMAIL
    os.environ['ADMIN_PASSWORD'] = ADMIN_PASSWORD

    yield

    # Cleanup: remove test database and its WAL files after all tests
    for suffix in ('', '-wal', '-shm'):
        path = TEST_DB_PATH + suffix
        if os.path.exists(path):
            try:
                os.remove(path)
            except PermissionError:
                pass  # Windows may have file locked


def _build_app():
    """Test application pointed at the isolated database, freshly initialized."""
    from app import create_app
    from database import init_db

    os.environ['DATABASE_PATH'] = TEST_DB_PATH

    app = create_app('test')
    app.config['TESTING'] = True
    app.config['WTF_CSRF_ENABLED'] = False
    app.config['DATABASE_PATH'] = TEST_DB_PATH

    with app.app_context():
        init_db()
    return app


@pytest.fixture
def app():
    """Application with an app context held open for model-level tests."""
    app = _build_app()
    with app.app_context():
        yield app


@pytest.fixture
def future_day(app):
    """A date comfortably outside the lead-time window."""
    from utils.datetime_helpers import get_today
    return get_today() + timedelta(days=3)


@pytest.fixture
def make_person(app):
    """Factory creating people; returns the new user ID."""
    from models.user import ROLE_MEMBER, create_user

    counter = {'n': 0}

    def _make(first_name='Member', role=ROLE_MEMBER, email=None):
        counter['n'] += 1
        email = email or f"{first_name.lower()}{counter['n']}@example.com"
        return create_user(email, MEMBER_PASSWORD, first_name, 'Tester', role=role)

    return _make


@pytest.fixture
def make_seat(app):
    """Factory creating seats; returns the new seat dict."""
    from models.seat import create_seat

    def _make(seat_number, offered_date, location=None, amenities=None):
        return create_seat(seat_number, offered_date, location=location, amenities=amenities)

    return _make


@pytest.fixture
def admin_id(app):
    """ID of the seeded administrator."""
    from models.user import get_user_by_email
    return get_user_by_email(ADMIN_EMAIL)['id']


# =============================================================================
# HTTP FIXTURES
# =============================================================================
# Requests reuse an already pushed app context (and its g), so HTTP tests
# run against an app with no context held open between requests.

@pytest.fixture
def web_app():
    """Application with no active app context, for HTTP tests."""
    return _build_app()


@pytest.fixture
def client(web_app):
    """Anonymous test client."""
    return web_app.test_client()


@pytest.fixture
def web_future_day():
    """A date comfortably outside the lead-time window (UTC clock)."""
    return datetime.now(timezone.utc).date() + timedelta(days=3)


def create_person(app, email, first_name='Member', role='member'):
    """Create a person outside any request; returns the new ID."""
    from models.user import create_user

    with app.app_context():
        return create_user(email, MEMBER_PASSWORD, first_name, 'Tester', role=role)


def login(client, email, password=MEMBER_PASSWORD):
    """Sign a test client in through the JSON endpoint."""
    response = client.post('/auth/login', json={'email': email, 'password': password})
    assert response.status_code == 200, response.get_json()
    return client


@pytest.fixture
def member_client(web_app):
    """Test client signed in as alice@example.com."""
    create_person(web_app, 'alice@example.com', 'Alice')
    return login(web_app.test_client(), 'alice@example.com')


@pytest.fixture
def admin_client(web_app):
    """Test client signed in as the seeded administrator."""
    return login(web_app.test_client(), ADMIN_EMAIL, ADMIN_PASSWORD)
