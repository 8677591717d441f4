"""
SeatDesk tables and indexes.
Uniqueness rules for seats and reservations live in partial indexes.
"""


def drop_tables(db):
    """Drop all existing tables."""
    db.execute('PRAGMA foreign_keys = OFF')

    tables = [
        'audit_log',
        'reservations',
        'seats',
        'users'
    ]

    for table in tables:
        db.execute(f'DROP TABLE IF EXISTS {table}')

    db.execute('PRAGMA foreign_keys = ON')


def create_tables(db):
    """Create all database tables."""

    # 1. People
    db.execute('''
        CREATE TABLE users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            email TEXT UNIQUE NOT NULL,
            password_hash TEXT NOT NULL,
            first_name TEXT NOT NULL,
            last_name TEXT NOT NULL DEFAULT '',
            role TEXT NOT NULL DEFAULT 'member'
                CHECK (role IN ('member', 'administrator')),
            active INTEGER DEFAULT 1,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            last_login TIMESTAMP
        )
    ''')

    # 2. Seat directory
    db.execute('''
        CREATE TABLE seats (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            seat_number INTEGER NOT NULL CHECK (seat_number > 0),
            offered_date TEXT NOT NULL,
            location TEXT NOT NULL DEFAULT 'Main Floor',
            amenities TEXT NOT NULL DEFAULT '[]',
            active INTEGER DEFAULT 1,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')

    # 3. Reservation ledger (append-only, cancellation is a status change)
    db.execute('''
        CREATE TABLE reservations (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            seat_id INTEGER NOT NULL REFERENCES seats(id),
            person_id INTEGER NOT NULL REFERENCES users(id),
            reservation_date TEXT NOT NULL,
            status TEXT NOT NULL DEFAULT 'active'
                CHECK (status IN ('active', 'cancelled')),
            created_by INTEGER REFERENCES users(id),
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            cancelled_at TIMESTAMP
        )
    ''')

    # 4. Audit trail for administrator actions
    db.execute('''
        CREATE TABLE audit_log (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER REFERENCES users(id),
            action TEXT NOT NULL,
            entity_type TEXT NOT NULL,
            entity_id INTEGER,
            changes TEXT,
            ip_address TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    ''')


def create_indexes(db):
    """Create ledger constraints and performance indexes."""

    # At most one active reservation per (seat, date) and per (person, date)
    db.execute('''
        CREATE UNIQUE INDEX uq_reservations_seat_active
        ON reservations(seat_id, reservation_date) WHERE status = 'active'
    ''')
    db.execute('''
        CREATE UNIQUE INDEX uq_reservations_person_active
        ON reservations(person_id, reservation_date) WHERE status = 'active'
    ''')

    # Reservation indexes
    db.execute('CREATE INDEX idx_reservations_date ON reservations(reservation_date, status)')
    db.execute('CREATE INDEX idx_reservations_person ON reservations(person_id)')

    # One live seat per (number, date); deleted seats keep their ledger history
    db.execute('''
        CREATE UNIQUE INDEX uq_seats_number_date
        ON seats(seat_number, offered_date) WHERE active = 1
    ''')
    db.execute('CREATE INDEX idx_seats_date ON seats(offered_date, seat_number)')
    db.execute('CREATE INDEX idx_seats_location ON seats(location)')

    # Audit indexes
    db.execute('CREATE INDEX idx_audit_entity ON audit_log(entity_type, entity_id)')
