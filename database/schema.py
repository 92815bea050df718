"""
Database schema definitions.
Table creation, indexes, and structure management.
"""


def drop_tables(db):
    """Drop all existing tables."""
    # Disable foreign key constraints before dropping
    db.execute('PRAGMA foreign_keys = OFF')

    tables = [
        'desk_bookings',
        'desks'
    ]

    for table in tables:
        db.execute(f'DROP TABLE IF EXISTS {table}')

    # Re-enable foreign key constraints
    db.execute('PRAGMA foreign_keys = ON')


def create_tables(db):
    """Create all database tables."""

    # 1. Desks (reference data, read-only to the booking engine)
    db.execute('''
        CREATE TABLE desks (
            id TEXT PRIMARY KEY,
            room INTEGER NOT NULL,
            number INTEGER NOT NULL,
            label TEXT NOT NULL,
            room_name TEXT,
            sort_order INTEGER DEFAULT 0,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            UNIQUE(room, number)
        )
    ''')

    # 2. Day-records: one row per (desk, day).
    # 'available' is never stored; a missing row means the desk is free.
    db.execute('''
        CREATE TABLE desk_bookings (
            id TEXT PRIMARY KEY,
            desk_id TEXT NOT NULL REFERENCES desks(id) ON DELETE CASCADE,
            day TEXT NOT NULL,
            range_start TEXT NOT NULL,
            range_end TEXT NOT NULL,
            status TEXT NOT NULL CHECK(status IN ('booked', 'assigned')),
            occupant_name TEXT,
            title TEXT,
            price REAL CHECK(price IS NULL OR price >= 0),
            currency TEXT NOT NULL DEFAULT 'EUR',
            created_at TEXT NOT NULL,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            UNIQUE(desk_id, day),
            CHECK(range_start <= day AND day <= range_end)
        )
    ''')


def create_indexes(db):
    """Create indexes for lookups by day and by reservation."""
    indexes = [
        'CREATE INDEX IF NOT EXISTS idx_desk_bookings_day ON desk_bookings(day)',
        'CREATE INDEX IF NOT EXISTS idx_desk_bookings_reservation '
        'ON desk_bookings(desk_id, range_start)',
        'CREATE INDEX IF NOT EXISTS idx_desk_bookings_status ON desk_bookings(status, range_end)',
        'CREATE INDEX IF NOT EXISTS idx_desks_order ON desks(room, sort_order, number)',
    ]

    for statement in indexes:
        db.execute(statement)
