"""
Day-record persistence.

A reservation is stored as one record per (desk, day). Every record of a
reservation carries the full range and the reservation's total price. Absence
of a record means the desk is available that day, so writing an 'available'
record deletes instead of storing a tombstone.
"""

import logging
import sqlite3

from database import get_db
from utils.exceptions import StoreError

logger = logging.getLogger(__name__)


def make_booking_id(desk_id: str, day: str) -> str:
    """Record id derived from (desk, day), never from the reservation range."""
    return f'{desk_id}-{day}'


class BookingStore:
    """
    Keyed read/write access to day-records.

    Keys passed to delete_many are (desk_id, day) tuples. Implementations
    raise StoreError on persistence failures.
    """

    def get(self, desk_id: str, day: str):
        raise NotImplementedError

    def get_all(self, start_day: str = None, end_day: str = None) -> list:
        raise NotImplementedError

    def put(self, record: dict) -> None:
        raise NotImplementedError

    def put_many(self, records: list) -> None:
        """Write all records or none of them."""
        raise NotImplementedError

    def delete(self, desk_id: str, day: str) -> None:
        raise NotImplementedError

    def delete_many(self, keys: list) -> None:
        raise NotImplementedError

    def apply_changes(self, records: list, delete_keys: list) -> None:
        """
        Apply the writes and deletes of one operation as a single batch.

        Stores without multi-statement transactions get this default: write
        first (put_many is atomic per call), then delete. If the deletes fail,
        every written or deleted key is restored to its previous state before
        the StoreError is re-raised, since delete_many may fail part way.
        """
        written_keys = [(record['desk_id'], record['day']) for record in records]
        previous = {key: self.get(*key) for key in written_keys + list(delete_keys)}

        if records:
            self.put_many(records)

        try:
            if delete_keys:
                self.delete_many(delete_keys)
        except StoreError:
            logger.warning(
                f'Batch delete failed, restoring {len(previous)} records'
            )
            self.delete_many([key for key in written_keys if previous[key] is None])
            self.put_many([old for old in previous.values() if old is not None])
            raise


class SQLiteBookingStore(BookingStore):
    """Day-record store backed by the desk_bookings table."""

    def __init__(self, db=None):
        self._db = db

    @property
    def db(self):
        return self._db if self._db is not None else get_db()

    def get(self, desk_id: str, day: str):
        try:
            row = self.db.execute('''
                SELECT id, desk_id, day, range_start, range_end, status,
                       occupant_name, title, price, currency, created_at
                FROM desk_bookings
                WHERE desk_id = ? AND day = ?
            ''', (desk_id, day)).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f'Failed to read booking {desk_id} {day}: {e}') from e
        return dict(row) if row else None

    def get_all(self, start_day: str = None, end_day: str = None) -> list:
        query = '''
            SELECT id, desk_id, day, range_start, range_end, status,
                   occupant_name, title, price, currency, created_at
            FROM desk_bookings
            WHERE 1 = 1
        '''
        params = []

        if start_day:
            query += ' AND day >= ?'
            params.append(start_day)

        if end_day:
            query += ' AND day <= ?'
            params.append(end_day)

        query += ' ORDER BY day, desk_id'

        try:
            cursor = self.db.execute(query, params)
            return [dict(row) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            raise StoreError(f'Failed to read bookings: {e}') from e

    def put(self, record: dict) -> None:
        self.put_many([record])

    def put_many(self, records: list) -> None:
        self.apply_changes(records, [])

    def delete(self, desk_id: str, day: str) -> None:
        self.delete_many([(desk_id, day)])

    def delete_many(self, keys: list) -> None:
        self.apply_changes([], keys)

    def apply_changes(self, records: list, delete_keys: list) -> None:
        """Apply all deletes and writes inside one IMMEDIATE transaction."""
        if not records and not delete_keys:
            return

        db = self.db
        cursor = db.cursor()

        try:
            cursor.execute('BEGIN IMMEDIATE')

            for desk_id, day in delete_keys:
                cursor.execute(
                    'DELETE FROM desk_bookings WHERE desk_id = ? AND day = ?',
                    (desk_id, day)
                )

            for record in records:
                if record['status'] == 'available':
                    cursor.execute(
                        'DELETE FROM desk_bookings WHERE desk_id = ? AND day = ?',
                        (record['desk_id'], record['day'])
                    )
                    continue

                cursor.execute('''
                    INSERT OR REPLACE INTO desk_bookings (
                        id, desk_id, day, range_start, range_end, status,
                        occupant_name, title, price, currency, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, CURRENT_TIMESTAMP)
                ''', (
                    make_booking_id(record['desk_id'], record['day']),
                    record['desk_id'],
                    record['day'],
                    record['range_start'],
                    record['range_end'],
                    record['status'],
                    record.get('occupant_name'),
                    record.get('title'),
                    record.get('price'),
                    record['currency'],
                    record['created_at']
                ))

            db.commit()

        except sqlite3.Error as e:
            db.rollback()
            raise StoreError(f'Failed to write bookings: {e}') from e

