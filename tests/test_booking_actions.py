"""
Tests for booking operations (save, bulk apply, discard, quick cycle).
"""

import pytest

from models.booking_actions import (
    assign_occupant,
    bulk_apply,
    discard_booking,
    find_quick_book_slot,
    get_reservation,
    quick_cycle,
    save_booking,
)
from utils.exceptions import ConflictError, ValidationError

SENTINEL_CREATED_AT = '2024-12-01T08:00:00+00:00'


def stamp_created_at(store, desk_id, start, end):
    """Rewrite created_at on existing records so preservation is observable."""
    records = []
    for record in store.get_all(start, end):
        if record['desk_id'] == desk_id:
            record['created_at'] = SENTINEL_CREATED_AT
            records.append(record)
    store.put_many(records)


def desk_days(store, desk_id):
    return [r['day'] for r in store.get_all() if r['desk_id'] == desk_id]


class TestSaveBookingCreate:
    """Tests for creating reservations."""

    def test_writes_one_record_per_day(self, store):
        result = save_booking(store, 'room1-desk1', '2025-01-06', '2025-01-10', 'assigned',
                              price=100, occupant_name='Alice', title='Sprint', currency='EUR')

        assert result['days'] == ['2025-01-06', '2025-01-07', '2025-01-08', '2025-01-09', '2025-01-10']
        records = store.get_all()
        assert len(records) == 5
        for record in records:
            assert record['range_start'] == '2025-01-06'
            assert record['range_end'] == '2025-01-10'
            assert record['price'] == 100
            assert record['status'] == 'assigned'
            assert record['occupant_name'] == 'Alice'
            assert record['title'] == 'Sprint'

    def test_range_over_weekend_materializes_weekend_days(self, store):
        save_booking(store, 'room1-desk1', '2025-01-10', '2025-01-13', 'booked')

        assert desk_days(store, 'room1-desk1') == [
            '2025-01-10', '2025-01-11', '2025-01-12', '2025-01-13'
        ]

    def test_conflict_lists_every_day_and_writes_nothing(self, store):
        save_booking(store, 'room1-desk1', '2025-01-06', '2025-01-10', 'assigned',
                     price=100, occupant_name='Alice')

        with pytest.raises(ConflictError) as exc_info:
            save_booking(store, 'room1-desk1', '2025-01-08', '2025-01-12', 'booked',
                         occupant_name='Bob')

        conflicts = exc_info.value.conflicts
        assert [c['day'] for c in conflicts] == ['2025-01-08', '2025-01-09', '2025-01-10']
        assert 'Wed, Jan 8: Alice (assigned)' in str(exc_info.value)
        assert 'Fri, Jan 10: Alice (assigned)' in str(exc_info.value)
        assert store.get('room1-desk1', '2025-01-11') is None
        assert all(r['occupant_name'] == 'Alice' for r in store.get_all())

    def test_inverted_range_rejected(self, store):
        with pytest.raises(ValidationError):
            save_booking(store, 'room1-desk1', '2025-01-10', '2025-01-06', 'booked')
        assert store.get_all() == []

    def test_negative_price_rejected(self, store):
        with pytest.raises(ValidationError):
            save_booking(store, 'room1-desk1', '2025-01-06', '2025-01-10', 'booked', price=-5)

    def test_non_numeric_price_rejected(self, store):
        with pytest.raises(ValidationError):
            save_booking(store, 'room1-desk1', '2025-01-06', '2025-01-10', 'booked', price='ten')

    def test_available_status_rejected(self, store):
        with pytest.raises(ValidationError):
            save_booking(store, 'room1-desk1', '2025-01-06', '2025-01-10', 'available')

    def test_unpadded_dates_rejected(self, store):
        with pytest.raises(ValidationError):
            save_booking(store, 'room1-desk1', '2025-01-20', '2025-1-5', 'booked')
        with pytest.raises(ValidationError):
            save_booking(store, 'room1-desk1', '2025-1-6', '2025-1-10', 'booked', price=50)
        assert store.get_all() == []


class TestSaveBookingEdit:
    """Tests for editing a reservation's range."""

    def test_shrink_from_start(self, store):
        save_booking(store, 'room1-desk1', '2025-01-06', '2025-01-10', 'assigned',
                     price=100, occupant_name='Alice')
        stamp_created_at(store, 'room1-desk1', '2025-01-06', '2025-01-10')
        existing = get_reservation(store, 'room1-desk1', '2025-01-06')

        result = save_booking(store, 'room1-desk1', '2025-01-08', '2025-01-10', 'assigned',
                              price=60, occupant_name='Alice', existing=existing)

        assert result['removed_days'] == ['2025-01-06', '2025-01-07']
        assert desk_days(store, 'room1-desk1') == ['2025-01-08', '2025-01-09', '2025-01-10']
        for record in store.get_all():
            assert record['created_at'] == SENTINEL_CREATED_AT
            assert record['range_start'] == '2025-01-08'
            assert record['price'] == 60

    def test_shrink_from_end(self, store):
        save_booking(store, 'room1-desk1', '2025-01-06', '2025-01-10', 'booked', occupant_name='Alice')
        stamp_created_at(store, 'room1-desk1', '2025-01-06', '2025-01-10')
        existing = get_reservation(store, 'room1-desk1', '2025-01-06')

        result = save_booking(store, 'room1-desk1', '2025-01-06', '2025-01-08', 'booked',
                              occupant_name='Alice', existing=existing)

        assert result['removed_days'] == ['2025-01-09', '2025-01-10']
        assert desk_days(store, 'room1-desk1') == ['2025-01-06', '2025-01-07', '2025-01-08']
        assert all(r['created_at'] == SENTINEL_CREATED_AT for r in store.get_all())

    def test_extend_sets_new_created_at_on_new_days_only(self, store):
        save_booking(store, 'room1-desk1', '2025-01-06', '2025-01-07', 'booked', occupant_name='Alice')
        stamp_created_at(store, 'room1-desk1', '2025-01-06', '2025-01-07')
        existing = get_reservation(store, 'room1-desk1', '2025-01-06')

        save_booking(store, 'room1-desk1', '2025-01-06', '2025-01-08', 'assigned',
                     occupant_name='Alice', existing=existing)

        assert store.get('room1-desk1', '2025-01-06')['created_at'] == SENTINEL_CREATED_AT
        assert store.get('room1-desk1', '2025-01-07')['created_at'] == SENTINEL_CREATED_AT
        assert store.get('room1-desk1', '2025-01-08')['created_at'] != SENTINEL_CREATED_AT
        assert store.get('room1-desk1', '2025-01-08')['status'] == 'assigned'

    def test_edit_into_other_reservation_conflicts(self, store):
        save_booking(store, 'room1-desk1', '2025-01-06', '2025-01-07', 'booked', occupant_name='Alice')
        save_booking(store, 'room1-desk1', '2025-01-09', '2025-01-10', 'booked', occupant_name='Bob')
        existing = get_reservation(store, 'room1-desk1', '2025-01-06')

        with pytest.raises(ConflictError) as exc_info:
            save_booking(store, 'room1-desk1', '2025-01-06', '2025-01-09', 'booked',
                         occupant_name='Alice', existing=existing)

        assert [c['day'] for c in exc_info.value.conflicts] == ['2025-01-09']
        assert desk_days(store, 'room1-desk1') == [
            '2025-01-06', '2025-01-07', '2025-01-09', '2025-01-10'
        ]


class TestBulkApply:
    """Tests for administrative bulk status changes."""

    def test_available_deletes_existing_bookings(self, store):
        save_booking(store, 'room1-desk1', '2025-01-06', '2025-01-10', 'booked', occupant_name='Alice')
        save_booking(store, 'room1-desk2', '2025-01-06', '2025-01-08', 'booked', occupant_name='Bob')

        result = bulk_apply(store, ['room1-desk1', 'room1-desk2'], '2025-01-06', '2025-01-10', 'available')

        assert result['deleted'] == 10
        assert store.get('room1-desk1', '2025-01-07') is None
        assert store.get('room1-desk2', '2025-01-06') is None
        assert store.get_all() == []

    def test_booked_writes_single_day_records(self, store):
        result = bulk_apply(store, ['room1-desk1', 'room2-desk4'], '2025-01-06', '2025-01-07', 'booked')

        assert result['written'] == 4
        record = store.get('room2-desk4', '2025-01-07')
        assert record['range_start'] == record['range_end'] == '2025-01-07'
        assert record['occupant_name'] is None
        assert record['price'] is None

    def test_overrides_without_conflict_check(self, store):
        save_booking(store, 'room1-desk1', '2025-01-06', '2025-01-10', 'booked', occupant_name='Alice')

        bulk_apply(store, ['room1-desk1'], '2025-01-08', '2025-01-08', 'assigned')

        record = store.get('room1-desk1', '2025-01-08')
        assert record['status'] == 'assigned'
        assert record['occupant_name'] is None

    def test_requires_desks(self, store):
        with pytest.raises(ValidationError):
            bulk_apply(store, [], '2025-01-06', '2025-01-10', 'booked')


class TestDiscardBooking:
    """Tests for discarding a reservation."""

    def test_removes_every_day(self, store):
        save_booking(store, 'room1-desk1', '2025-01-10', '2025-01-14', 'booked', occupant_name='Alice')
        save_booking(store, 'room1-desk2', '2025-01-10', '2025-01-14', 'booked', occupant_name='Bob')
        reservation = get_reservation(store, 'room1-desk1', '2025-01-13')

        days = discard_booking(store, reservation)

        assert len(days) == 5
        assert desk_days(store, 'room1-desk1') == []
        assert len(desk_days(store, 'room1-desk2')) == 5


class TestQuickCycle:
    """Tests for the available/booked toggle."""

    def test_available_to_booked_to_available(self, store):
        assert quick_cycle(store, 'room1-desk1', '2025-01-06') == 'booked'
        record = store.get('room1-desk1', '2025-01-06')
        assert record['status'] == 'booked'
        assert record['range_start'] == record['range_end'] == '2025-01-06'

        assert quick_cycle(store, 'room1-desk1', '2025-01-06') == 'available'
        assert store.get('room1-desk1', '2025-01-06') is None

    def test_assigned_cycles_to_available(self, store):
        save_booking(store, 'room1-desk1', '2025-01-06', '2025-01-06', 'assigned', occupant_name='Alice')

        assert quick_cycle(store, 'room1-desk1', '2025-01-06') == 'available'
        assert store.get('room1-desk1', '2025-01-06') is None

    def test_weekend_rejected(self, store):
        with pytest.raises(ValidationError):
            quick_cycle(store, 'room1-desk1', '2025-01-11')
        assert store.get_all() == []


class TestAssignOccupant:
    """Tests for assigning a person to a day."""

    def test_keeps_reservation_metadata(self, store):
        save_booking(store, 'room1-desk1', '2025-01-06', '2025-01-10', 'booked',
                     price=100, title='Sprint', currency='GBP')

        record = assign_occupant(store, 'room1-desk1', '2025-01-07', 'Carol')

        assert record['status'] == 'assigned'
        assert record['occupant_name'] == 'Carol'
        assert record['range_start'] == '2025-01-06'
        assert record['range_end'] == '2025-01-10'
        assert record['price'] == 100
        assert record['currency'] == 'GBP'
        assert record['title'] == 'Sprint'

    def test_empty_day_becomes_single_day_assignment(self, store):
        record = assign_occupant(store, 'room1-desk1', '2025-01-07', 'Carol', currency='USD')

        assert record['range_start'] == record['range_end'] == '2025-01-07'
        assert record['currency'] == 'USD'

    def test_name_required(self, store):
        with pytest.raises(ValidationError):
            assign_occupant(store, 'room1-desk1', '2025-01-07', '')


class TestNoDoubleBooking:
    """At most one occupying record per (desk, day) after any accepted sequence."""

    def test_sequence_keeps_one_record_per_cell(self, store):
        save_booking(store, 'room1-desk1', '2025-01-06', '2025-01-10', 'booked', occupant_name='Alice')
        with pytest.raises(ConflictError):
            save_booking(store, 'room1-desk1', '2025-01-09', '2025-01-14', 'booked', occupant_name='Bob')
        bulk_apply(store, ['room1-desk1'], '2025-01-13', '2025-01-14', 'booked')
        save_booking(store, 'room1-desk2', '2025-01-09', '2025-01-14', 'assigned', occupant_name='Bob')
        discard_booking(store, get_reservation(store, 'room1-desk1', '2025-01-06'))

        cells = [(r['desk_id'], r['day']) for r in store.get_all()]
        assert len(cells) == len(set(cells))


class TestFindQuickBookSlot:
    """Tests for picking the first free desk."""

    def test_first_free_desk(self, store, desks):
        save_booking(store, 'room1-desk1', '2025-01-06', '2025-01-06', 'booked')

        slot = find_quick_book_slot(store, desks, ['2025-01-06', '2025-01-07'])

        assert slot == {'desk_id': 'room1-desk2', 'day': '2025-01-06'}

    def test_no_dates(self, store, desks):
        assert find_quick_book_slot(store, desks, []) is None

    def test_all_desks_taken(self, store, desks):
        bulk_apply(store, [d['id'] for d in desks], '2025-01-06', '2025-01-06', 'booked')

        assert find_quick_book_slot(store, desks, ['2025-01-06']) is None
