"""
Booking operations: save, bulk apply, discard, quick cycle.

All mutations of a reservation go through these functions so the day-records
of a reservation stay consistent (same range, price, status and occupant on
every day). Each operation reads and checks first, then hands every write and
delete to the store as one batch.

Conflict checks are optimistic: two saves racing on the same desk and days are
not serialized here. Each save is only guaranteed correct against the state
it read during its own conflict check.
"""

import logging

from models.booking_conflicts import check_conflicts, format_conflict_message
from models.booking_store import make_booking_id
from utils.datetime_helpers import all_days_between, get_now, is_business_day
from utils.exceptions import ConflictError, ValidationError
from utils.validators import require_booking_fields, require_date_range, validate_date_format

logger = logging.getLogger(__name__)

QUICK_CYCLE = ('available', 'booked')


def _build_record(desk_id, day, range_start, range_end, status, occupant_name,
                  title, price, currency, created_at) -> dict:
    return {
        'id': make_booking_id(desk_id, day),
        'desk_id': desk_id,
        'day': day,
        'range_start': range_start,
        'range_end': range_end,
        'status': status,
        'occupant_name': occupant_name or None,
        'title': title or None,
        'price': price,
        'currency': currency,
        'created_at': created_at
    }


def _require_day(day: str) -> None:
    if not validate_date_format(day):
        raise ValidationError(f'Invalid date: {day!r} (expected YYYY-MM-DD)')


# =============================================================================
# SAVE (create / update)
# =============================================================================

def save_booking(
    store,
    desk_id: str,
    start_date: str,
    end_date: str,
    status: str,
    price: float = None,
    occupant_name: str = None,
    title: str = None,
    currency: str = 'EUR',
    existing: dict = None
) -> dict:
    """
    Create a reservation, or move/update an existing one.

    Every calendar day of the new range gets a day-record carrying the total
    price and the full range. When editing, days that fall out of the range are
    deleted and days that stay keep their original created_at.

    Args:
        store: BookingStore
        desk_id: Desk to book
        start_date: First day (YYYY-MM-DD)
        end_date: Last day (YYYY-MM-DD), inclusive
        status: 'booked' or 'assigned'
        price: Total price for the whole range (not per day)
        occupant_name: Person occupying the desk
        title: Free text
        currency: Currency code of price
        existing: Reservation being edited ({'range_start', 'range_end',
            'created_at'}), or None to create

    Returns:
        dict: {'desk_id', 'range_start', 'range_end', 'status', 'price',
               'currency', 'days': [str], 'removed_days': [str]}

    Raises:
        ValidationError: Malformed range, status, price or currency
        ConflictError: Another reservation occupies part of the range
        StoreError: The store failed; nothing of this save is left applied
    """
    require_date_range(start_date, end_date)
    require_booking_fields(status, price, currency)
    if status == 'available':
        raise ValidationError('A reservation cannot be saved as available; discard it instead')
    if existing:
        require_date_range(existing['range_start'], existing['range_end'])

    new_days = all_days_between(start_date, end_date)
    old_days = []
    if existing:
        old_days = all_days_between(existing['range_start'], existing['range_end'])

    conflicts = check_conflicts(store, desk_id, start_date, end_date, excluding=existing)
    if conflicts:
        logger.warning(
            f'[Booking] Save rejected for {desk_id} {start_date}..{end_date}: '
            f'{len(conflicts)} conflicting days'
        )
        raise ConflictError(format_conflict_message(conflicts), conflicts)

    new_day_set = set(new_days)
    old_day_set = set(old_days)
    removed_days = [day for day in old_days if day not in new_day_set]

    now = get_now().isoformat()
    records = [
        _build_record(
            desk_id, day, start_date, end_date, status, occupant_name, title, price, currency,
            existing['created_at'] if existing and day in old_day_set else now
        )
        for day in new_days
    ]

    store.apply_changes(records, [(desk_id, day) for day in removed_days])

    logger.info(
        f"[Booking] {'Updated' if existing else 'Created'} {status} reservation "
        f"{desk_id} {start_date}..{end_date} ({len(new_days)} days, {len(removed_days)} removed)"
    )

    return {
        'desk_id': desk_id,
        'range_start': start_date,
        'range_end': end_date,
        'status': status,
        'price': price,
        'currency': currency,
        'days': new_days,
        'removed_days': removed_days
    }


# =============================================================================
# BULK APPLY
# =============================================================================

def bulk_apply(
    store,
    desk_ids: list,
    start_date: str,
    end_date: str,
    status: str,
    currency: str = 'EUR'
) -> dict:
    """
    Set a status on every (desk, day) in the range, without conflict checks.

    'available' deletes the records; any other status overwrites each cell
    with a single-day reservation carrying no occupant, title or price.

    Returns:
        dict: {'desk_count', 'day_count', 'written', 'deleted'}
    """
    require_date_range(start_date, end_date)
    require_booking_fields(status, None, currency)
    if not desk_ids:
        raise ValidationError('At least one desk is required')

    days = all_days_between(start_date, end_date)
    now = get_now().isoformat()

    records = []
    delete_keys = []
    for desk_id in desk_ids:
        for day in days:
            if status == 'available':
                delete_keys.append((desk_id, day))
            else:
                records.append(
                    _build_record(desk_id, day, day, day, status, None, None, None, currency, now)
                )

    store.apply_changes(records, delete_keys)

    logger.info(
        f'[Booking] Bulk applied {status} to {len(desk_ids)} desks '
        f'for {len(days)} days ({start_date}..{end_date})'
    )

    return {
        'desk_count': len(desk_ids),
        'day_count': len(days),
        'written': len(records),
        'deleted': len(delete_keys)
    }


# =============================================================================
# DISCARD
# =============================================================================

def discard_booking(store, reservation: dict) -> list:
    """
    Delete every day of a reservation's range for its desk.

    Args:
        store: BookingStore
        reservation: {'desk_id', 'range_start', 'range_end'}

    Returns:
        list: Days deleted
    """
    require_date_range(reservation['range_start'], reservation['range_end'])

    days = all_days_between(reservation['range_start'], reservation['range_end'])
    store.delete_many([(reservation['desk_id'], day) for day in days])

    logger.info(
        f"[Booking] Discarded reservation {reservation['desk_id']} "
        f"{reservation['range_start']}..{reservation['range_end']}"
    )
    return days


# =============================================================================
# SINGLE-DAY ACTIONS
# =============================================================================

def quick_cycle(store, desk_id: str, day: str, currency: str = 'EUR') -> str:
    """
    Toggle a single business day between available and booked.

    An assigned day cycles back to available; assigned is only reachable
    through save_booking or assign_occupant.

    Returns:
        str: The new status
    """
    _require_day(day)
    if not is_business_day(day):
        raise ValidationError(f'{day} is a weekend day and cannot be booked')

    booking = store.get(desk_id, day)
    current_status = booking['status'] if booking else 'available'

    if current_status in QUICK_CYCLE:
        next_status = QUICK_CYCLE[(QUICK_CYCLE.index(current_status) + 1) % len(QUICK_CYCLE)]
    else:
        next_status = QUICK_CYCLE[0]

    if next_status == 'available':
        store.delete(desk_id, day)
    else:
        booking = booking or {}
        store.put(_build_record(
            desk_id, day, day, day, next_status,
            booking.get('occupant_name'),
            booking.get('title'),
            booking.get('price'),
            booking.get('currency') or currency,
            booking.get('created_at') or get_now().isoformat()
        ))

    logger.info(f'[Booking] {desk_id} {day}: {current_status} -> {next_status}')
    return next_status


def assign_occupant(
    store,
    desk_id: str,
    day: str,
    occupant_name: str,
    currency: str = 'EUR'
) -> dict:
    """
    Mark a day as assigned (paid) to a person.

    The existing record's range, title, price, currency and created_at are kept;
    with no record the day becomes a single-day assignment.

    Returns:
        dict: The written day-record
    """
    _require_day(day)
    if not occupant_name:
        raise ValidationError('An occupant name is required')

    booking = store.get(desk_id, day) or {}
    record = _build_record(
        desk_id, day,
        booking.get('range_start') or day,
        booking.get('range_end') or day,
        'assigned',
        occupant_name,
        booking.get('title'),
        booking.get('price'),
        booking.get('currency') or currency,
        booking.get('created_at') or get_now().isoformat()
    )
    store.put(record)

    logger.info(f'[Booking] {occupant_name} assigned to {desk_id} on {day}')
    return record


# =============================================================================
# LOOKUPS
# =============================================================================

def get_reservation(store, desk_id: str, day: str) -> dict:
    """
    Reservation view of the day-record at (desk, day).

    Returns:
        dict or None: {'desk_id', 'range_start', 'range_end', 'status',
                       'occupant_name', 'title', 'price', 'currency', 'created_at'}
    """
    _require_day(day)
    booking = store.get(desk_id, day)
    if not booking or booking['status'] == 'available':
        return None

    return {
        'desk_id': booking['desk_id'],
        'range_start': booking['range_start'],
        'range_end': booking['range_end'],
        'status': booking['status'],
        'occupant_name': booking.get('occupant_name'),
        'title': booking.get('title'),
        'price': booking.get('price'),
        'currency': booking['currency'],
        'created_at': booking['created_at']
    }


def find_quick_book_slot(store, desks: list, available_dates: list) -> dict:
    """
    First desk that is free on the first of the next available dates.

    Returns:
        dict or None: {'desk_id', 'day'}
    """
    if not available_dates:
        return None

    day = available_dates[0]
    for desk in desks:
        booking = store.get(desk['id'], day)
        if not booking or booking['status'] == 'available':
            return {'desk_id': desk['id'], 'day': day}

    return None
