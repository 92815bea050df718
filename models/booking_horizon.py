"""
Near-future availability summary.
Walks forward from tomorrow to report the next free dates, upcoming unpaid
bookings and assignments that are about to end.
"""

from utils.datetime_helpers import add_days, is_business_day

MAX_DAYS_TO_CHECK = 90
AVAILABLE_DATES_LIMIT = 5
BOOKED_DATES_LIMIT = 3
EXPIRING_LOOKAHEAD_DAYS = 10


def _build_lookup(records: list) -> dict:
    return {(record['desk_id'], record['day']): record for record in records}


def _next_business_days(today: str, count: int) -> list:
    days = []
    current = today
    while len(days) < count:
        current = add_days(current, 1)
        if is_business_day(current):
            days.append(current)
    return days


def find_next_dates(desks: list, lookup: dict, today: str) -> tuple:
    """
    Scan business days after today for free desks and unpaid bookings.

    The scan stops once both limits are reached or after MAX_DAYS_TO_CHECK
    calendar days, whichever comes first.

    Returns:
        tuple: (available_dates, booked_dates) where booked_dates is a list of
               {'date': str, 'names': [str, ...]}
    """
    available_dates = []
    booked_dates = []

    check_date = add_days(today, 1)
    days_checked = 0

    while ((len(available_dates) < AVAILABLE_DATES_LIMIT or len(booked_dates) < BOOKED_DATES_LIMIT)
           and days_checked < MAX_DAYS_TO_CHECK):
        if is_business_day(check_date):
            has_available_desk = False
            booked_names = []

            for desk in desks:
                booking = lookup.get((desk['id'], check_date))

                if booking is None or booking['status'] == 'available':
                    has_available_desk = True
                elif booking['status'] == 'booked' and booking.get('occupant_name'):
                    if booking['occupant_name'] not in booked_names:
                        booked_names.append(booking['occupant_name'])

            if has_available_desk and len(available_dates) < AVAILABLE_DATES_LIMIT:
                available_dates.append(check_date)

            if booked_names and len(booked_dates) < BOOKED_DATES_LIMIT:
                booked_dates.append({'date': check_date, 'names': booked_names})

        check_date = add_days(check_date, 1)
        days_checked += 1

    return available_dates, booked_dates


def find_expiring_assignments(desks: list, lookup: dict, today: str) -> list:
    """
    Assignments whose reservation ends on one of the next business days.

    Returns:
        list: [{'date', 'desk_id', 'desk_number', 'occupant_name'}, ...] ordered
              by date then desk order; not capped
    """
    expiring = []

    for day in _next_business_days(today, EXPIRING_LOOKAHEAD_DAYS):
        for desk in desks:
            booking = lookup.get((desk['id'], day))
            if booking and booking['status'] == 'assigned' and booking['range_end'] == day:
                expiring.append({
                    'date': day,
                    'desk_id': desk['id'],
                    'desk_number': desk['number'],
                    'occupant_name': booking.get('occupant_name')
                })

    return expiring


def scan_horizon(store, desks: list, today: str) -> dict:
    """
    Summarize availability after today from a single bulk read of the store.

    Args:
        store: BookingStore to read from
        desks: Desk dicts in display order ({'id', 'number', ...})
        today: Reference day (YYYY-MM-DD); the scan starts the day after

    Returns:
        dict: {
            'available_dates': [str],            # at most 5
            'booked_dates': [{'date', 'names'}], # at most 3
            'expiring_assignments': [{'date', 'desk_id', 'desk_number', 'occupant_name'}]
        }
    """
    horizon_end = add_days(today, MAX_DAYS_TO_CHECK)
    lookup = _build_lookup(store.get_all(add_days(today, 1), horizon_end))

    available_dates, booked_dates = find_next_dates(desks, lookup, today)
    expiring = find_expiring_assignments(desks, lookup, today)

    return {
        'available_dates': available_dates,
        'booked_dates': booked_dates,
        'expiring_assignments': expiring
    }
