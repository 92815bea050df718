"""
Desk status counts.
Per-cell status tallies for the calendar header cards.
"""


def get_desk_stats(store, desks: list, dates: list) -> dict:
    """
    Count (desk, day) cells by status over the given days.

    A missing record counts as available.

    Args:
        store: BookingStore to read from
        desks: Desk dicts ({'id', ...})
        dates: Days to count (YYYY-MM-DD)

    Returns:
        dict: {'available': int, 'booked': int, 'assigned': int}
    """
    stats = {'available': 0, 'booked': 0, 'assigned': 0}
    if not desks or not dates:
        return stats

    desk_ids = {desk['id'] for desk in desks}
    wanted_days = set(dates)

    lookup = {}
    for record in store.get_all(min(dates), max(dates)):
        if record['desk_id'] in desk_ids and record['day'] in wanted_days:
            lookup[(record['desk_id'], record['day'])] = record['status']

    for day in wanted_days:
        for desk_id in desk_ids:
            status = lookup.get((desk_id, day), 'available')
            stats[status] += 1

    return stats
