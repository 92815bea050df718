"""
Booking conflict detection.
Decides whether a reservation range can be written for a desk without
clobbering another reservation.
"""

from utils.datetime_helpers import all_days_between, format_day_label


def check_conflicts(
    store,
    desk_id: str,
    start_date: str,
    end_date: str,
    excluding: dict = None
) -> list:
    """
    Find every occupied day in [start_date, end_date] for a desk.

    Every calendar day of the range is checked, weekends included. Days that
    already belong to the reservation being edited are skipped: a reservation
    never conflicts with its own prior occupancy.

    Args:
        store: BookingStore to read from (never written)
        desk_id: Desk to check
        start_date: First day of the requested range (YYYY-MM-DD)
        end_date: Last day of the requested range (YYYY-MM-DD)
        excluding: Reservation being edited ({'range_start', 'range_end'}), optional

    Returns:
        list: [{'day': str, 'occupant_name': str or None, 'status': str}, ...]
              in ascending day order; empty when the range is free
    """
    own_days = set()
    if excluding:
        own_days = set(all_days_between(excluding['range_start'], excluding['range_end']))

    conflicts = []
    for day in all_days_between(start_date, end_date):
        if day in own_days:
            continue

        existing = store.get(desk_id, day)
        if existing and existing['status'] != 'available':
            conflicts.append({
                'day': day,
                'occupant_name': existing.get('occupant_name') or None,
                'status': existing['status']
            })

    return conflicts


def format_conflict_message(conflicts: list) -> str:
    """
    Render conflicts as a multi-line message listing every conflicting day.

    Example:
        Cannot create booking due to conflicts on the following dates:

        Wed, Jan 8: Alice (assigned)
        Thu, Jan 9: Desk is booked

        Please choose different dates or select available time slots.
    """
    lines = []
    for conflict in conflicts:
        label = format_day_label(conflict['day'])
        if conflict['occupant_name']:
            lines.append(f"{label}: {conflict['occupant_name']} ({conflict['status']})")
        else:
            lines.append(f"{label}: Desk is {conflict['status']}")

    details = '\n'.join(lines)
    return (
        'Cannot create booking due to conflicts on the following dates:\n\n'
        f'{details}\n\n'
        'Please choose different dates or select available time slots.'
    )
