"""
Revenue and occupancy accrual.

A reservation's price is the total for its whole range. Revenue for a
reporting window is that total prorated by business days: the share of the
reservation's own business days that fall inside the window. Amounts are left
unrounded so that adjacent windows add up to the full price.
"""

from utils.datetime_helpers import (
    business_day_list,
    business_days_between,
    get_month_boundaries,
    to_date,
    to_iso,
)
from utils.exceptions import ValidationError

OCCUPYING_STATUSES = ('booked', 'assigned')


# =============================================================================
# PRORATION
# =============================================================================

def calculate_prorated_revenue(record: dict, window_start, window_end) -> dict:
    """
    Prorate one reservation's total price over a reporting window.

    Args:
        record: Any day-record of the reservation (carries range and total price)
        window_start: First day of the window (inclusive)
        window_end: Last day of the window (inclusive)

    Returns:
        dict with:
            - total_booking_days: business days in the reservation's full range
            - days_in_period: business days of the range inside the window
            - prorated_price: price * days_in_period / total_booking_days
    """
    range_start = to_iso(record['range_start'])
    range_end = to_iso(record['range_end'])

    total_booking_days = business_days_between(range_start, range_end)

    overlap_start = max(range_start, to_iso(window_start))
    overlap_end = min(range_end, to_iso(window_end))
    days_in_period = 0
    if overlap_start <= overlap_end:
        days_in_period = business_days_between(overlap_start, overlap_end)

    price = record.get('price') or 0
    prorated_price = 0
    if total_booking_days > 0:
        prorated_price = price * days_in_period / total_booking_days

    return {
        'total_booking_days': total_booking_days,
        'days_in_period': days_in_period,
        'prorated_price': prorated_price
    }


# =============================================================================
# AGGREGATION
# =============================================================================

def count_occupied_days(records: list, business_days: list) -> int:
    """Count booked/assigned day-records falling on the given business days."""
    window_days = set(business_days)
    occupied_days = 0

    for record in records:
        if record['day'] not in window_days:
            continue
        if record['status'] in OCCUPYING_STATUSES:
            occupied_days += 1

    return occupied_days


def calculate_revenue_by_status(
    records: list,
    business_days: list,
    window_start,
    window_end
) -> dict:
    """
    Split prorated revenue into confirmed (assigned) and expected (booked).

    Each reservation is prorated once, from the first of its day-records seen
    inside the window.
    """
    window_days = set(business_days)
    processed = set()
    confirmed_revenue = 0
    expected_revenue = 0

    for record in records:
        if record['day'] not in window_days:
            continue

        key = (record['desk_id'], record['range_start'])
        if key in processed:
            continue
        processed.add(key)

        prorated = calculate_prorated_revenue(record, window_start, window_end)['prorated_price']

        if record['status'] == 'assigned':
            confirmed_revenue += prorated
        elif record['status'] == 'booked':
            expected_revenue += prorated

    return {
        'confirmed_revenue': confirmed_revenue,
        'expected_revenue': expected_revenue,
        'total_revenue': confirmed_revenue + expected_revenue
    }


def calculate_stats(
    records: list,
    window_start,
    window_end,
    desk_count: int,
    currency: str
) -> dict:
    """
    Revenue and occupancy figures for a reporting window.

    Args:
        records: Day-records, ideally pre-filtered to the window
        window_start: First day of the window (inclusive)
        window_end: Last day of the window (inclusive)
        desk_count: Number of desks (capacity per business day)
        currency: Display currency of the result; records are assumed to
            already be in it

    Returns:
        dict with:
            - total_revenue, confirmed_revenue, expected_revenue: float
            - occupied_days, total_desk_days: int
            - occupancy_rate: percentage in [0, 100]
            - revenue_per_occupied_day: float
            - currency: str

    Raises:
        ValidationError: If window_start is after window_end
    """
    if to_date(window_start) > to_date(window_end):
        raise ValidationError(
            f'Reporting window ends ({to_iso(window_end)}) before it starts ({to_iso(window_start)})'
        )

    business_days = business_day_list(window_start, window_end)
    total_desk_days = desk_count * len(business_days)

    occupied_days = count_occupied_days(records, business_days)
    revenue = calculate_revenue_by_status(records, business_days, window_start, window_end)

    occupancy_rate = occupied_days / total_desk_days * 100 if total_desk_days > 0 else 0
    revenue_per_occupied_day = revenue['total_revenue'] / occupied_days if occupied_days > 0 else 0

    return {
        'total_revenue': revenue['total_revenue'],
        'confirmed_revenue': revenue['confirmed_revenue'],
        'expected_revenue': revenue['expected_revenue'],
        'occupied_days': occupied_days,
        'total_desk_days': total_desk_days,
        'occupancy_rate': occupancy_rate,
        'revenue_per_occupied_day': revenue_per_occupied_day,
        'currency': currency
    }


def calculate_monthly_stats(
    records: list,
    year: int,
    month: int,
    desk_count: int,
    currency: str
) -> dict:
    """Stats for a whole calendar month."""
    if not 1 <= month <= 12:
        raise ValidationError(f'Month must be between 1 and 12, got {month}')

    start_date, end_date = get_month_boundaries(year, month)
    return calculate_stats(records, start_date, end_date, desk_count, currency)


def calculate_date_range_stats(
    records: list,
    start_date,
    end_date,
    desk_count: int,
    currency: str
) -> dict:
    """Stats for an arbitrary inclusive date range."""
    return calculate_stats(records, start_date, end_date, desk_count, currency)
