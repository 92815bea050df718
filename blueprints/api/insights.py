"""
Insights API endpoints.
Revenue/occupancy statistics and the near-future availability panel.
"""

from flask import request

from blueprints.api.routes import get_default_currency, get_store
from models.booking_actions import find_quick_book_slot
from models.booking_horizon import scan_horizon
from models.desk import get_all_desks
from models.insights import (
    calculate_date_range_stats,
    calculate_monthly_stats,
    get_desk_stats,
)
from utils.api_response import api_booking_error, api_error, api_success
from utils.datetime_helpers import business_day_list, get_month_boundaries, get_today
from utils.exceptions import BookingError
from utils.validators import CURRENCIES, require_date_range


def _requested_currency():
    currency = request.args.get('currency') or get_default_currency()
    if currency not in CURRENCIES:
        return None
    return currency


def register_routes(bp):
    """Register insights API routes on the blueprint."""

    @bp.route('/stats/monthly', methods=['GET'])
    def get_monthly_stats():
        """
        Revenue and occupancy for a calendar month.

        Query params:
            year: Four digit year (default: current year)
            month: 1-12 (default: current month)
            currency: Display currency (default from config)
        """
        today = get_today()
        year = request.args.get('year', today.year, type=int)
        month = request.args.get('month', today.month, type=int)
        currency = _requested_currency()
        if currency is None:
            return api_error('Unsupported currency', 400)

        try:
            if not 1 <= month <= 12:
                return api_error('month must be between 1 and 12', 400)
            start_date, end_date = get_month_boundaries(year, month)
            desks = get_all_desks()
            records = get_store().get_all(start_date, end_date)
            stats = calculate_monthly_stats(records, year, month, len(desks), currency)
        except BookingError as e:
            return api_booking_error(e)

        return api_success(stats=stats, start_date=start_date, end_date=end_date)

    @bp.route('/stats/range', methods=['GET'])
    def get_range_stats():
        """
        Revenue and occupancy for an inclusive date range.

        Query params:
            start_date, end_date: Range (YYYY-MM-DD)
            currency: Display currency (default from config)
        """
        start_date = request.args.get('start_date')
        end_date = request.args.get('end_date')
        currency = _requested_currency()
        if currency is None:
            return api_error('Unsupported currency', 400)

        try:
            require_date_range(start_date, end_date)
            desks = get_all_desks()
            records = get_store().get_all(start_date, end_date)
            stats = calculate_date_range_stats(records, start_date, end_date, len(desks), currency)
        except BookingError as e:
            return api_booking_error(e)

        return api_success(stats=stats, start_date=start_date, end_date=end_date)

    @bp.route('/stats/desks', methods=['GET'])
    def get_desk_status_counts():
        """
        Count desk cells by status over the business days of a range.

        Query params:
            start_date, end_date: Range (YYYY-MM-DD)
        """
        start_date = request.args.get('start_date')
        end_date = request.args.get('end_date')

        try:
            require_date_range(start_date, end_date)
            stats = get_desk_stats(
                get_store(),
                get_all_desks(),
                business_day_list(start_date, end_date)
            )
        except BookingError as e:
            return api_booking_error(e)

        return api_success(stats=stats)

    @bp.route('/next-dates', methods=['GET'])
    def get_next_dates():
        """
        Next available dates, upcoming unpaid bookings and expiring assignments.

        Response JSON:
        {
            "success": true,
            "data": {
                "available_dates": ["2026-10-19", ...],
                "booked_dates": [{"date": "2026-10-20", "names": ["Alice"]}],
                "expiring_assignments": [
                    {"date": "2026-10-23", "desk_id": "room1-desk2",
                     "desk_number": 2, "occupant_name": "Bob"}
                ]
            }
        }
        """
        try:
            result = scan_horizon(get_store(), get_all_desks(), get_today().isoformat())
        except BookingError as e:
            return api_booking_error(e)

        return api_success(data=result)

    @bp.route('/quick-book', methods=['GET'])
    def get_quick_book_slot():
        """First free desk on the next available date."""
        store = get_store()
        desks = get_all_desks()

        try:
            horizon = scan_horizon(store, desks, get_today().isoformat())
            slot = find_quick_book_slot(store, desks, horizon['available_dates'])
        except BookingError as e:
            return api_booking_error(e)

        if not slot:
            return api_error('No available desk found', 404)

        return api_success(data=slot)
