"""
Booking API routes.
Create, edit, bulk apply, cycle and discard desk reservations.
"""

from flask import current_app, request

from blueprints.api.routes import get_default_currency, get_store
from models.booking_actions import (
    assign_occupant,
    bulk_apply,
    discard_booking,
    get_reservation,
    quick_cycle,
    save_booking,
)
from models.desk import get_desk_by_id
from utils.api_response import api_booking_error, api_error, api_success
from utils.exceptions import BookingError, ValidationError
from utils.validators import require_date_range, sanitize_input


def _parse_price(value):
    """Accept numbers or numeric strings; empty means no price."""
    if value is None or value == '':
        return None
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            raise ValidationError(f'Price must be a number, got {value!r}')
    return value


def register_routes(bp):
    """Register booking routes on the blueprint."""

    @bp.route('/bookings', methods=['GET'])
    def list_bookings():
        """
        Get day-records, optionally limited to a date range.

        Query params:
            start_date: First day (YYYY-MM-DD, optional)
            end_date: Last day (YYYY-MM-DD, optional)
        """
        start_date = request.args.get('start_date')
        end_date = request.args.get('end_date')

        try:
            if start_date and end_date:
                require_date_range(start_date, end_date)
            bookings = get_store().get_all(start_date, end_date)
            return api_success(bookings=bookings, count=len(bookings))
        except BookingError as e:
            return api_booking_error(e)

    @bp.route('/bookings/<desk_id>/<day>', methods=['GET'])
    def get_booking(desk_id, day):
        """Get the reservation a (desk, day) cell belongs to."""
        try:
            reservation = get_reservation(get_store(), desk_id, day)
        except BookingError as e:
            return api_booking_error(e)

        if not reservation:
            return api_error('No booking for this desk and day', 404)

        return api_success(data=reservation)

    @bp.route('/bookings', methods=['POST'])
    def create_or_update_booking():
        """
        Save a reservation.

        Request body:
            desk_id: Desk ID
            start_date, end_date: Range (YYYY-MM-DD), inclusive
            status: 'booked' or 'assigned'
            price: Total price for the whole range (optional)
            occupant_name: Person (optional, max 20 characters)
            title: Free text (optional)
            currency: Currency code (optional, default from config)
            existing_day: Any day of the reservation being edited (optional)

        Returns:
            201 on create, 200 on update; 409 with 'conflicts' on conflict
        """
        data = request.get_json(silent=True)
        if not data:
            return api_error('Request body required', 400)

        desk_id = data.get('desk_id')
        if not desk_id or not get_desk_by_id(desk_id):
            return api_error('Desk not found', 404)

        store = get_store()

        try:
            existing = None
            if data.get('existing_day'):
                existing = get_reservation(store, desk_id, data['existing_day'])
                if not existing:
                    return api_error('The booking being edited no longer exists', 404)

            result = save_booking(
                store,
                desk_id,
                data.get('start_date'),
                data.get('end_date'),
                data.get('status', 'booked'),
                price=_parse_price(data.get('price')),
                occupant_name=sanitize_input(
                    data.get('occupant_name'),
                    current_app.config.get('OCCUPANT_NAME_MAX_LENGTH', 20)
                ) or None,
                title=sanitize_input(
                    data.get('title'),
                    current_app.config.get('TITLE_MAX_LENGTH', 200)
                ) or None,
                currency=data.get('currency') or get_default_currency(),
                existing=existing
            )
        except BookingError as e:
            return api_booking_error(e)

        day_count = len(result['days'])
        message = (
            f"{'Booking updated' if existing else 'Booking created'}: "
            f"{result['status']} for {day_count} day{'s' if day_count > 1 else ''}"
        )
        return api_success(data=result, message=message, status=200 if existing else 201)

    @bp.route('/bookings/bulk', methods=['POST'])
    def bulk_update_bookings():
        """
        Set a status on many desks over a date range (no conflict check).

        Request body:
            desk_ids: List of desk IDs
            start_date, end_date: Range (YYYY-MM-DD), inclusive
            status: 'available', 'booked' or 'assigned'
        """
        data = request.get_json(silent=True)
        if not data:
            return api_error('Request body required', 400)

        desk_ids = data.get('desk_ids') or []
        if not isinstance(desk_ids, list):
            return api_error('desk_ids must be a list', 400)

        unknown = [desk_id for desk_id in desk_ids if not get_desk_by_id(desk_id)]
        if unknown:
            return api_error(f"Unknown desks: {', '.join(map(str, unknown))}", 404)

        try:
            result = bulk_apply(
                get_store(),
                desk_ids,
                data.get('start_date'),
                data.get('end_date'),
                data.get('status'),
                currency=data.get('currency') or get_default_currency()
            )
        except BookingError as e:
            return api_booking_error(e)

        return api_success(
            data=result,
            message=f"{result['desk_count']} desks updated for {result['day_count']} days"
        )

    @bp.route('/bookings/<desk_id>/<day>/cycle', methods=['POST'])
    def cycle_booking(desk_id, day):
        """Toggle a single day between available and booked."""
        if not get_desk_by_id(desk_id):
            return api_error('Desk not found', 404)

        try:
            status = quick_cycle(get_store(), desk_id, day, get_default_currency())
        except BookingError as e:
            return api_booking_error(e)

        return api_success(data={'desk_id': desk_id, 'day': day, 'status': status},
                           message=f'Desk status set to {status}')

    @bp.route('/bookings/<desk_id>/<day>/assign', methods=['POST'])
    def assign_booking(desk_id, day):
        """
        Assign a person to a desk for a day.

        Request body:
            occupant_name: Person (max 20 characters)
        """
        if not get_desk_by_id(desk_id):
            return api_error('Desk not found', 404)

        data = request.get_json(silent=True) or {}
        occupant_name = sanitize_input(
            data.get('occupant_name'),
            current_app.config.get('OCCUPANT_NAME_MAX_LENGTH', 20)
        )

        try:
            record = assign_occupant(get_store(), desk_id, day, occupant_name, get_default_currency())
        except BookingError as e:
            return api_booking_error(e)

        return api_success(data=record, message=f'{occupant_name} assigned to desk')

    @bp.route('/bookings/<desk_id>/<day>', methods=['DELETE'])
    def delete_booking(desk_id, day):
        """Discard the whole reservation that (desk, day) belongs to."""
        store = get_store()

        try:
            reservation = get_reservation(store, desk_id, day)
            if not reservation:
                return api_error('No booking for this desk and day', 404)
            days = discard_booking(store, reservation)
        except BookingError as e:
            return api_booking_error(e)

        return api_success(
            data={'desk_id': desk_id, 'days': days},
            message=f"Removed booking for {reservation['occupant_name'] or desk_id}"
        )
