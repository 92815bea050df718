"""
Core API routes: health check and desk reference data.
"""

from flask import current_app, jsonify

from models.booking_store import SQLiteBookingStore
from models.desk import get_all_desks


def get_store():
    """Booking store bound to the current app context's database."""
    return SQLiteBookingStore()


def get_default_currency() -> str:
    return current_app.config.get('DEFAULT_CURRENCY', 'EUR')


def register_routes(bp):
    """Register core API routes on the blueprint."""

    @bp.route('/health')
    def health_check():
        """
        Health check endpoint.

        Returns:
            JSON with status and version
        """
        return jsonify({
            'status': 'ok',
            'version': current_app.config.get('APP_VERSION', '1.0.0'),
            'app': current_app.config.get('APP_NAME', 'DeskCalendar')
        })

    @bp.route('/desks')
    def api_desks():
        """
        Get all desks in display order.

        Returns:
            JSON list of desks
        """
        desks = get_all_desks()

        return jsonify({
            'success': True,
            'desks': desks,
            'count': len(desks)
        })
