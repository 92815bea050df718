"""
Standardized API response helpers.

Every JSON endpoint answers in one of these shapes:

    Success:  {"success": true, "data": {...}, "message": "..."}
    Error:    {"success": false, "error": "..."}

Usage:
    from utils.api_response import api_success, api_error, api_booking_error

    return api_success(data={'days': 5}, message='Booking created')
    return api_error('start_date is required', status=400)
"""

from flask import current_app, jsonify
from typing import Any

from utils.exceptions import ConflictError, StoreError, ValidationError


def api_success(
    data: dict | None = None,
    message: str | None = None,
    status: int = 200,
    **extra_fields: Any
) -> tuple:
    """
    Build a standardized success JSON response.

    Args:
        data: Optional dict to include as 'data' key.
        message: Optional success message.
        status: HTTP status code (default 200).
        **extra_fields: Additional top-level fields to include in the response.

    Returns:
        Tuple of (Response, status_code)
    """
    response = {'success': True}

    if data is not None:
        response['data'] = data

    if message:
        response['message'] = message

    if extra_fields:
        response.update(extra_fields)

    return jsonify(response), status


def api_error(error: str, status: int = 400, **extra_fields: Any) -> tuple:
    """
    Build a standardized error JSON response.

    Args:
        error: Error message.
        status: HTTP status code (default 400).
        **extra_fields: Additional top-level fields (e.g., conflicts).

    Returns:
        Tuple of (Response, status_code)
    """
    response = {'success': False, 'error': error}

    if extra_fields:
        response.update(extra_fields)

    return jsonify(response), status


def api_booking_error(error: Exception) -> tuple:
    """
    Map a booking engine exception to an error response.

    ValidationError -> 400, ConflictError -> 409 (with the conflict list),
    StoreError -> 503, anything else -> 500.
    """
    if isinstance(error, ValidationError):
        return api_error(str(error), 400)

    if isinstance(error, ConflictError):
        return api_error(str(error), 409, conflicts=error.conflicts)

    if isinstance(error, StoreError):
        current_app.logger.error(f'Store error: {error}', exc_info=True)
        return api_error('Booking storage is unavailable', 503)

    current_app.logger.error(f'Error: {error}', exc_info=True)
    return api_error('Internal server error', 500)
