"""
Input validation helper functions.
Provides validation for booking request fields.
"""

from datetime import datetime

from utils.exceptions import ValidationError

BOOKING_STATUSES = ('available', 'booked', 'assigned')
CURRENCIES = ('USD', 'EUR', 'GBP', 'BGN')


def validate_date_format(date_str: str) -> bool:
    """
    Validate date is in zero-padded YYYY-MM-DD format.

    Args:
        date_str: Date string to validate

    Returns:
        True if valid format
    """
    try:
        parsed = datetime.strptime(date_str, '%Y-%m-%d')
    except (TypeError, ValueError):
        return False
    # strptime also accepts unpadded fields such as 2025-1-5
    return parsed.strftime('%Y-%m-%d') == date_str


def validate_date_range(start_date: str, end_date: str) -> bool:
    """
    Validate that end date is not before start date.

    Args:
        start_date: Start date (YYYY-MM-DD)
        end_date: End date (YYYY-MM-DD)

    Returns:
        True if valid date range
    """
    if not validate_date_format(start_date) or not validate_date_format(end_date):
        return False
    start = datetime.strptime(start_date, '%Y-%m-%d').date()
    end = datetime.strptime(end_date, '%Y-%m-%d').date()
    return end >= start


def validate_price(price) -> bool:
    """
    Validate a reservation total price.
    None means "no price"; otherwise a non-negative number (bools rejected).
    """
    if price is None:
        return True
    if isinstance(price, bool) or not isinstance(price, (int, float)):
        return False
    return price >= 0 and price == price


def require_date_range(start_date: str, end_date: str) -> None:
    """
    Raise ValidationError unless start/end form a well-formed inclusive range.
    """
    if not validate_date_format(start_date):
        raise ValidationError(f'Invalid start date: {start_date!r} (expected YYYY-MM-DD)')
    if not validate_date_format(end_date):
        raise ValidationError(f'Invalid end date: {end_date!r} (expected YYYY-MM-DD)')
    if not validate_date_range(start_date, end_date):
        raise ValidationError(f'End date {end_date} is before start date {start_date}')


def require_booking_fields(status: str, price=None, currency: str = None) -> None:
    """Raise ValidationError for an unknown status, a bad price or currency."""
    if status not in BOOKING_STATUSES:
        raise ValidationError(f'Unknown status: {status!r}')
    if not validate_price(price):
        raise ValidationError(f'Price must be a non-negative number, got {price!r}')
    if currency is not None and currency not in CURRENCIES:
        raise ValidationError(f'Unsupported currency: {currency!r}')


def sanitize_input(text: str, max_length: int = None) -> str:
    """
    Sanitize text input by trimming and limiting length.

    Args:
        text: Text to sanitize
        max_length: Maximum length (optional)

    Returns:
        Sanitized text
    """
    if not text:
        return ''

    # Strip whitespace
    sanitized = text.strip()

    # Limit length if specified
    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized
