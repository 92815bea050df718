"""
Booking engine exceptions.

ValidationError and ConflictError are raised before any store write.
StoreError wraps persistence failures and is propagated unchanged by the engine.
"""


class BookingError(Exception):
    pass


class ValidationError(BookingError, ValueError):
    pass


class ConflictError(BookingError):
    """One or more days of a requested range are occupied by another reservation."""

    def __init__(self, message: str, conflicts: list):
        super().__init__(message)
        self.conflicts = conflicts


class StoreError(BookingError):
    pass
