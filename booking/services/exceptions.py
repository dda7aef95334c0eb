"""
exceptions.py
-------------
Errors raised by the scheduling core. Views translate them to HTTP:

    InvalidInput     -> 400
    NotFound         -> 404
    BookingConflict  -> 409
    StorageFailure   -> 503

None of them is retried by the core.
"""


class BookingError(Exception):
    """Base class for booking/scheduling errors."""


class InvalidInput(BookingError):
    """Request data is missing or malformed; nothing was read or written."""


class NotFound(BookingError):
    """A referenced shop, employee, service or appointment does not exist."""


class ServiceNotFound(NotFound):
    def __init__(self, missing_ids):
        self.missing_ids = sorted(set(missing_ids))
        super().__init__(f"Unknown service id(s): {', '.join(str(i) for i in self.missing_ids)}")


class BookingConflict(BookingError):
    """The requested time overlaps an existing appointment of the employee."""


class StorageFailure(BookingError):
    """The database could not complete the operation."""
