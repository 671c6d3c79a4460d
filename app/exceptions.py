"""
Booking Errors
Raised by the services and turned into JSON responses by the app error handler
"""


class BookingError(Exception):
    """Base class for errors surfaced to API callers"""

    status_code = 400

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {
            'error': self.__class__.__name__,
            'message': self.message,
        }


class ValidationError(BookingError):
    """Malformed input: date ordering, past dates, missing guest fields"""

    status_code = 400


class NotFoundError(BookingError):
    """Referenced property, reservation or blocked range does not exist"""

    status_code = 404


class ConflictError(BookingError):
    """Requested dates collide with a reservation or a blocked range"""

    status_code = 409
