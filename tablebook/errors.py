"""Domain errors raised by the reservation services"""


class ReservationError(Exception):
    """Base class for expected, user-facing reservation failures"""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ReservationError):
    """Request is missing data or violates a booking rule"""

    status_code = 400


class NotFoundError(ReservationError):
    """Referenced reservation, account or table does not exist"""

    status_code = 404


class ConflictError(ReservationError):
    """Table already taken, or reservation not in the required state"""

    status_code = 409
