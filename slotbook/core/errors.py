# slotbook/core/errors.py
"""
Typed failures raised by the scheduling engine.

Every public engine operation either returns its result or raises one of
these. The engine never catches them itself; the request layer maps them to
HTTP responses.
"""


class SchedulingError(Exception):
    """Base class for every engine failure."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidFormat(SchedulingError):
    """Malformed date or time string."""


class InvalidRange(SchedulingError):
    """start >= end, from_date > to_date, or a duration out of bounds."""


class PastDate(InvalidRange):
    """Requested date lies before the injected current date."""


class SlotUnavailable(SchedulingError):
    """The requested time overlaps an existing booking."""

    def __init__(self, message: str, conflicting_ids=None):
        super().__init__(message)
        self.conflicting_ids = list(conflicting_ids or [])


class InvalidTransition(SchedulingError):
    """Illegal booking status change."""


class InvalidProviderId(SchedulingError):
    """Identifier is not a well-formed provider id."""


class BookingNotFound(SchedulingError):
    """No booking matches the given id or cancellation token."""
