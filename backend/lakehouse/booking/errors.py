"""Exceptions raised by the booking engine and its store client."""


class BookingEngineError(Exception):
    """Base class for every failure the engine reports to its callers."""


class BookingValidationError(BookingEngineError):
    """Guest or stay input was rejected before anything was written."""


class DatesUnavailableError(BookingEngineError):
    """One or more requested nights are already blocked."""

    def __init__(self, message: str = "The selected dates are no longer available", nights=()):
        super().__init__(message)
        self.nights = tuple(nights)


class StoreUnavailableError(BookingEngineError):
    """The data store could not be reached or timed out."""


class BookingPersistenceError(BookingEngineError):
    """The booking write failed and was rolled back."""


class BookingNotFoundError(BookingEngineError):
    """No booking exists for the given confirmation code."""


class BookingStateError(BookingEngineError):
    """The requested lifecycle change is not allowed in the booking's status."""


class PropertyNotConfiguredError(BookingEngineError):
    """The property settings row is missing."""
