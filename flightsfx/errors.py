"""
Exceptions raised by the flight store and its collaborators.
All of them are recoverable and local to a single operation.
"""

from pathlib import Path
from typing import Optional, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from .data.models import Flight


class FlightsError(Exception):
    """Base class for every error raised by FlightsFX."""


class ValidationError(FlightsError):
    """An input field is empty or malformed."""


class ParseError(FlightsError):
    """A search value or stored line does not match the expected format."""


class DuplicateError(FlightsError):
    """An add or update would store a record equal to an existing one."""

    def __init__(self, flight: "Flight", message: Optional[str] = None):
        super().__init__(message or f"Flight already exists: {flight}")
        self.flight = flight


class NoOpWarning(FlightsError, UserWarning):
    """
    The update fields are identical to the selected record.
    Not a failure: the caller decides whether to keep editing or abort.
    """

    def __init__(self, flight: "Flight", message: Optional[str] = None):
        super().__init__(message or "The entered data is identical to the selected flight, nothing to update")
        self.flight = flight


class NotFoundError(FlightsError):
    """The delete or update target is not in the store."""

    def __init__(self, flight: "Flight", message: Optional[str] = None):
        super().__init__(message or f"Flight not found: {flight}")
        self.flight = flight


class PersistenceError(FlightsError):
    """The flights file could not be written."""

    def __init__(self, path: Union[str, Path], message: Optional[str] = None):
        super().__init__(message or f"Error saving flights to {path}")
        self.path = Path(path)
