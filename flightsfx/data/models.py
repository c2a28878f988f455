"""
Data models for FlightsFX.
Contains the flight record and the enums naming search and filter options.
"""

from dataclasses import dataclass
from typing import Dict, Any
import datetime
from enum import Enum

from ..config.constants import FIELD_SEPARATOR, LONG_FLIGHT_MINUTES


class SearchCriterion(Enum):
    """Field a search compares against"""
    FLIGHT_NUMBER = "flight_number"
    DESTINATION = "destination"
    DEPARTURE_TIME = "departure_time"


class FilterKind(Enum):
    """Filters offered over the flight list"""
    ALL = "all"
    TO_DESTINATION = "to_destination"
    LONG = "long"
    NEXT = "next"


@dataclass(frozen=True, eq=False)
class Flight:
    """
    A scheduled flight.
    Format on disk: <flight_number>;<destination>;<dd/MM/yyyy HH:mm>;<H:mm>

    Two flights are equal when flight number, departure time and duration
    match exactly and the destinations match ignoring case.
    """
    flight_number: str
    destination: str
    departure_time: datetime.datetime
    duration: datetime.time

    def __post_init__(self):
        """Validate data after initialization"""
        if not isinstance(self.flight_number, str):
            raise TypeError("flight_number must be a string")
        if not isinstance(self.destination, str):
            raise TypeError("destination must be a string")
        if not isinstance(self.departure_time, datetime.datetime):
            raise TypeError("departure_time must be a datetime")
        if not isinstance(self.duration, datetime.time):
            raise TypeError("duration must be a time")

        if FIELD_SEPARATOR in self.flight_number or FIELD_SEPARATOR in self.destination:
            raise ValueError(f"fields cannot contain '{FIELD_SEPARATOR}'")

        # Minute precision only
        object.__setattr__(self, "departure_time",
                           self.departure_time.replace(second=0, microsecond=0))
        object.__setattr__(self, "duration",
                           self.duration.replace(second=0, microsecond=0))

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Flight):
            return NotImplemented
        return (self.flight_number == other.flight_number
                and self.destination.upper() == other.destination.upper()
                and self.departure_time == other.departure_time
                and self.duration == other.duration)

    def __hash__(self) -> int:
        return hash((self.flight_number, self.destination.upper(),
                     self.departure_time, self.duration))

    def __str__(self) -> str:
        from .codec import encode
        return encode(self)

    @property
    def duration_minutes(self) -> int:
        """Duration expressed in minutes"""
        return self.duration.hour * 60 + self.duration.minute

    @property
    def is_long(self) -> bool:
        """True if the flight lasts strictly more than three hours"""
        return self.duration_minutes > LONG_FLIGHT_MINUTES

    def to_dict(self) -> Dict[str, Any]:
        """Convert the object to a dictionary"""
        return {
            "flight_number": self.flight_number,
            "destination": self.destination,
            "departure_time": self.departure_time.isoformat(),
            "duration": self.duration.strftime("%H:%M"),
        }
