"""
Text codec for flight records.
Each flight is stored as one semicolon-delimited line:

    <flight_number>;<destination>;<dd/MM/yyyy HH:mm>;<H:mm>

Example: IB1234;MADRID;15/06/2025 14:30;2:15
"""

import logging
import re
import datetime
from typing import Optional

from .models import Flight
from ..config.constants import (
    FIELD_SEPARATOR, FIELD_COUNT, DEPARTURE_TIME_FORMAT,
    DEPARTURE_TIME_HINT, DURATION_HINT
)
from ..errors import ParseError

logger = logging.getLogger("flightsfx.codec")

# Two-digit day, month, hour and minute, four-digit year
_DEPARTURE_RE = re.compile(r'[0-9]{2}/[0-9]{2}/[0-9]{4} [0-9]{2}:[0-9]{2}')
# One or two hour digits, exactly two minute digits
_DURATION_RE = re.compile(r'([0-9]{1,2}):([0-9]{2})')


class FlightCodec:
    """
    Converts flights to and from their one-line text form.
    """

    @staticmethod
    def parse_departure_time(text: str) -> datetime.datetime:
        """
        Parse a departure time written as dd/MM/yyyy HH:mm.

        Raises:
            ParseError: if the text does not match the format or is not a real date
        """
        text = text.strip()
        if not _DEPARTURE_RE.fullmatch(text):
            raise ParseError(f"Departure time must have the format {DEPARTURE_TIME_HINT}: {text!r}")
        try:
            return datetime.datetime.strptime(text, DEPARTURE_TIME_FORMAT)
        except ValueError as e:
            raise ParseError(f"Invalid departure time {text!r}: {e}") from e

    @staticmethod
    def parse_duration(text: str) -> datetime.time:
        """
        Parse a duration written as H:mm (03:45 is accepted too).

        Raises:
            ParseError: if the text is not hours 0-23 and minutes 0-59
        """
        text = text.strip()
        match = _DURATION_RE.fullmatch(text)
        if not match:
            raise ParseError(f"Duration must have the format {DURATION_HINT}: {text!r}")
        try:
            return datetime.time(int(match.group(1)), int(match.group(2)))
        except ValueError as e:
            raise ParseError(f"Invalid duration {text!r}: {e}") from e

    @staticmethod
    def format_departure_time(value: datetime.datetime) -> str:
        """Format a departure time as dd/MM/yyyy HH:mm"""
        return f"{value.day:02d}/{value.month:02d}/{value.year:04d} {value.hour:02d}:{value.minute:02d}"

    @staticmethod
    def format_duration(value: datetime.time) -> str:
        """Format a duration as H:mm"""
        return f"{value.hour}:{value.minute:02d}"

    @staticmethod
    def format_minutes(minutes: float) -> str:
        """Format a number of minutes as HH:MM, dropping fractions"""
        return f"{int(minutes // 60):02d}:{int(minutes % 60):02d}"

    def encode(self, flight: Flight) -> str:
        """
        Convert a flight to its text line (without line terminator).

        Args:
            flight: The flight to encode

        Returns:
            str: The encoded line
        """
        return FIELD_SEPARATOR.join((
            flight.flight_number,
            flight.destination,
            self.format_departure_time(flight.departure_time),
            self.format_duration(flight.duration),
        ))

    def decode_strict(self, line: str) -> Flight:
        """
        Parse one text line into a flight.

        Raises:
            ParseError: if the line does not hold exactly four valid fields
        """
        line = line.rstrip("\r\n")
        parts = line.split(FIELD_SEPARATOR)
        if len(parts) != FIELD_COUNT:
            raise ParseError(f"Expected {FIELD_COUNT} fields, got {len(parts)}: {line!r}")

        flight_number, destination, departure_text, duration_text = parts
        return Flight(
            flight_number=flight_number,
            destination=destination,
            departure_time=self.parse_departure_time(departure_text),
            duration=self.parse_duration(duration_text),
        )

    def decode(self, line: str) -> Optional[Flight]:
        """
        Parse one text line, returning None instead of raising.
        A warning is logged for every rejected line.

        Args:
            line: The raw line to parse

        Returns:
            Optional[Flight]: The parsed flight, or None if the line is malformed
        """
        try:
            return self.decode_strict(line)
        except (ParseError, ValueError, TypeError) as e:
            logger.warning(f"Error parsing line: {line.rstrip()!r}. Error: {e}")
            return None


# Create a singleton instance of the codec
codec = FlightCodec()

encode = codec.encode
decode = codec.decode
decode_strict = codec.decode_strict
parse_departure_time = FlightCodec.parse_departure_time
parse_duration = FlightCodec.parse_duration
format_departure_time = FlightCodec.format_departure_time
format_duration = FlightCodec.format_duration
format_minutes = FlightCodec.format_minutes
