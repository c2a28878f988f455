"""
Input validation for flight records.
Turns the four raw text fields entered by the user into a Flight.
"""

import logging
import re

from ..config.constants import (
    FIELD_SEPARATOR, FLIGHT_NUMBER_PATTERN, DEPARTURE_TIME_HINT, DURATION_HINT
)
from ..data.codec import parse_departure_time, parse_duration
from ..data.models import Flight
from ..errors import ValidationError, ParseError

logger = logging.getLogger("flightsfx.core.validation")

_FLIGHT_NUMBER_RE = re.compile(FLIGHT_NUMBER_PATTERN)


def sanitize_field(text: str) -> str:
    """
    Remove the field separator and surrounding whitespace from an input field.

    Args:
        text: Raw field text

    Returns:
        str: The cleaned text
    """
    if FIELD_SEPARATOR in text:
        logger.warning(f"Removed forbidden character '{FIELD_SEPARATOR}' from input: {text!r}")
        text = text.replace(FIELD_SEPARATOR, "")
    return text.strip()


def is_valid_flight_number(text: str) -> bool:
    """True if the upper-cased text is alphanumeric. An empty string is valid."""
    return _FLIGHT_NUMBER_RE.fullmatch(text.upper()) is not None


def validate_flight(flight: Flight) -> Flight:
    """
    Check an already built flight for empty fields and a malformed flight number.

    Raises:
        ValidationError: if a field is empty or the flight number has invalid characters
    """
    if not flight.flight_number or not flight.destination.strip():
        raise ValidationError("empty field: none of the fields can be empty")
    if not is_valid_flight_number(flight.flight_number) or flight.flight_number != flight.flight_number.upper():
        raise ValidationError(f"invalid characters in flight number: {flight.flight_number!r}")
    return flight


def validate_fields(flight_number: str, destination: str,
                    departure_time: str, duration: str) -> Flight:
    """
    Validate the raw input fields and build a Flight from them.

    Args:
        flight_number: Flight number, upper-cased before checking
        destination: Destination city
        departure_time: Departure time as dd/MM/yyyy HH:mm
        duration: Duration as H:mm

    Returns:
        Flight: The validated flight

    Raises:
        ValidationError: if a field is empty or malformed
    """
    fields = [sanitize_field(f) for f in (flight_number, destination, departure_time, duration)]
    if any(not f for f in fields):
        raise ValidationError("empty field: none of the fields can be empty")
    flight_number, destination, departure_text, duration_text = fields

    flight_number = flight_number.upper()
    if not is_valid_flight_number(flight_number):
        raise ValidationError(f"invalid characters in flight number: {flight_number!r}")

    try:
        departure = parse_departure_time(departure_text)
    except ParseError as e:
        raise ValidationError(f"Departure time must have the format {DEPARTURE_TIME_HINT}") from e

    try:
        length = parse_duration(duration_text)
    except ParseError as e:
        raise ValidationError(f"Duration must have the format {DURATION_HINT}") from e

    return Flight(flight_number, destination, departure, length)
