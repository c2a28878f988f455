"""
Core package for FlightsFX.
Contains the flight store and the input validation rules.
"""

from .store import FlightStore, load_store
from .validation import validate_fields, validate_flight, sanitize_field, is_valid_flight_number

__all__ = [
    'FlightStore',
    'load_store',
    'validate_fields',
    'validate_flight',
    'sanitize_field',
    'is_valid_flight_number'
]
