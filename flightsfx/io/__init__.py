"""
I/O package for FlightsFX.
Contains the file persistence for the flight list.
"""

from .files import get_flights_file, load_flights, save_flights

__all__ = [
    'get_flights_file',
    'load_flights',
    'save_flights'
]
