"""
Data package for FlightsFX.
Contains the flight model and the codec for its text line format.
"""

from .models import Flight, SearchCriterion, FilterKind
from .codec import FlightCodec, codec, encode, decode

__all__ = [
    'Flight',
    'SearchCriterion',
    'FilterKind',
    'FlightCodec',
    'codec',
    'encode',
    'decode'
]
