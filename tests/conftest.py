"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import datetime
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from flightsfx.core.store import FlightStore
from flightsfx.data.models import Flight


def make_flight(number="AA100", destination="PARIS",
                departure=(2026, 1, 1, 10, 0), duration=(2, 30)):
    """Build a flight from plain values."""
    return Flight(number, destination,
                  datetime.datetime(*departure), datetime.time(*duration))


@pytest.fixture
def sample_line():
    """Provide a sample flights file line for testing."""
    return "AA100;PARIS;01/01/2026 10:00;2:30"


@pytest.fixture
def sample_flight():
    """Provide the flight encoded by sample_line."""
    return make_flight()


@pytest.fixture
def flights_file(tmp_path):
    """Provide a path for a flights file inside a temporary directory."""
    return tmp_path / "flights.txt"


@pytest.fixture
def sample_flights():
    """Provide a small, varied list of flights."""
    return [
        make_flight("AA100", "PARIS", (2026, 1, 1, 10, 0), (2, 30)),
        make_flight("IB1234", "MADRID", (2025, 6, 15, 14, 30), (2, 15)),
        make_flight("LH400", "NEW YORK", (2026, 3, 10, 8, 45), (8, 5)),
        make_flight("AF200", "Paris", (2026, 2, 1, 18, 0), (3, 0)),
        make_flight("BA10", "PARIS", (2026, 4, 1, 6, 0), (3, 1)),
    ]


@pytest.fixture
def store(sample_flights, flights_file):
    """Provide a store holding sample_flights, saved to flights_file."""
    return FlightStore(sample_flights, path=flights_file)
