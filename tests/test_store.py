"""
Tests for the flight store.
"""

import pytest
import datetime
from flightsfx.config.settings import settings
from flightsfx.core.store import FlightStore, load_store
from flightsfx.data.models import SearchCriterion, FilterKind
from flightsfx.errors import (
    ValidationError, DuplicateError, NoOpWarning, NotFoundError,
    ParseError, PersistenceError
)
from flightsfx.io.files import load_flights
from conftest import make_flight

NOW = datetime.datetime(2026, 1, 15, 12, 0)


class TestLoadStore:
    """Test cases for load_store."""

    def test_missing_file_gives_empty_store(self, flights_file):
        """Test that a missing file is not an error."""
        store = load_store(flights_file)

        assert store.is_empty
        assert store.path == flights_file

    def test_load_existing_file(self, flights_file, sample_line, sample_flight):
        """Test loading flights from a file."""
        flights_file.write_text(sample_line + "\nbroken line\n", encoding="utf-8")

        store = load_store(flights_file)

        assert store.flights == (sample_flight,)

    def test_relative_path(self, tmp_path, monkeypatch, sample_line):
        """Test that a relative path resolves against the working directory."""
        monkeypatch.chdir(tmp_path)
        (tmp_path / "flights.txt").write_text(sample_line + "\n", encoding="utf-8")

        store = load_store("flights.txt")

        assert len(store) == 1
        assert store.path == tmp_path / "flights.txt"

    def test_duplicate_lines_load_once(self, flights_file, sample_flight):
        """Test that lines equal to an earlier flight are not loaded twice."""
        flights_file.write_text(
            "AA100;PARIS;01/01/2026 10:00;2:30\n"
            "AA100;paris;01/01/2026 10:00;2:30\n",
            encoding="utf-8"
        )

        store = load_store(flights_file)

        assert store.flights == (sample_flight,)
        store.delete(sample_flight)
        assert sample_flight not in store


class TestAdd:
    """Test cases for adding flights."""

    def test_add_appends_and_persists(self, store, flights_file):
        """Test that add appends at the end and saves the file."""
        flight = store.add("ux1094", "Rome", "20/07/2026 09:15", "2:20")

        assert flight.flight_number == "UX1094"
        assert store.flights[-1] == flight
        assert load_flights(flights_file)[-1] == flight
        assert len(load_flights(flights_file)) == len(store)

    def test_add_duplicate(self, flights_file):
        """Test that adding an equal flight raises DuplicateError and changes nothing."""
        store = FlightStore([make_flight()], path=flights_file)

        with pytest.raises(DuplicateError):
            store.add("AA100", "PARIS", "01/01/2026 10:00", "2:30")

        assert store.flights == (make_flight(),)
        assert not flights_file.exists()

    def test_add_duplicate_ignores_destination_case(self, store):
        """Test that destination case does not make a flight distinct."""
        with pytest.raises(DuplicateError):
            store.add("AA100", "paris", "01/01/2026 10:00", "2:30")

    def test_same_number_on_another_date(self, store):
        """Test that a flight number can recur on a different date."""
        store.add("AA100", "PARIS", "08/01/2026 10:00", "2:30")

        assert len(store.search(SearchCriterion.FLIGHT_NUMBER, "AA100")) == 2

    def test_add_invalid_fields(self, store):
        """Test that validation errors leave the store unchanged."""
        before = store.flights
        with pytest.raises(ValidationError):
            store.add("", "ROME", "20/07/2026 09:15", "2:20")
        with pytest.raises(ValidationError):
            store.add("UX-1", "ROME", "20/07/2026 09:15", "2:20")
        with pytest.raises(ValidationError):
            store.add("UX1", "ROME", "20-07-2026 09:15", "2:20")
        with pytest.raises(ValidationError):
            store.add("UX1", "ROME", "20/07/2026 09:15", "25:00")
        assert store.flights == before

    def test_add_then_search(self, store):
        """Test that an added flight is found by its number."""
        flight = store.add("UX1094", "ROME", "20/07/2026 09:15", "2:20")

        assert store.search(SearchCriterion.FLIGHT_NUMBER, flight.flight_number) == [flight]

    def test_add_flight(self, store):
        """Test adding a prebuilt flight."""
        flight = make_flight("UX1", "ROME")
        assert store.add_flight(flight) is flight
        with pytest.raises(DuplicateError):
            store.add_flight(make_flight("UX1", "rome"))

    def test_check_add(self, store, sample_flight):
        """Test the add check without adding."""
        with pytest.raises(DuplicateError):
            store.check_add(sample_flight)
        store.check_add(make_flight("ZZ9"))
        assert make_flight("ZZ9") not in store

    def test_save_failure_keeps_flight(self, tmp_path, sample_flight):
        """Test that a failed save surfaces an error but keeps the flight in memory."""
        target = tmp_path / "directory"
        target.mkdir()
        store = FlightStore([], path=target)

        with pytest.raises(PersistenceError):
            store.add_flight(sample_flight)

        assert store.flights == (sample_flight,)


class TestUpdate:
    """Test cases for updating flights."""

    def test_update_keeps_position(self, store, sample_flights, flights_file):
        """Test that the new flight replaces the old one in place."""
        old = sample_flights[1]

        new = store.update(old, "IB1234", "MADRID", "15/06/2025 16:00", "2:15")

        assert store.flights[1] == new
        assert old not in store
        assert len(store) == len(sample_flights)
        assert load_flights(flights_file)[1] == new

    def test_update_identical_is_noop(self, store, sample_flights, flights_file):
        """Test that identical fields raise NoOpWarning."""
        before = store.flights

        with pytest.raises(NoOpWarning) as exc_info:
            store.update(sample_flights[0], "AA100", "paris", "01/01/2026 10:00", "2:30")

        assert exc_info.value.flight == sample_flights[0]
        assert store.flights == before
        assert not flights_file.exists()

    def test_noop_is_a_warning(self):
        """Test that NoOpWarning can be handled as a warning."""
        assert issubclass(NoOpWarning, UserWarning)

    def test_update_to_other_existing_flight(self, store, sample_flights):
        """Test that updating onto another stored flight raises DuplicateError."""
        with pytest.raises(DuplicateError):
            store.update(sample_flights[0], "IB1234", "madrid", "15/06/2025 14:30", "2:15")

        assert store.flights[0] == sample_flights[0]

    def test_update_missing_flight(self, store):
        """Test that a flight no longer stored cannot be updated."""
        with pytest.raises(NotFoundError):
            store.update(make_flight("GONE1"), "GONE2", "ROME", "01/01/2026 10:00", "1:00")

    def test_update_validates_fields(self, store, sample_flights):
        """Test that update applies the add validation."""
        with pytest.raises(ValidationError):
            store.update(sample_flights[0], "AA100", "", "01/01/2026 10:00", "2:30")

    def test_update_flight(self, store, sample_flights):
        """Test updating with a prebuilt flight."""
        new = make_flight("AA100", "LYON")
        store.update_flight(sample_flights[0], new)

        assert store.flights[0] == new


class TestDelete:
    """Test cases for deleting flights."""

    def test_delete(self, store, sample_flights, flights_file):
        """Test removing a flight and saving."""
        removed = store.delete(sample_flights[2])

        assert removed == sample_flights[2]
        assert sample_flights[2] not in store
        assert load_flights(flights_file) == [f for f in sample_flights if f != removed]

    def test_delete_by_equality(self, store, sample_flights):
        """Test that an equal flight with another destination case is removed."""
        store.delete(make_flight("AA100", "paris"))

        assert sample_flights[0] not in store

    def test_delete_missing(self, store):
        """Test that deleting an absent flight raises NotFoundError."""
        with pytest.raises(NotFoundError):
            store.delete(make_flight("NOPE1"))


class TestSearch:
    """Test cases for searching flights."""

    def test_by_flight_number_ignores_case(self, store):
        """Test flight number search."""
        assert [f.flight_number for f in store.search(SearchCriterion.FLIGHT_NUMBER, "ib1234")] == ["IB1234"]

    def test_by_destination_ignores_case(self, store):
        """Test destination search keeps store order."""
        found = store.search(SearchCriterion.DESTINATION, "paris")

        assert [f.flight_number for f in found] == ["AA100", "AF200", "BA10"]

    def test_destination_is_exact(self, store):
        """Test that partial destinations do not match."""
        assert store.search(SearchCriterion.DESTINATION, "PAR") == []

    def test_by_departure_time(self, store, sample_flights):
        """Test departure time search."""
        assert store.search("departure_time", "10/03/2026 08:45") == [sample_flights[2]]

    def test_bad_date_format(self, store):
        """Test that a malformed departure time raises ParseError."""
        with pytest.raises(ParseError, match="bad date format"):
            store.search(SearchCriterion.DEPARTURE_TIME, "March 10th")

    def test_no_match(self, store):
        """Test that no match gives an empty list."""
        assert store.search(SearchCriterion.FLIGHT_NUMBER, "ZZ999") == []

    def test_empty_value(self, store):
        """Test that an empty search is refused."""
        with pytest.raises(ValidationError):
            store.search(SearchCriterion.FLIGHT_NUMBER, "  ")


class TestFilter:
    """Test cases for filtering flights."""

    def test_all(self, store, sample_flights):
        """Test that ALL returns a copy of the whole store."""
        result = store.filter(FilterKind.ALL)

        assert result == sample_flights
        result.clear()
        assert len(store) == len(sample_flights)

    def test_to_destination_is_case_sensitive(self, store, sample_flights):
        """Test that the destination filter compares exact text."""
        result = store.filter(FilterKind.TO_DESTINATION, reference=sample_flights[0])

        assert [f.flight_number for f in result] == ["AA100", "BA10"]

    def test_to_destination_needs_reference(self, store):
        """Test that the destination filter needs a selected flight."""
        with pytest.raises(ValidationError):
            store.filter(FilterKind.TO_DESTINATION)

    def test_long(self, store):
        """Test that LONG keeps flights over three hours only."""
        result = store.filter("long")

        assert [f.flight_number for f in result] == ["LH400", "BA10"]
        assert all(f.duration_minutes > 180 for f in result)

    def test_long_is_idempotent(self, store):
        """Test that filtering long flights twice gives the same result."""
        once = store.filter(FilterKind.LONG)
        twice = FlightStore(once).filter(FilterKind.LONG)

        assert once == twice

    def test_next(self, store):
        """Test that NEXT gives upcoming flights sorted by departure."""
        result = store.filter(FilterKind.NEXT, now=NOW)

        assert [f.flight_number for f in result] == ["AF200", "LH400", "BA10"]

    def test_next_limit(self):
        """Test that NEXT returns at most the requested number of flights."""
        store = FlightStore([
            make_flight(f"N{i}", departure=(2026, 2, 28 - i, 10, 0)) for i in range(8)
        ])

        result = store.filter(FilterKind.NEXT, now=NOW, limit=5)

        assert len(result) == 5
        assert all(f.departure_time > NOW for f in result)
        assert [f.departure_time for f in result] == sorted(f.departure_time for f in result)
        assert result[0].flight_number == "N7"

    def test_next_default_limit(self):
        """Test the default of five upcoming flights."""
        store = FlightStore([
            make_flight(f"N{i}", departure=(2026, 3, 1 + i, 10, 0)) for i in range(7)
        ])

        assert len(store.filter(FilterKind.NEXT, now=NOW)) == 5

    @pytest.mark.parametrize("configured, expected", [("3", 3), ("many", 5), (None, 5)])
    def test_next_limit_from_settings(self, monkeypatch, configured, expected):
        """Test that the configured limit is coerced to an integer."""
        monkeypatch.setitem(settings._settings, "next_flights_limit", configured)
        store = FlightStore([
            make_flight(f"N{i}", departure=(2026, 3, 1 + i, 10, 0)) for i in range(7)
        ])

        assert len(store.filter(FilterKind.NEXT, now=NOW)) == expected

    def test_next_is_strictly_after_now(self):
        """Test that a flight departing exactly now is not upcoming."""
        store = FlightStore([make_flight(departure=(2026, 1, 15, 12, 0))])

        assert store.filter(FilterKind.NEXT, now=NOW) == []

    def test_empty_result_is_observable(self):
        """Test that a filter with no matches returns an empty list."""
        store = FlightStore([make_flight(duration=(1, 0))])

        assert store.filter(FilterKind.LONG) == []


class TestAggregates:
    """Test cases for averages and summaries."""

    def test_average_duration(self, store):
        """Test the mean duration in minutes."""
        # 150 + 135 + 485 + 180 + 181
        assert store.average_duration_minutes() == pytest.approx(226.2)

    def test_average_on_empty_store(self):
        """Test that an empty store has no average."""
        assert FlightStore().average_duration_minutes() is None

    def test_destination_summary(self, store):
        """Test counts per exact destination, in first-seen order."""
        assert store.destination_summary() == {"PARIS": 2, "MADRID": 1, "NEW YORK": 1, "Paris": 1}
        assert list(store.destination_summary()) == ["PARIS", "MADRID", "NEW YORK", "Paris"]


class TestPersist:
    """Test cases for explicit saving."""

    def test_persist_without_path(self, sample_flights):
        """Test that an in-memory store saves nothing."""
        FlightStore(sample_flights).persist()

    def test_save_then_load(self, store, flights_file, sample_flights):
        """Test that a saved store loads back equal."""
        store.persist()

        assert load_store(flights_file).flights == tuple(sample_flights)
