"""
Flight store for FlightsFX.
Keeps the ordered flight list in memory and writes it back to its file after
every change.
"""

import logging
import datetime
import statistics
from collections import Counter
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .validation import validate_fields, validate_flight
from ..config.constants import NEXT_FLIGHTS_LIMIT
from ..config.settings import settings
from ..data.codec import parse_departure_time
from ..data.models import Flight, SearchCriterion, FilterKind
from ..errors import (
    ValidationError, ParseError, DuplicateError, NoOpWarning, NotFoundError
)
from ..io.files import get_flights_file, load_flights, save_flights

logger = logging.getLogger("flightsfx.core.store")


class FlightStore:
    """
    Ordered collection of flights backed by a text file.
    Insertion order is kept; updates replace a record in place.
    """

    def __init__(self,
                 flights: Optional[List[Flight]] = None,
                 path: Optional[Union[str, Path]] = None,
                 atomic: bool = True):
        """
        Initialize the store.

        Args:
            flights: Initial flights, in order
            path: File the store is saved to (None keeps it in memory only)
            atomic: Save through a temporary file and rename
        """
        self._flights: List[Flight] = list(flights or [])
        self.path: Optional[Path] = Path(path) if path is not None else None
        self.atomic = atomic

    # Read access

    @property
    def flights(self) -> Tuple[Flight, ...]:
        """Snapshot of the stored flights"""
        return tuple(self._flights)

    @property
    def is_empty(self) -> bool:
        return not self._flights

    def __len__(self) -> int:
        return len(self._flights)

    def __iter__(self) -> Iterator[Flight]:
        return iter(list(self._flights))

    def __contains__(self, flight: object) -> bool:
        return flight in self._flights

    def index_of(self, flight: Flight) -> int:
        """
        Position of the first record equal to ``flight``.

        Raises:
            NotFoundError: if no stored record is equal
        """
        try:
            return self._flights.index(flight)
        except ValueError:
            raise NotFoundError(flight) from None

    # Mutations

    def add(self, flight_number: str, destination: str,
            departure_time: str, duration: str) -> Flight:
        """
        Validate the raw fields and append the new flight.

        Returns:
            Flight: The stored flight

        Raises:
            ValidationError: if a field is empty or malformed
            DuplicateError: if an equal flight is already stored
            PersistenceError: if the file cannot be written (the flight stays added)
        """
        flight = validate_fields(flight_number, destination, departure_time, duration)
        return self._append(flight)

    def add_flight(self, flight: Flight) -> Flight:
        """Append an already built flight. Same rules as ``add``."""
        return self._append(validate_flight(flight))

    def check_add(self, flight: Flight) -> None:
        """
        Check that ``flight`` could be added, without adding it.

        Raises:
            DuplicateError: if an equal flight is already stored
        """
        if flight in self._flights:
            raise DuplicateError(flight)

    def _append(self, flight: Flight) -> Flight:
        self.check_add(flight)
        self._flights.append(flight)
        logger.info(f"Added flight {flight}")
        self.persist()
        return flight

    def update(self, old: Flight, flight_number: str, destination: str,
               departure_time: str, duration: str) -> Flight:
        """
        Replace ``old`` with a flight built from the raw fields, keeping its position.

        Returns:
            Flight: The new flight

        Raises:
            ValidationError: if a field is empty or malformed
            NoOpWarning: if the new fields equal ``old``
            NotFoundError: if ``old`` is no longer stored
            DuplicateError: if the new flight equals another stored flight
            PersistenceError: if the file cannot be written (the update stays applied)
        """
        new = validate_fields(flight_number, destination, departure_time, duration)
        return self._replace(old, new)

    def update_flight(self, old: Flight, new: Flight) -> Flight:
        """Replace ``old`` with an already built flight. Same rules as ``update``."""
        return self._replace(old, validate_flight(new))

    def check_update(self, old: Flight, new: Flight) -> int:
        """
        Check that ``old`` could be replaced by ``new``, without replacing it.

        Returns:
            int: Position of ``old`` in the store

        Raises:
            NoOpWarning: if ``new`` equals ``old``
            NotFoundError: if ``old`` is no longer stored
            DuplicateError: if ``new`` equals another stored flight
        """
        if new == old:
            raise NoOpWarning(old)

        index = self.index_of(old)
        if any(f == new for i, f in enumerate(self._flights) if i != index):
            raise DuplicateError(new, f"Flight already exists in the list: {new}")
        return index

    def _replace(self, old: Flight, new: Flight) -> Flight:
        index = self.check_update(old, new)
        self._flights[index] = new
        logger.info(f"Updated flight {old} -> {new}")
        self.persist()
        return new

    def delete(self, flight: Flight) -> Flight:
        """
        Remove the first stored flight equal to ``flight``.

        Returns:
            Flight: The removed flight

        Raises:
            NotFoundError: if no stored flight is equal
            PersistenceError: if the file cannot be written (the flight stays removed)
        """
        removed = self._flights.pop(self.index_of(flight))
        logger.info(f"Deleted flight {removed}")
        self.persist()
        return removed

    # Queries

    def search(self, criterion: Union[SearchCriterion, str], value: str) -> List[Flight]:
        """
        Find flights matching ``value`` on one field.
        Flight number and destination match exactly, ignoring case;
        departure time must be dd/MM/yyyy HH:mm and matches the exact minute.

        Returns:
            List[Flight]: Matches in store order (empty if none)

        Raises:
            ValidationError: if ``value`` is empty
            ParseError: if a departure time search value is badly formatted
        """
        criterion = SearchCriterion(criterion)
        value = value.strip()
        if not value:
            raise ValidationError("Nothing to search for")

        if criterion is SearchCriterion.FLIGHT_NUMBER:
            needle = value.upper()
            result = [f for f in self._flights if f.flight_number.upper() == needle]
        elif criterion is SearchCriterion.DESTINATION:
            needle = value.upper()
            result = [f for f in self._flights if f.destination.upper() == needle]
        else:
            try:
                when = parse_departure_time(value)
            except ParseError as e:
                raise ParseError(f"bad date format: {value!r}") from e
            result = [f for f in self._flights if f.departure_time == when]

        logger.debug(f"Search {criterion.value}={value!r}: {len(result)} match(es)")
        return result

    def filter(self, kind: Union[FilterKind, str],
               reference: Optional[Flight] = None,
               now: Optional[datetime.datetime] = None,
               limit: Optional[int] = None) -> List[Flight]:
        """
        Apply one of the predefined filters.

        Args:
            kind: Which filter to apply
            reference: Selected flight whose destination TO_DESTINATION matches
            now: Reference instant for NEXT (default: current local time)
            limit: Number of flights returned by NEXT (default: from settings)

        Returns:
            List[Flight]: The filtered flights, possibly empty

        Raises:
            ValidationError: if TO_DESTINATION is requested without a reference flight
        """
        kind = FilterKind(kind)

        if kind is FilterKind.ALL:
            result = list(self._flights)
        elif kind is FilterKind.TO_DESTINATION:
            if reference is None:
                raise ValidationError("Select a flight to filter by its destination")
            # Case-sensitive, unlike flight equality
            result = [f for f in self._flights if f.destination == reference.destination]
        elif kind is FilterKind.LONG:
            result = [f for f in self._flights if f.is_long]
        else:
            if now is None:
                now = datetime.datetime.now()
            if limit is None:
                limit = settings.get('next_flights_limit', NEXT_FLIGHTS_LIMIT)
            try:
                limit = int(limit)
            except (TypeError, ValueError):
                logger.warning(f"Invalid next flights limit {limit!r}, using {NEXT_FLIGHTS_LIMIT}")
                limit = NEXT_FLIGHTS_LIMIT
            upcoming = sorted((f for f in self._flights if f.departure_time > now),
                              key=lambda f: f.departure_time)
            result = upcoming[:max(limit, 0)]

        logger.debug(f"Filter {kind.value}: {len(result)} flight(s)")
        return result

    def average_duration_minutes(self) -> Optional[float]:
        """Mean flight duration in minutes, or None if the store is empty"""
        if not self._flights:
            return None
        return float(statistics.mean(f.duration_minutes for f in self._flights))

    def destination_summary(self) -> Dict[str, int]:
        """Number of flights per destination, in first-seen order"""
        return dict(Counter(f.destination for f in self._flights))

    # Persistence

    def persist(self) -> None:
        """
        Write the whole store to its file.

        Raises:
            PersistenceError: if the file cannot be written
        """
        if self.path is None:
            logger.debug("Store has no file, skipping save")
            return
        save_flights(self.path, self._flights, atomic=self.atomic)


def load_store(path: Optional[Union[str, Path]] = None,
               atomic: Optional[bool] = None) -> FlightStore:
    """
    Create a store from the flights file.
    A missing or unreadable file gives an empty store.

    Args:
        path: Flights file (default: from settings, relative to the working directory)
        atomic: Save through a temporary file (default: from settings)

    Returns:
        FlightStore: The loaded store
    """
    path = get_flights_file(path)
    if atomic is None:
        atomic = settings.get('atomic_save', True)
    return FlightStore(load_flights(path), path=path, atomic=atomic)
