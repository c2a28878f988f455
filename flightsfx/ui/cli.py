"""
Command-line interface for FlightsFX.
Provides a text-based interface over the flight store.
"""

import logging
from pathlib import Path
from typing import List, Optional

from .chart import save_destination_chart, summary_lines
from .state import ControlState, compute_control_state
from ..config.constants import (
    APP_NAME, APP_VERSION, DEFAULT_CHART_FILENAME,
    DEPARTURE_TIME_HINT, DURATION_HINT
)
from ..config.settings import settings
from ..core.store import FlightStore
from ..core.validation import validate_fields
from ..data.codec import format_departure_time, format_duration, format_minutes
from ..data.models import Flight, FilterKind, SearchCriterion
from ..errors import FlightsError, NoOpWarning, DuplicateError

logger = logging.getLogger("flightsfx.ui.cli")

SEARCH_OPTIONS = [
    ("Flight number", SearchCriterion.FLIGHT_NUMBER),
    ("Destination", SearchCriterion.DESTINATION),
    ("Departure time", SearchCriterion.DEPARTURE_TIME),
]

FILTER_OPTIONS = [
    "Show all flights",
    "Show flights to currently selected city",
    "Show long flights",
    "Show next 5 flights",
    "Show flight duration average",
]


class CLI:
    """
    Command-line interface for FlightsFX.
    Keeps the displayed list and the selection; every change goes through the store.
    """

    def __init__(self, store: FlightStore):
        """
        Initialize the CLI.

        Args:
            store: The flight store shared with the rest of the application
        """
        self.store = store
        self.view: List[Flight] = []
        self.selected: Optional[Flight] = None
        self.updating = False
        self.running = False
        self._reset_to_initial_state()

        logger.debug("CLI initialized")

    @property
    def controls(self) -> ControlState:
        """Actions available in the current state"""
        return compute_control_state(
            store_empty=self.store.is_empty,
            has_selection=self.selected is not None,
            updating=self.updating,
        )

    def run(self) -> None:
        """
        Run the CLI interface.
        This is the main entry point for the CLI.
        """
        print(f"\n===== {APP_NAME} v{APP_VERSION} =====\n")
        print(f"{len(self.store)} flights loaded.")
        self._print_help()

        self.running = True
        try:
            while self.running:
                try:
                    command = input("\n> ")
                except EOFError:
                    break
                self.running = self.handle_command(command)
        except KeyboardInterrupt:
            print("\nInterrupted.")
        finally:
            self._shutdown()
            print("Bye.")

    def handle_command(self, command: str) -> bool:
        """
        Execute one command line.

        Returns:
            bool: False when the user asked to exit
        """
        parts = command.strip().split()
        if not parts:
            return True
        name, args = parts[0].lower(), parts[1:]

        try:
            if name in ("help", "?"):
                self._print_help()
            elif name in ("list", "ls"):
                self._print_view()
            elif name == "select":
                self._select(args)
            elif name == "add":
                self._add_flight()
            elif name == "delete":
                self._delete_flight()
            elif name == "search":
                self._search_flight()
            elif name == "update":
                self._update_flight()
            elif name == "filter":
                self._apply_filter()
            elif name == "average":
                self._show_duration_average()
            elif name == "chart":
                self._show_chart(args)
            elif name == "save":
                self.store.persist()
                print(f"Flights saved to {self.store.path}")
            elif name == "cancel":
                self._reset_to_initial_state()
                self._print_view()
            elif name in ("exit", "quit"):
                return False
            else:
                print(f"Unknown command: {name}")
                print("Type 'help' for available commands.")
        except FlightsError as e:
            print(f"Error: {e}")
        except Exception as e:
            logger.error(f"Error running command {name!r}: {e}")
            print(f"Error: {e}")
        return True

    def _print_help(self) -> None:
        """Print help information."""
        print("\nAvailable commands:")
        print("  list, ls   - Show the displayed flights")
        print("  select N   - Select flight N of the displayed list")
        print("  add        - Add a new flight")
        print("  delete     - Delete the selected flight")
        print("  search     - Search flights (search results can then be updated)")
        print("  update     - Update the selected search result")
        print("  cancel     - Leave search results and show all flights")
        print("  filter     - Apply a filter to the flight list")
        print("  average    - Show the average flight duration")
        print("  chart [F]  - Summarise destinations and save a pie chart to F")
        print("  save       - Save the flights file")
        print("  exit, quit - Save and exit the program")

    def _print_view(self) -> None:
        """Print the displayed flights, marking the selected one."""
        if not self.view:
            print("No flights to show")
            return
        print(f"\n     {'Number':<8} {'Destination':<20} {'Departure':<16} Duration")
        for i, flight in enumerate(self.view, start=1):
            marker = "*" if self.selected is not None and flight is self.selected else " "
            print(f"{marker}{i:>3} {flight.flight_number:<8} {flight.destination:<20} "
                  f"{format_departure_time(flight.departure_time):<16} "
                  f"{format_duration(flight.duration)}")

    def _reset_to_initial_state(self) -> None:
        """Show all flights, clear the selection and leave update mode."""
        self.view = list(self.store.flights)
        self.selected = None
        self.updating = False

    def _show(self, flights: List[Flight]) -> None:
        self.view = flights
        self.selected = None
        self._print_view()

    def _select(self, args: List[str]) -> None:
        if len(args) != 1 or not args[0].isdigit():
            print("Usage: select N")
            return
        index = int(args[0])
        if not 1 <= index <= len(self.view):
            print(f"No flight number {index} in the displayed list")
            return
        self.selected = self.view[index - 1]
        print(f"Selected: {self.selected}")

    def _ask(self, prompt: str, default: str = "") -> str:
        answer = input(f"{prompt} [{default}]: " if default else f"{prompt}: ")
        return answer or default

    def _confirm(self, question: str) -> bool:
        return input(f"{question} (y/n): ").strip().lower().startswith("y")

    def _ask_fields(self, current: Optional[Flight] = None) -> Flight:
        """Prompt for the four flight fields and validate them."""
        if current is None:
            defaults = ("", "", "", "")
        else:
            defaults = (current.flight_number, current.destination,
                        format_departure_time(current.departure_time),
                        format_duration(current.duration))
        flight_number = self._ask("Flight number", defaults[0])
        destination = self._ask("Destination", defaults[1])
        departure = self._ask(f"Departure ({DEPARTURE_TIME_HINT})", defaults[2])
        duration = self._ask(f"Duration ({DURATION_HINT})", defaults[3])
        return validate_fields(flight_number, destination, departure, duration)

    def _add_flight(self) -> None:
        """Add a new flight from prompted fields."""
        if not self.controls.add_enabled:
            print("Finish or cancel the current update before adding flights.")
            return
        print("\nEnter flight details:")
        flight = self.store.add_flight(self._ask_fields())
        print(f"Flight added: {flight}")
        self._reset_to_initial_state()

    def _delete_flight(self) -> None:
        """Delete the selected flight after confirmation."""
        if not self.controls.delete_enabled:
            print("Select a flight to delete first.")
            return
        if not self._confirm(f"Delete flight:\n{self.selected}?"):
            return
        removed = self.store.delete(self.selected)
        print(f"Flight deleted: {removed}")
        self._reset_to_initial_state()

    def _search_flight(self) -> None:
        """Search flights; matches become editable with 'update'."""
        print("\nSearch by:")
        for i, (label, _) in enumerate(SEARCH_OPTIONS, start=1):
            print(f"  {i}: {label}")
        choice = self._ask("Option", "1")
        if choice not in ("1", "2", "3"):
            print(f"Unknown option: {choice}")
            return
        label, criterion = SEARCH_OPTIONS[int(choice) - 1]
        value = self._ask(label)

        found = self.store.search(criterion, value)
        if not found:
            print("No flights found")
            return
        self._show(found)
        self.updating = True
        print("Select a flight and use 'update' to edit it, or 'cancel'.")

    def _update_flight(self) -> None:
        """Edit the selected search result."""
        if not self.updating:
            print("Search for a flight before updating it.")
            return
        if not self.controls.update_enabled:
            print("No flight selected to update.")
            return

        selected = self.selected
        while True:
            print("\nEnter new flight details (press Enter to keep a value):")
            new = self._ask_fields(selected)
            try:
                self.store.check_update(selected, new)
            except NoOpWarning as e:
                print(str(e))
                if self._confirm("Keep editing the flight?"):
                    continue
                self._reset_to_initial_state()
                return
            except DuplicateError:
                print(f"Error: the flight already exists in the list: {new}")
                return
            break

        if not self._confirm(f"Update flight?\n  Old flight: {selected}\n  New flight: {new}"):
            return
        self.store.update_flight(selected, new)
        print(f"Flight updated: {new}")
        self._reset_to_initial_state()

    def _apply_filter(self) -> None:
        """Apply one of the predefined filters to the displayed list."""
        if not self.controls.filter_enabled:
            print("Error: no flights to filter")
            return

        print("\nFilters:")
        for i, label in enumerate(FILTER_OPTIONS, start=1):
            print(f"  {i}: {label}")
        choice = self._ask("Option", "1")

        if choice == "1":
            self._reset_to_initial_state()
            self._print_view()
            return
        if choice == "2":
            flights = self.store.filter(FilterKind.TO_DESTINATION, reference=self.selected)
        elif choice == "3":
            flights = self.store.filter(FilterKind.LONG)
        elif choice == "4":
            flights = self.store.filter(FilterKind.NEXT)
        elif choice == "5":
            self._show_duration_average()
            self._reset_to_initial_state()
            return
        else:
            print(f"Unknown option: {choice}")
            return

        if not flights:
            print("No flights match the filter, showing all flights.")
            self._reset_to_initial_state()
            self._print_view()
            return
        # Filter results are not editable
        self.updating = False
        self._show(flights)

    def _show_duration_average(self) -> None:
        average = self.store.average_duration_minutes()
        if average is None:
            print("Error: cannot compute the average duration, the flight list is empty")
            return
        print(f"Average duration of all flights: {format_minutes(average)}")

    def _show_chart(self, args: List[str]) -> None:
        """Print the destination summary and save it as a pie chart."""
        if not self.controls.chart_enabled:
            print("No flights loaded to show the chart")
            return
        summary = self.store.destination_summary()
        print("\nDestinations:")
        for line in summary_lines(summary):
            print(f"  {line}")

        target = Path(args[0]) if args else Path(settings.get('chart_file', DEFAULT_CHART_FILENAME))
        saved = save_destination_chart(summary, target)
        print(f"Chart saved to {saved}")

    def _shutdown(self) -> None:
        """Save the flight list before exiting."""
        try:
            self.store.persist()
        except FlightsError as e:
            logger.error(f"Error saving the flight list on exit: {e}")
            print(f"Error: {e}")


# Factory function to create a CLI instance
def create_cli(store: FlightStore) -> CLI:
    """
    Create a new CLI instance.

    Args:
        store: The flight store to operate on

    Returns:
        CLI: A new CLI instance
    """
    return CLI(store)
