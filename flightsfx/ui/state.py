"""
Control enablement for the FlightsFX front ends.
Recomputed from the current store and view state whenever it is needed.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ControlState:
    """Which user actions are currently available"""
    add_enabled: bool
    delete_enabled: bool
    update_enabled: bool
    filter_enabled: bool
    chart_enabled: bool


def compute_control_state(store_empty: bool,
                          has_selection: bool,
                          updating: bool = False,
                          form_error: bool = False) -> ControlState:
    """
    Derive the available actions.

    Args:
        store_empty: True if the store holds no flights
        has_selection: True if a flight is selected in the current view
        updating: True while editing search results
        form_error: True if the entered fields hold a forbidden character
            or match an existing flight

    Returns:
        ControlState: The available actions
    """
    return ControlState(
        add_enabled=not updating and not form_error,
        delete_enabled=has_selection and not updating,
        update_enabled=updating and has_selection,
        filter_enabled=not store_empty,
        chart_enabled=not store_empty,
    )
