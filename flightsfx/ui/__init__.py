"""
UI package for FlightsFX.
Contains the command-line interface and its chart output.
"""

from .cli import CLI, create_cli
from .state import ControlState, compute_control_state

__all__ = [
    'CLI',
    'create_cli',
    'ControlState',
    'compute_control_state'
]
