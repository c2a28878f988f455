"""
FlightsFX
Manages a small list of flight records persisted to a delimited text file.

Features:
- Adding, updating and deleting flight records
- Searching and filtering the flight list
- Summarising destinations as a pie chart
"""

from . import config
from . import data
from .config.constants import APP_NAME, APP_VERSION, APP_AUTHOR, APP_LICENSE

__version__ = APP_VERSION
__author__ = APP_AUTHOR
__license__ = APP_LICENSE

# Initialize logging when the package is imported
import logging
import sys

# Configure package logger
root_logger = logging.getLogger("flightsfx")
root_logger.setLevel(logging.INFO)

# Create console handler
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(logging.INFO)

# Create formatter
formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
console_handler.setFormatter(formatter)

# Add handler to logger
root_logger.addHandler(console_handler)

# Log initialization
root_logger.debug(f"Initializing {APP_NAME} v{APP_VERSION}")
