"""
Constants for FlightsFX.
These are fixed values that don't change during application execution.
"""

# Flight record file format
FIELD_SEPARATOR = ';'
FIELD_COUNT = 4
DEPARTURE_TIME_FORMAT = '%d/%m/%Y %H:%M'
DEPARTURE_TIME_HINT = 'dd/MM/yyyy HH:mm'
DURATION_HINT = 'H:mm'
FLIGHT_NUMBER_PATTERN = r'[A-Z0-9]*'
DEFAULT_ENCODING = 'utf-8'

# File locations
DEFAULT_FLIGHTS_FILENAME = 'flights.txt'
DEFAULT_CHART_FILENAME = 'destinations.png'

# Query constants
LONG_FLIGHT_MINUTES = 180    # Flights strictly longer than this are "long"
NEXT_FLIGHTS_LIMIT = 5       # Number of upcoming flights shown by the "next" filter

# Application information
APP_NAME = "FlightsFX"
APP_VERSION = "1.0.0"
APP_AUTHOR = "Mila Canete"
APP_LICENSE = "MIT License"
APP_DESCRIPTION = "Manage a list of flights stored in a delimited text file"

# Chart constants
CHART_TITLE = "Destinations"
CHART_FIGSIZE = (6, 6)
CHART_DPI = 100
