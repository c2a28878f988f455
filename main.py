#!/usr/bin/env python3

"""
Entry point script that launches the command-line interface.
"""

import argparse
import logging
import sys

# Records go through the handler set up by the flightsfx package
logger = logging.getLogger("flightsfx.main")

def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='FlightsFX flight list manager'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    parser.add_argument(
        '--file',
        default=None,
        help='Flights file (default: flights.txt in the working directory)'
    )
    return parser.parse_args(argv)

def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    from flightsfx.config.settings import settings
    from flightsfx.core.store import load_store
    from flightsfx.ui.cli import CLI

    if args.debug:
        level = logging.DEBUG
    else:
        level = getattr(logging, str(settings.get('log_level', 'INFO')).upper(), logging.INFO)
    package_logger = logging.getLogger("flightsfx")
    package_logger.setLevel(level)
    for handler in package_logger.handlers:
        handler.setLevel(level)

    try:
        # One store for the whole session, handed to the interface
        store = load_store(args.file)
        cli = CLI(store)
    except Exception as e:
        logger.error(f"Error starting FlightsFX: {e}")
        return 1

    cli.run()
    return 0

if __name__ == '__main__':
    sys.exit(main())
