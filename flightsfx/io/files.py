"""
File persistence for FlightsFX.
Reads and writes the whole flight list as one encoded line per flight.
"""

import os
import stat
import logging
import tempfile
from pathlib import Path
from typing import Iterable, List, Optional, Union

from ..config.constants import DEFAULT_ENCODING, DEFAULT_FLIGHTS_FILENAME
from ..config.settings import settings
from ..data.codec import codec
from ..data.models import Flight
from ..errors import PersistenceError

logger = logging.getLogger("flightsfx.io.files")


def get_flights_file(path: Optional[Union[str, Path]] = None) -> Path:
    """
    Get the flights file path.
    Relative paths are resolved against the current working directory.

    Args:
        path: Explicit path (default: from settings)

    Returns:
        Path: Absolute path to the flights file
    """
    if path is None:
        path = settings.get('flights_file', DEFAULT_FLIGHTS_FILENAME)
    return Path.cwd() / Path(path)


def load_flights(path: Union[str, Path]) -> List[Flight]:
    """
    Load all flights from a file, in file order.
    Malformed lines and repeats of an earlier flight are skipped with a
    warning. A missing or unreadable file gives an empty list.

    Args:
        path: Path to the flights file

    Returns:
        List[Flight]: The flights read from the file
    """
    path = Path(path)
    if not path.exists():
        logger.warning(f"Flights file not found: {path}")
        return []

    flights: List[Flight] = []
    seen = set()
    skipped = 0
    duplicates = 0
    try:
        with open(path, 'r', encoding=DEFAULT_ENCODING) as f:
            for line_number, line in enumerate(f, start=1):
                if not line.strip():
                    logger.debug(f"Skipping blank line {line_number} in {path}")
                    continue
                flight = codec.decode(line)
                if flight is None:
                    skipped += 1
                    continue
                if flight in seen:
                    logger.warning(f"Skipping duplicate flight on line {line_number} of {path}: {flight}")
                    duplicates += 1
                    continue
                seen.add(flight)
                flights.append(flight)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error reading flights file {path}: {e}")
        return []

    if skipped:
        logger.warning(f"Skipped {skipped} malformed line(s) in {path}")
    if duplicates:
        logger.warning(f"Skipped {duplicates} duplicate flight(s) in {path}")
    logger.info(f"Loaded {len(flights)} flights from {path}")
    return flights


def _target_mode(path: Path) -> int:
    """Permission bits for a rewritten file: the existing file's, else the umask default."""
    if path.exists():
        return stat.S_IMODE(path.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def save_flights(path: Union[str, Path], flights: Iterable[Flight], atomic: bool = True) -> None:
    """
    Overwrite a file with one line per flight, in the given order.

    Args:
        path: Path to the flights file
        flights: Flights to write
        atomic: Write to a temporary file and rename it over the target

    Raises:
        PersistenceError: if the file cannot be written
    """
    path = Path(path)
    lines = [codec.encode(flight) + "\n" for flight in flights]

    try:
        if path.parent and not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)

        if not atomic:
            with open(path, 'w', encoding=DEFAULT_ENCODING) as f:
                f.writelines(lines)
        else:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
            try:
                with os.fdopen(fd, 'w', encoding=DEFAULT_ENCODING) as f:
                    f.writelines(lines)
                os.chmod(tmp_name, _target_mode(path))
                os.replace(tmp_name, path)
            except OSError:
                if os.path.exists(tmp_name):
                    os.remove(tmp_name)
                raise
    except OSError as e:
        logger.error(f"Error saving flights to {path}: {e}")
        raise PersistenceError(path, f"Error saving flights to {path}: {e}") from e

    logger.info(f"Saved {len(lines)} flights to {path}")
