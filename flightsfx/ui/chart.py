"""
Destination pie chart for FlightsFX.
Renders the per-destination flight counts with matplotlib.
"""

import logging
from pathlib import Path
from typing import Dict, List, Union

from matplotlib.figure import Figure

from ..config.constants import CHART_TITLE, CHART_FIGSIZE, CHART_DPI
from ..errors import PersistenceError, ValidationError

logger = logging.getLogger("flightsfx.ui.chart")


def summary_lines(summary: Dict[str, int]) -> List[str]:
    """
    Describe each destination with its count and share of all flights.

    Args:
        summary: Flight count per destination

    Returns:
        List[str]: One line per destination, in the summary order
    """
    total = sum(summary.values())
    if not total:
        return []
    width = max(len(name) for name in summary)
    return [
        f"{name:<{width}}  {count:>3}  {count * 100 / total:5.1f}%"
        for name, count in summary.items()
    ]


def build_destination_figure(summary: Dict[str, int]) -> Figure:
    """
    Build a pie chart figure of flights per destination.

    Raises:
        ValidationError: if there are no flights to chart
    """
    if not summary or not sum(summary.values()):
        raise ValidationError("No flights loaded to show the chart")

    figure = Figure(figsize=CHART_FIGSIZE, dpi=CHART_DPI)
    ax = figure.add_subplot(111)
    ax.pie(list(summary.values()), labels=list(summary.keys()),
           autopct='%1.1f%%', startangle=90)
    ax.set_title(CHART_TITLE)
    ax.axis('equal')
    return figure


def save_destination_chart(summary: Dict[str, int], path: Union[str, Path]) -> Path:
    """
    Render the destination pie chart to an image file.

    Args:
        summary: Flight count per destination
        path: Output image path (format taken from the extension)

    Returns:
        Path: The written file

    Raises:
        ValidationError: if there are no flights to chart
        PersistenceError: if the image cannot be written
    """
    path = Path(path)
    figure = build_destination_figure(summary)
    try:
        figure.savefig(path)
    except OSError as e:
        logger.error(f"Error saving chart to {path}: {e}")
        raise PersistenceError(path, f"Error saving chart to {path}: {e}") from e
    logger.info(f"Chart saved to {path}")
    return path
