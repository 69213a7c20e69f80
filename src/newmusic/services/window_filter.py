"""
Trailing release window selection.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, List, Union

from ..core.config import WINDOW_CONFIG
from ..models.releases import Release
from ..models.report import DateWindow

logger = logging.getLogger(__name__)


def to_day(value: Union[date, datetime]) -> date:
    """Strip the time of day, leaving a calendar date."""
    if isinstance(value, datetime):
        return value.date()
    return value


def window_for(today: Union[date, datetime], days: int = WINDOW_CONFIG["DAYS"]) -> DateWindow:
    """
    Compute the inclusive window of ``days`` calendar days ending ``today``.

    With the default of 7 days the window is ``[today - 6 days, today]``.
    """
    end = to_day(today)
    return DateWindow(start=end - timedelta(days=days - 1), end=end)


def select(releases: Iterable[Release], today: Union[date, datetime]) -> List[Release]:
    """
    Keep the releases dated inside the window ending ``today``.

    Stable: output order is input order. Both window ends are inclusive.
    """
    window = window_for(today)
    selected = [release for release in releases if window.contains(release.release_date)]
    logger.info(
        f"Selected {len(selected)} release(s) between "
        f"{window.start.isoformat()} and {window.end.isoformat()}"
    )
    return selected
