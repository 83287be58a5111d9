"""
Time-of-day filtering for trip records.

The selector is a minutes-since-midnight value (0-1439) or NO_TIME_FILTER
(-1) to disable filtering. A trip is kept when its start or its end falls
within the window around the selector.

Known non-circular behavior: minutes are compared by plain difference, so
the window does not wrap around midnight (23:50 is 1430 minutes away from a
selector of 0, not 10).
"""

from datetime import datetime, time
from typing import List, Sequence
import logging

from .models import Trip

logger = logging.getLogger(__name__)

NO_TIME_FILTER = -1
MINUTES_PER_DAY = 24 * 60
DEFAULT_WINDOW_MINUTES = 60


def minutes_since_midnight(timestamp: datetime) -> int:
    """Wall-clock minutes since midnight, ignoring seconds."""
    return timestamp.hour * 60 + timestamp.minute


def validate_selector(selector: int) -> int:
    """
    Check a time-of-day selector value.

    Raises:
        ValueError: If the selector is outside [-1, 1439]
    """
    if not NO_TIME_FILTER <= selector < MINUTES_PER_DAY:
        raise ValueError(
            f"Time selector must be between {NO_TIME_FILTER} and {MINUTES_PER_DAY - 1}, got {selector}"
        )
    return selector


def is_within_window(trip: Trip, selector: int, window_minutes: int = DEFAULT_WINDOW_MINUTES) -> bool:
    """True if the trip's start or end minute is within the inclusive window."""
    started = minutes_since_midnight(trip.started_at)
    ended = minutes_since_midnight(trip.ended_at)
    return abs(started - selector) <= window_minutes or abs(ended - selector) <= window_minutes


def filter_trips_by_time(trips: Sequence[Trip], selector: int,
                         window_minutes: int = DEFAULT_WINDOW_MINUTES) -> List[Trip]:
    """
    Select trips active around a time of day.

    Args:
        trips: Trip records, left untouched
        selector: Minutes since midnight, or NO_TIME_FILTER
        window_minutes: Half-width of the window

    Returns:
        New list of matching trips in input order. With NO_TIME_FILTER this
        holds every input trip, duplicates included.
    """
    validate_selector(selector)

    if selector == NO_TIME_FILTER:
        return list(trips)

    filtered = [trip for trip in trips if is_within_window(trip, selector, window_minutes)]
    logger.debug(f"Time filter {selector} +/- {window_minutes} min kept {len(filtered)} of {len(trips)} trips")
    return filtered


def format_time(minutes: int) -> str:
    """
    Format minutes since midnight as a short time of day, e.g. "2:30 PM".

    Raises:
        ValueError: If minutes is outside 0-1439
    """
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"Minutes must be between 0 and {MINUTES_PER_DAY - 1}, got {minutes}")

    hours, mins = divmod(minutes, 60)
    return time(hours, mins).strftime("%I:%M %p").lstrip("0")


def format_selector(selector: int) -> str:
    """Label for the time slider."""
    validate_selector(selector)
    if selector == NO_TIME_FILTER:
        return "(any time)"
    return format_time(selector)
