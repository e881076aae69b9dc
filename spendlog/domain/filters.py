"""Pure functions for date-window filtering of entries.

This module contains the functional core for choosing which entries a view
covers:
- Rolling windows ("last N days") measured from an injected "today"
- Explicit [start, end] ranges compared on YYYY-MM-DD strings
- No I/O operations and no hidden state
"""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from spendlog.dates import parse_iso_date
from spendlog.domain.models import Entry, IsoDate

CUSTOM_MODE = "custom"

# Bounds used when only one side of an explicit range is given
MIN_DATE = IsoDate("0000-01-01")
MAX_DATE = IsoDate("9999-12-31")


@dataclass(frozen=True)
class FilterConfig:
    """Filter control as chosen by the user.

    ``mode`` is a positive day count as a string (e.g. "7", "30") or
    "custom" for an explicit range.
    """

    mode: str = "7"
    start_date: IsoDate | None = None
    end_date: IsoDate | None = None


def parse_window_mode(mode: str) -> tuple[int | None, str | None]:
    """Interpret a filter mode string.

    Args:
        mode: "custom" or a positive integer string.

    Returns:
        Tuple of (window_days, error). window_days is None for "custom".
    """
    cleaned = mode.strip().lower()
    if cleaned == CUSTOM_MODE:
        return None, None

    try:
        days = int(cleaned)
    except ValueError:
        return None, f"Unknown filter mode '{mode}' (use a number of days or 'custom')"

    if days < 1:
        return None, "Window must be at least 1 day"
    return days, None


def days_between(today: date, entry_date: IsoDate) -> int | None:
    """Absolute number of days between today and an entry's date.

    Returns:
        Day difference, or None if the entry date cannot be parsed.
    """
    parsed = parse_iso_date(entry_date)
    if parsed is None:
        return None
    return abs((today - parsed).days)


def filter_rolling(entries: Sequence[Entry], days: int, today: date) -> list[Entry]:
    """Keep entries within ``days`` days of today, in either direction.

    Future-dated entries are included symmetrically. Entries with an
    unparseable date are never inside a rolling window.

    Args:
        entries: Entries in store order.
        days: Window size in days (inclusive).
        today: Reference date.

    Returns:
        Matching entries, order preserved.
    """
    result = []
    for entry in entries:
        diff = days_between(today, entry.date)
        if diff is not None and diff <= days:
            result.append(entry)
    return result


def filter_range(
    entries: Sequence[Entry],
    start: IsoDate | None = None,
    end: IsoDate | None = None,
) -> list[Entry]:
    """Keep entries whose date falls within [start, end] inclusive.

    Comparison is on the date strings, which matches chronological order
    because stored dates are zero-padded YYYY-MM-DD. With neither bound
    set, every entry is kept.

    Args:
        entries: Entries in store order.
        start: Optional inclusive lower bound.
        end: Optional inclusive upper bound.

    Returns:
        Matching entries, order preserved.
    """
    if not start and not end:
        return list(entries)

    lower = start or MIN_DATE
    upper = end or MAX_DATE
    return [entry for entry in entries if lower <= entry.date <= upper]


def apply_filter(entries: Sequence[Entry], config: FilterConfig, today: date) -> list[Entry]:
    """Select the entries covered by a filter configuration.

    Args:
        entries: Full entry collection in store order.
        config: Filter mode and optional explicit bounds.
        today: Reference date for rolling windows.

    Returns:
        Filtered entries, order preserved.

    Raises:
        ValueError: If the mode is neither "custom" nor a positive day count.
    """
    days, error = parse_window_mode(config.mode)
    if error:
        raise ValueError(error)

    if days is None:
        return filter_range(entries, config.start_date, config.end_date)
    return filter_rolling(entries, days, today)


def describe_filter(config: FilterConfig) -> str:
    """Human-readable label for a filter (e.g., "Last 7 Days")."""
    days, error = parse_window_mode(config.mode)
    if error:
        return config.mode

    if days is not None:
        return f"Last {days} Days"

    if not config.start_date and not config.end_date:
        return "All Time"
    return f"{config.start_date or 'Beginning'} to {config.end_date or 'Latest'}"
