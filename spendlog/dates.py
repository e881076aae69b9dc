"""Date utilities for spendlog.

Pure functions for parsing, formatting and date range calculations. The
only impure helper is ``today``.
"""

from datetime import date, datetime, timedelta

import pandas as pd

from spendlog.domain.models import IsoDate

ISO_FORMAT = "%Y-%m-%d"


def today() -> date:
    """Current local date (time truncated to midnight)."""
    return date.today()


def to_iso(day: date) -> IsoDate:
    """Format a date as zero-padded YYYY-MM-DD."""
    return IsoDate(f"{day.year:04d}-{day.month:02d}-{day.day:02d}")


def parse_iso_date(value: str) -> date | None:
    """Parse a stored YYYY-MM-DD date string.

    Args:
        value: Date string from an entry.

    Returns:
        Parsed date, or None if the string is not a valid ISO date.
    """
    try:
        return datetime.strptime(value, ISO_FORMAT).date()
    except (TypeError, ValueError):
        return None


def normalize_date_input(raw_date: str) -> IsoDate:
    """Normalize a user-typed date to ISO format (YYYY-MM-DD).

    Uses pandas.to_datetime so ISO, European and other common formats are
    all accepted. Day-first wins for ambiguous input.

    Args:
        raw_date: Date as typed on the command line.

    Returns:
        Normalized date in YYYY-MM-DD format.

    Raises:
        ValueError: If date cannot be parsed.
    """
    iso_date = parse_iso_date(raw_date.strip())
    if iso_date is not None:
        return to_iso(iso_date)

    try:
        parsed_date = pd.to_datetime(raw_date, dayfirst=True)
    except (ValueError, pd.errors.ParserError) as e:
        raise ValueError(f"Could not parse date '{raw_date}': {e}") from e
    if pd.isna(parsed_date):
        raise ValueError(f"Could not parse date '{raw_date}'")
    return to_iso(parsed_date.date())


def month_range(month: str) -> tuple[str, str, str]:
    """Calculate date range and label for a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (since_date, until_date, label) where:
        - since_date: First day of month (YYYY-MM-DD)
        - until_date: First day of next month (YYYY-MM-DD)
        - label: Human-readable month (e.g., "January 2025")
    """
    dt = datetime.strptime(month, "%Y-%m")
    since = to_iso(dt.date())
    next_month = (dt.replace(day=28) + timedelta(days=4)).replace(day=1)
    until = to_iso(next_month.date())
    label = dt.strftime("%B %Y")
    return since, until, label


def format_entry_date(value: str) -> str:
    """Format an entry date for display (e.g., "Sat, Jun 1").

    Unparseable dates are shown as stored.
    """
    parsed = parse_iso_date(value)
    if parsed is None:
        return value
    return f"{parsed.strftime('%a, %b')} {parsed.day}"
