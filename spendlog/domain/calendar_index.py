"""Pure functions for the calendar view.

The calendar always covers the full entry history, never a filtered
window. Dates are handled as the stored YYYY-MM-DD strings so no timezone
conversion can shift a marker onto a neighbouring day.
"""

import calendar
from collections.abc import Iterable
from dataclasses import dataclass

from spendlog.domain.models import Amount, Entry, IsoDate


@dataclass(frozen=True)
class CalendarDay:
    """Immutable cell of a month grid."""

    date: IsoDate
    day: int
    has_entry: bool
    total: Amount
    heat: int


def index_dates(entries: Iterable[Entry]) -> frozenset[IsoDate]:
    """Set of distinct dates on which at least one entry exists.

    Args:
        entries: The complete, unfiltered entry collection.

    Returns:
        Frozen set of YYYY-MM-DD dates for O(1) membership checks.
    """
    return frozenset(entry.date for entry in entries if entry.date)


def daily_totals(entries: Iterable[Entry]) -> dict[IsoDate, Amount]:
    """Total spending per date across all entries."""
    totals: dict[IsoDate, Amount] = {}
    for entry in entries:
        if not entry.date:
            continue
        totals[entry.date] = Amount(totals.get(entry.date, 0.0) + entry.total)
    return totals


def calculate_heat_level(total: Amount, max_total: Amount, levels: int = 4) -> int:
    """Bucket a daily total into 0..levels for shading.

    Days with spending always get at least level 1.
    """
    if total <= 0 or max_total <= 0:
        return 0
    return max(1, min(levels, round((total / max_total) * levels)))


def build_month_grid(
    year: int,
    month: int,
    index: frozenset[IsoDate],
    totals: dict[IsoDate, Amount] | None = None,
) -> list[list[CalendarDay | None]]:
    """Lay out a month as Monday-first weeks.

    Args:
        year: Calendar year.
        month: Month number (1-12).
        index: Dates with entries, from ``index_dates``.
        totals: Optional per-date totals, from ``daily_totals``.

    Returns:
        List of weeks; each week has seven cells, None outside the month.
    """
    totals = totals or {}
    month_prefix = f"{year:04d}-{month:02d}-"
    max_total = Amount(max((v for k, v in totals.items() if k.startswith(month_prefix)), default=0.0))

    weeks: list[list[CalendarDay | None]] = []
    for week in calendar.Calendar(firstweekday=calendar.MONDAY).monthdayscalendar(year, month):
        cells: list[CalendarDay | None] = []
        for day in week:
            if day == 0:
                cells.append(None)
                continue
            iso = IsoDate(f"{month_prefix}{day:02d}")
            total = totals.get(iso, Amount(0.0))
            cells.append(
                CalendarDay(
                    date=iso,
                    day=day,
                    has_entry=iso in index,
                    total=total,
                    heat=calculate_heat_level(total, max_total),
                )
            )
        weeks.append(cells)
    return weeks
