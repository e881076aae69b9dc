"""Pure functions for totals and category breakdowns.

This module contains the functional core for reporting operations:
- No I/O operations (no files, no console)
- No side effects
- Pure data transformations
- Easy to test

Every amount goes through ``coerce_amount``, so a bad value counts as 0
here and in ``Entry.total`` alike.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from spendlog.domain.models import Amount, Entry, Label, coerce_amount

FOOD_LABEL = Label("Food")
MISC_LABEL = Label("Misc")


@dataclass(frozen=True)
class Totals:
    """Immutable totals for a set of entries."""

    food_total: Amount
    other_total: Amount
    grand_total: Amount

    def __add__(self, other: "Totals") -> "Totals":
        return Totals(
            food_total=Amount(self.food_total + other.food_total),
            other_total=Amount(self.other_total + other.other_total),
            grand_total=Amount(self.grand_total + other.grand_total),
        )


@dataclass(frozen=True)
class BreakdownRow:
    """Immutable spending total for one line item label."""

    label: Label
    total: Amount


@dataclass(frozen=True)
class ChartSlice:
    """Immutable chart slice.

    ``kind`` is "food", "other" or "misc" (folded tail when capped).
    """

    label: Label
    value: Amount
    kind: str = "other"


def calculate_totals(entries: Iterable[Entry]) -> Totals:
    """Sum food and other spending across entries.

    Args:
        entries: Entries in any order.

    Returns:
        Totals; all zero for no entries.
    """
    food_total = 0.0
    other_total = 0.0

    for entry in entries:
        food_total += coerce_amount(entry.food)
        other_total += sum(coerce_amount(item.amount) for item in entry.others)

    return Totals(
        food_total=Amount(food_total),
        other_total=Amount(other_total),
        grand_total=Amount(food_total + other_total),
    )


def normalize_label(detail: str) -> str:
    """Grouping key for a label: trimmed and lowercased."""
    return detail.strip().lower()


def calculate_breakdown(entries: Iterable[Entry]) -> list[BreakdownRow]:
    """Group "other" line items by normalized label.

    The displayed label is the trimmed label of the first line item seen
    for each key. Rows are sorted by total descending; ties keep the order
    in which keys were first seen.

    Args:
        entries: Entries in iteration order.

    Returns:
        Breakdown rows, largest first.
    """
    labels: dict[str, Label] = {}
    totals: dict[str, float] = {}

    for entry in entries:
        for item in entry.others:
            key = normalize_label(item.detail)
            if key not in labels:
                labels[key] = Label(item.detail.strip())
                totals[key] = 0.0
            totals[key] += coerce_amount(item.amount)

    rows = [BreakdownRow(label=labels[key], total=Amount(total)) for key, total in totals.items()]
    return sorted(rows, key=lambda row: row.total, reverse=True)


def build_chart_series(
    food_total: Amount,
    breakdown: Sequence[BreakdownRow],
    max_slices: int | None = None,
) -> list[ChartSlice]:
    """Build chart slices from totals and a breakdown.

    Food comes first (when above zero), followed by the breakdown rows in
    their order. Zero-value slices are dropped. With ``max_slices`` set,
    the food slice counts toward the cap and the remaining other slices are
    folded into one trailing "Misc" slice.

    Args:
        food_total: Total food spending.
        breakdown: Breakdown rows sorted largest first.
        max_slices: Optional maximum number of slices (at least 2).

    Returns:
        Chart slices.

    Raises:
        ValueError: If max_slices is below 2.
    """
    if max_slices is not None and max_slices < 2:
        raise ValueError("max_slices must be at least 2")

    series: list[ChartSlice] = []
    if food_total > 0:
        series.append(ChartSlice(label=FOOD_LABEL, value=food_total, kind="food"))

    others = [ChartSlice(label=row.label, value=row.total) for row in breakdown if row.total > 0]

    if max_slices is None or len(series) + len(others) <= max_slices:
        return series + others

    # Keep one place for the folded tail
    room = max_slices - len(series) - 1
    kept, folded = others[:room], others[room:]
    misc_total = Amount(sum(s.value for s in folded))
    return series + kept + [ChartSlice(label=MISC_LABEL, value=misc_total, kind="misc")]


def calculate_share(value: Amount, total: Amount) -> float:
    """Percentage of total represented by value (0 when total is 0)."""
    if total <= 0:
        return 0.0
    return (value / total) * 100


def calculate_histogram_bar_length(
    amount: Amount,
    max_amount: Amount,
    bar_width: int,
) -> int:
    """Calculate histogram bar length.

    Args:
        amount: Amount to display.
        max_amount: Maximum amount in dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_amount <= 0:
        return 0
    return int((abs(amount) / max_amount) * bar_width)


def format_amount(amount: float, currency: str = "$") -> str:
    """Format an amount for display (e.g., "$1,234.50", "$40")."""
    if float(amount).is_integer():
        return f"{currency}{amount:,.0f}"
    return f"{currency}{amount:,.2f}"
