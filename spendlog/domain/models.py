"""Domain type definitions for spendlog.

These NewTypes provide semantic clarity and help with type checking:
- Amount: Non-negative spending amount in display currency units
- IsoDate: Calendar date in YYYY-MM-DD format
- Label: Free-text line item label as typed by the user
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, NewType

# Amounts are plain floats; entries carry whatever the user or an import supplied
Amount = NewType("Amount", float)

# IsoDate is always zero-padded YYYY-MM-DD (e.g., "2025-01-07"), so string order is date order
IsoDate = NewType("IsoDate", str)

# Label of an "other" line item (e.g., "Uber to work")
Label = NewType("Label", str)


def coerce_amount(value: Any) -> Amount:
    """Coerce a stored amount to a non-negative number.

    Absent, non-numeric, non-finite and negative values all become 0, so
    totals never fail on bad input.

    Args:
        value: Raw value from an entry (number, numeric string, None, ...).

    Returns:
        Non-negative amount.
    """
    if value is None or isinstance(value, bool):
        return Amount(0.0)

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return Amount(0.0)
    else:
        return Amount(0.0)

    if not math.isfinite(number) or number < 0:
        return Amount(0.0)
    return Amount(number)


@dataclass(frozen=True)
class LineItem:
    """Immutable "other" expense within an entry."""

    id: Any
    detail: str
    amount: Any = 0

    @staticmethod
    def from_dict(d: Mapping[str, Any]) -> "LineItem":
        """Build a line item, tolerating missing keys."""
        detail = d.get("detail")
        return LineItem(
            id=d.get("id", 0),
            detail="" if detail is None else str(detail),
            amount=d.get("amount", 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "detail": self.detail, "amount": self.amount}


@dataclass(frozen=True)
class Entry:
    """Immutable record of one day's spending.

    ``food`` and line item amounts keep the raw values they were stored
    with; use ``coerce_amount`` when doing arithmetic on them.
    """

    id: Any
    date: IsoDate
    food: Any = 0
    others: tuple[LineItem, ...] = field(default_factory=tuple)

    @property
    def total(self) -> Amount:
        """Food plus every line item amount."""
        return Amount(coerce_amount(self.food) + sum(coerce_amount(item.amount) for item in self.others))

    @staticmethod
    def from_dict(d: Mapping[str, Any]) -> "Entry":
        """Build an entry from a persisted record.

        Uses defaults for missing keys so hand-edited or imported files are
        tolerated. Line items that are not objects are dropped.
        """
        raw_others = d.get("others") or []
        if not isinstance(raw_others, list):
            raw_others = []

        return Entry(
            id=d.get("id", 0),
            date=IsoDate(str(d.get("date") or "")),
            food=d.get("food", 0),
            others=tuple(LineItem.from_dict(o) for o in raw_others if isinstance(o, Mapping)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "food": self.food,
            "others": [item.to_dict() for item in self.others],
        }
