"""Pure functions for entry collection changes and entry validation.

This module contains the functional core for editing the entry list:
- Upserts and removals return new lists instead of mutating
- Validation returns (value, error) tuples instead of raising
- Id assignment takes "now" as a parameter

All monetary amounts are plain floats (Amount type).
"""

import math
from collections.abc import Sequence
from typing import Any

from spendlog.domain.models import Amount, Entry, IsoDate, LineItem

MISSING_AMOUNTS_ERROR = "Please enter at least a food amount or one other expense."


def sort_entries(entries: Sequence[Entry]) -> list[Entry]:
    """Sort entries newest first; entries sharing a date keep their order."""
    return sorted(entries, key=lambda entry: entry.date, reverse=True)


def upsert_entry(entries: Sequence[Entry], entry: Entry) -> list[Entry]:
    """Insert a new entry or replace the one with the same id.

    A replacement keeps its position. A new entry is prepended and the
    collection re-sorted newest first.

    Args:
        entries: Current collection.
        entry: Entry to save.

    Returns:
        New collection.
    """
    for i, existing in enumerate(entries):
        if existing.id == entry.id:
            updated = list(entries)
            updated[i] = entry
            return updated

    return sort_entries([entry, *entries])


def remove_entry(entries: Sequence[Entry], entry_id: Any) -> list[Entry]:
    """Remove the entry with the given id; unknown ids leave it unchanged."""
    return [entry for entry in entries if entry.id != entry_id]


def find_entry(entries: Sequence[Entry], entry_id: Any) -> Entry | None:
    """Return the entry with the given id, or None."""
    return next((entry for entry in entries if entry.id == entry_id), None)


class EntryStore:
    """Owner of the canonical entry list.

    Each operation computes the complete new list before swapping it in,
    so callers never observe a half-sorted collection.
    """

    def __init__(self, entries: Sequence[Entry] = ()) -> None:
        self._entries: list[Entry] = list(entries)

    def list(self) -> list[Entry]:
        return list(self._entries)

    def get(self, entry_id: Any) -> Entry | None:
        return find_entry(self._entries, entry_id)

    def upsert(self, entry: Entry) -> None:
        self._entries = upsert_entry(self._entries, entry)

    def remove(self, entry_id: Any) -> bool:
        """Remove an entry.

        Returns:
            True if an entry was removed.
        """
        remaining = remove_entry(self._entries, entry_id)
        removed = len(remaining) != len(self._entries)
        self._entries = remaining
        return removed

    def __len__(self) -> int:
        return len(self._entries)


def next_entry_id(entries: Sequence[Entry], now_ms: int) -> int:
    """Id for a new entry: current epoch milliseconds, kept unique.

    Args:
        entries: Existing entries.
        now_ms: Current time in epoch milliseconds.

    Returns:
        now_ms, or one past the highest numeric id if that is not smaller.
    """
    numeric_ids = [entry.id for entry in entries if isinstance(entry.id, int) and not isinstance(entry.id, bool)]
    if numeric_ids and max(numeric_ids) >= now_ms:
        return max(numeric_ids) + 1
    return now_ms


def next_line_item_id(items: Sequence[LineItem]) -> int:
    """Id for a new line item, unique within its entry."""
    numeric_ids = [item.id for item in items if isinstance(item.id, int) and not isinstance(item.id, bool)]
    return max(numeric_ids, default=0) + 1


def parse_amount_input(raw: str) -> tuple[Amount | None, str | None]:
    """Parse an amount typed by the user.

    Args:
        raw: Text such as "150" or "12.50".

    Returns:
        Tuple of (amount, error).
    """
    try:
        amount = float(raw.strip())
    except ValueError:
        return None, f"Invalid amount '{raw}'"

    if not math.isfinite(amount):
        return None, f"Invalid amount '{raw}'"
    if amount < 0:
        return None, "Amount must be positive"
    return Amount(amount), None


def parse_food_input(raw: str | None) -> tuple[Amount, str | None]:
    """Parse the food amount field.

    Blank or unparseable input counts as 0; a negative number is an error.

    Returns:
        Tuple of (amount, error).
    """
    if raw is None or not raw.strip():
        return Amount(0.0), None

    try:
        amount = float(raw.strip())
    except ValueError:
        return Amount(0.0), None

    if not math.isfinite(amount):
        return Amount(0.0), None
    if amount < 0:
        return Amount(0.0), "Food amount must be positive"
    return Amount(amount), None


def parse_line_item_spec(spec: str) -> tuple[tuple[str, Amount] | None, str | None]:
    """Parse a "detail=amount" line item spec from the command line.

    The last "=" separates the amount so details may contain "=".

    Returns:
        Tuple of ((detail, amount), error).
    """
    detail, sep, raw_amount = spec.rpartition("=")
    detail = detail.strip()
    if not sep or not detail or not raw_amount.strip():
        return None, f"Line item '{spec}' needs a detail and an amount (detail=amount)"

    amount, error = parse_amount_input(raw_amount)
    if amount is None:
        return None, error
    return (detail, amount), None


def add_line_item(items: Sequence[LineItem], detail: str, amount: Amount) -> tuple[LineItem, ...]:
    """Append a line item with a fresh id."""
    return (*items, LineItem(id=next_line_item_id(items), detail=detail, amount=amount))


def remove_line_item(items: Sequence[LineItem], item_id: Any) -> tuple[LineItem, ...]:
    """Drop the line item with the given id; unknown ids are ignored."""
    return tuple(item for item in items if item.id != item_id)


def build_entry(
    entry_id: Any,
    date: IsoDate,
    food: Amount,
    others: Sequence[LineItem],
) -> tuple[Entry | None, str | None]:
    """Assemble an entry for saving, applying form validation.

    Args:
        entry_id: Id to use (existing id when editing).
        date: Entry date.
        food: Food amount (0 when not entered).
        others: Line items for the entry.

    Returns:
        Tuple of (entry, error). entry is None when validation fails.
    """
    if not date:
        return None, "Date is required"

    if not food and not others:
        return None, MISSING_AMOUNTS_ERROR

    return Entry(id=entry_id, date=date, food=food, others=tuple(others)), None


def match_entry_id(entries: Sequence[Entry], raw_id: str) -> Any | None:
    """Resolve an id typed by the user to the stored id.

    Ids are compared in their text form so numeric and imported string ids
    both match.

    Returns:
        The stored id, or None if no entry matches.
    """
    cleaned = raw_id.strip()
    entry = next((entry for entry in entries if str(entry.id) == cleaned), None)
    return entry.id if entry else None
