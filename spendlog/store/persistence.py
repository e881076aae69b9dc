"""JSON file persistence, export and import for entries.

The whole collection is written on every change (write-through); there is
no incremental persistence.
"""

import json
import logging
import os
import tempfile
from collections.abc import Mapping, Sequence
from datetime import date, timedelta
from pathlib import Path
from typing import Any

from spendlog.dates import to_iso
from spendlog.domain.models import Entry, LineItem

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when the entries file exists but cannot be used."""


class PayloadError(Exception):
    """Raised when an import payload is rejected."""


class ImportReadError(PayloadError):
    """Payload is not valid JSON."""


class ImportFormatError(PayloadError):
    """Payload is JSON but its top level is not an array."""


def seed_entries(today: date, now_ms: int) -> list[Entry]:
    """Example entries shown on first run (today and yesterday).

    Args:
        today: Current date.
        now_ms: Current time in epoch milliseconds, used for ids.
    """
    yesterday = today - timedelta(days=1)
    return [
        Entry(
            id=now_ms,
            date=to_iso(today),
            food=250,
            others=(
                LineItem(id=1, detail="Uber to work", amount=150),
                LineItem(id=2, detail="Notebook", amount=40),
            ),
        ),
        Entry(id=now_ms - 1000, date=to_iso(yesterday), food=300, others=()),
    ]


def records_to_entries(records: Sequence[Any]) -> list[Entry]:
    """Convert persisted records to entries, skipping non-object elements."""
    entries = []
    for position, record in enumerate(records):
        if not isinstance(record, Mapping):
            logger.warning("Skipping element %d of entries file: not an object", position)
            continue
        entries.append(Entry.from_dict(record))
    return entries


def read_records(data_path: Path) -> list[Any] | None:
    """Read the raw JSON array from the entries file.

    Args:
        data_path: Path to the entries file.

    Returns:
        The parsed array, or None if the file does not exist.

    Raises:
        StoreError: If the file is not JSON or not an array.
    """
    if not data_path.exists():
        return None

    try:
        with open(data_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise StoreError(f"Entries file {data_path} is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise StoreError(f"Entries file {data_path} does not contain a list of entries")

    logger.debug("Read %d records from %s", len(data), data_path)
    return data


def write_records(records: Sequence[Any], data_path: Path) -> None:
    """Atomically write a JSON array to the entries file.

    Writes to a temporary file in the same directory, then renames it over
    the target.

    Raises:
        OSError: If the file cannot be written.
    """
    data_path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(prefix=".entries_", suffix=".json", dir=data_path.parent, text=True)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(list(records), f, indent=2, ensure_ascii=False)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, data_path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise

    logger.debug("Wrote %d records to %s", len(records), data_path)


def save_entries(entries: Sequence[Entry], data_path: Path) -> None:
    """Persist the full entry collection."""
    write_records([entry.to_dict() for entry in entries], data_path)


def load_entries(data_path: Path, today: date, now_ms: int) -> tuple[list[Entry], bool]:
    """Load entries, seeding example data on first run.

    Args:
        data_path: Path to the entries file.
        today: Current date, for seed entries.
        now_ms: Current epoch milliseconds, for seed ids.

    Returns:
        Tuple of (entries, seeded). seeded is True when the file was missing
        and example entries were written.

    Raises:
        StoreError: If the file exists but cannot be used.
        OSError: If seed entries cannot be written.
    """
    records = read_records(data_path)
    if records is None:
        entries = seed_entries(today, now_ms)
        save_entries(entries, data_path)
        logger.info("No entries file at %s, created one with example entries", data_path)
        return entries, True

    return records_to_entries(records), False


def export_payload(entries: Sequence[Entry]) -> str:
    """Pretty-printed JSON for the full entry collection."""
    return json.dumps([entry.to_dict() for entry in entries], indent=2, ensure_ascii=False)


def parse_import_payload(text: str) -> list[Any]:
    """Parse an import payload.

    Entries inside the array are not validated; bad amounts count as 0
    later on.

    Args:
        text: File contents to import.

    Returns:
        The parsed array, unchanged.

    Raises:
        ImportReadError: If the text is not JSON.
        ImportFormatError: If the top-level value is not an array.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ImportReadError("Error reading file. Please ensure it is a valid backup file.") from e

    if not isinstance(data, list):
        raise ImportFormatError("Invalid file format. Please upload a valid backup file.")
    return data


def replace_records(records: Sequence[Any], data_path: Path) -> None:
    """Replace the stored collection with imported records verbatim."""
    write_records(records, data_path)
    logger.info("Replaced entries in %s with %d imported records", data_path, len(records))
