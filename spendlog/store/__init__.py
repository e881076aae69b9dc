"""Persistence layer - stores entries in a local JSON file.

This module re-exports all public store functions for easy importing.
"""

from spendlog.store.persistence import (
    ImportFormatError,
    ImportReadError,
    PayloadError,
    StoreError,
    export_payload,
    load_entries,
    parse_import_payload,
    read_records,
    records_to_entries,
    replace_records,
    save_entries,
    seed_entries,
    write_records,
)
from spendlog.store.schema import EXPORT_FILENAME, data_file_exists, get_data_path

__all__ = [
    # Schema
    "EXPORT_FILENAME",
    "data_file_exists",
    "get_data_path",
    # Persistence
    "ImportFormatError",
    "ImportReadError",
    "PayloadError",
    "StoreError",
    "export_payload",
    "load_entries",
    "parse_import_payload",
    "read_records",
    "records_to_entries",
    "replace_records",
    "save_entries",
    "seed_entries",
    "write_records",
]
