"""Data file location and record layout."""

import os
from pathlib import Path

# Persisted layout: a JSON array of entry objects, no version field
#   {"id": int, "date": "YYYY-MM-DD", "food": number,
#    "others": [{"id": int, "detail": str, "amount": number}, ...]}

DATA_FILE_ENV = "SPENDLOG_DATA_FILE"
EXPORT_FILENAME = "expense_tracker_backup.json"


def get_xdg_data_home() -> Path:
    """Get XDG data directory, with fallback to ~/.local/share."""
    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


def get_data_path(override: Path | None = None) -> Path:
    """Get the entries file path.

    Resolution order: SPENDLOG_DATA_FILE, the configured override, then the
    XDG data directory.

    Args:
        override: Path from the config file, if any.
    """
    env_path = os.environ.get(DATA_FILE_ENV)
    if env_path:
        return Path(env_path).expanduser()
    if override is not None:
        return override
    return get_xdg_data_home() / "spendlog" / "entries.json"


def data_file_exists(data_path: Path | None = None) -> bool:
    """Check if the entries file exists.

    Args:
        data_path: Path to check. If None, uses default location.

    Returns:
        True if the file exists, False otherwise.
    """
    if data_path is None:
        data_path = get_data_path()
    return data_path.exists()
