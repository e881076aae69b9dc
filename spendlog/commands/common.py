"""Helpers shared by the command modules (the imperative shell)."""

import sys
import time
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from spendlog.config import ConfigError, Settings, get_settings
from spendlog.dates import normalize_date_input, today
from spendlog.domain.filters import CUSTOM_MODE, FilterConfig, parse_window_mode
from spendlog.domain.models import Entry, IsoDate
from spendlog.store import StoreError, get_data_path, load_entries

console = Console()


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


def load_settings() -> Settings:
    """Load settings or exit with an error message."""
    try:
        return get_settings()
    except ConfigError as e:
        console.print(f"[red]Config error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def resolve_data_path(settings: Settings) -> Path:
    return get_data_path(settings.data_file)


def load_all_entries(data_path: Path) -> list[Entry]:
    """Load the full entry collection or exit with an error message."""
    try:
        entries, seeded = load_entries(data_path, today(), now_ms())
    except StoreError as e:
        console.print(f"[red]Store error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    if seeded:
        console.print("[dim]First run: added two example entries[/dim]")
    return entries


def normalize_optional_date(raw: str | None, option_name: str) -> IsoDate | None:
    """Normalize a date option, exiting on invalid input."""
    if not raw:
        return None
    try:
        return normalize_date_input(raw)
    except ValueError as e:
        console.print(f"[red]Invalid {option_name}: {escape(str(e))}[/red]")
        console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
        sys.exit(1)


def build_filter(
    window: str | None,
    start: str | None,
    end: str | None,
    settings: Settings,
) -> FilterConfig:
    """Build a filter from command options.

    Giving --start or --end without --window selects the custom range.
    """
    if window is None:
        window = CUSTOM_MODE if (start or end) else settings.default_window

    _, error = parse_window_mode(window)
    if error:
        console.print(f"[red]{escape(error)}[/red]")
        sys.exit(1)

    return FilterConfig(
        mode=window.strip().lower(),
        start_date=normalize_optional_date(start, "--start"),
        end_date=normalize_optional_date(end, "--end"),
    )
