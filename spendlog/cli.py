"""CLI entry point for spendlog."""

import logging

import typer
from rich.logging import RichHandler

from spendlog.commands.admin import backup_command, config_command, export_command, import_command, init_command
from spendlog.commands.entries import add_command, delete_command, edit_command, list_command
from spendlog.commands.report import breakdown_command, calendar_command, summary_command

app = typer.Typer(
    name="spendlog",
    help="Daily expense log - food and other spending, totals, breakdowns and a calendar",
    add_completion=False,
)

WINDOW_HELP = "Window: number of days (7, 30, ...) or 'custom' (default from config)"


def configure_logging(verbose: bool) -> None:
    """Send diagnostic logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show diagnostic logging"),
) -> None:
    """Daily expense log - food and other spending, totals, breakdowns and a calendar."""
    configure_logging(verbose)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing entries and config"),
) -> None:
    """Initialize spendlog config and entries file."""
    init_command(force)


@app.command(name="backup")
def backup(
    output_dir: str = typer.Option(None, "--output", "-o", help="Backup directory (default: ~/.spendlog/backups)"),
) -> None:
    """Backup your entries and configuration files."""
    backup_command(output_dir)


@app.command(name="config")
def config(
    key: str = typer.Argument(..., help="default_window, chart_max_slices, currency or data_file"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Set a configuration value."""
    config_command(key, value)


@app.command()
def add(
    date: str = typer.Option(None, "--date", "-d", help="Entry date (default: today)"),
    food: str = typer.Option(None, "--food", "-f", help="Food amount"),
    item: list[str] = typer.Option(None, "--item", "-i", help="Other expense as 'detail=amount' (repeatable)"),
) -> None:
    """Add a day's expenses."""
    add_command(date, food, item)


@app.command()
def edit(
    entry_id: str = typer.Argument(..., help="Entry ID (from 'spendlog list')"),
    date: str = typer.Option(None, "--date", "-d", help="New date"),
    food: str = typer.Option(None, "--food", "-f", help="New food amount"),
    item: list[str] = typer.Option(None, "--item", "-i", help="Add other expense as 'detail=amount' (repeatable)"),
    remove_item: list[str] = typer.Option(None, "--remove-item", "-r", help="Line item ID to remove (repeatable)"),
    clear_items: bool = typer.Option(False, "--clear-items", help="Remove all existing other expenses first"),
) -> None:
    """Edit an entry."""
    edit_command(entry_id, date, food, item, remove_item, clear_items)


@app.command()
def delete(
    entry_id: str = typer.Argument(..., help="Entry ID (from 'spendlog list')"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete an entry."""
    delete_command(entry_id, yes)


@app.command(name="list")
def list_entries(
    window: str = typer.Option(None, "--window", "-w", help=WINDOW_HELP),
    start: str = typer.Option(None, "--start", help="Range start (custom window)"),
    end: str = typer.Option(None, "--end", help="Range end (custom window)"),
) -> None:
    """List your entries, newest first."""
    list_command(window, start, end)


@app.command()
def summary(
    window: str = typer.Option(None, "--window", "-w", help=WINDOW_HELP),
    start: str = typer.Option(None, "--start", help="Range start (custom window)"),
    end: str = typer.Option(None, "--end", help="Range end (custom window)"),
) -> None:
    """Show food, other and total spending."""
    summary_command(window, start, end)


@app.command()
def breakdown(
    window: str = typer.Option(None, "--window", "-w", help=WINDOW_HELP),
    start: str = typer.Option(None, "--start", help="Range start (custom window)"),
    end: str = typer.Option(None, "--end", help="Range end (custom window)"),
    chart: bool = typer.Option(False, "--chart", "-c", help="Show spending chart"),
    max_slices: int = typer.Option(None, "--max-slices", help="Fold smaller chart slices into 'Misc'"),
) -> None:
    """Show your other expenses grouped by detail."""
    breakdown_command(window, start, end, chart, max_slices)


@app.command()
def calendar(
    month: str = typer.Option(None, "--month", "-m", help="Month to show (YYYY-MM, default: current)"),
) -> None:
    """Show a calendar of your spending days."""
    calendar_command(month)


@app.command(name="export")
def export(
    output: str = typer.Option(None, "--output", "-o", help="Output file (default: expense_tracker_backup.json)"),
    stdout: bool = typer.Option(False, "--stdout", help="Print JSON instead of writing a file"),
) -> None:
    """Export all entries as JSON."""
    export_command(output, stdout)


@app.command(name="import")
def import_entries(
    path: str = typer.Argument(..., help="Backup JSON file ('-' for stdin)"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Replace all entries with a backup file."""
    import_command(path, yes)


if __name__ == "__main__":
    app()
