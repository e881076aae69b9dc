"""Admin commands for init, backup, config, export and import."""

import shutil
import sys
from datetime import datetime
from pathlib import Path

import typer
from rich.markup import escape

from spendlog.commands.common import console, load_all_entries, load_settings, now_ms, resolve_data_path
from spendlog.config import ConfigError, create_default_config, get_config_path, set_value
from spendlog.dates import today
from spendlog.store import (
    EXPORT_FILENAME,
    PayloadError,
    data_file_exists,
    export_payload,
    parse_import_payload,
    replace_records,
    save_entries,
    seed_entries,
)

CONFIG_KEYS = ("default_window", "chart_max_slices", "currency", "data_file")


def backup_command(
    output_dir: str | None = None,
) -> None:
    """Backup the entries file and configuration."""
    settings = load_settings()
    data_path = resolve_data_path(settings)
    config_path = get_config_path()

    if not data_file_exists(data_path):
        console.print("[red]Entries file not found. Run 'spendlog init' first.[/red]", style="bold")
        sys.exit(1)

    # Determine backup directory
    if output_dir:
        backup_dir = Path(output_dir).expanduser()
    else:
        backup_dir = Path.home() / ".spendlog" / "backups"

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    try:
        backup_dir.mkdir(parents=True, exist_ok=True)

        data_backup = backup_dir / f"entries_{timestamp}.json"
        shutil.copy2(data_path, data_backup)
        console.print(f"[green]✓[/green] Entries backed up to: {escape(str(data_backup))}")

        if config_path.exists():
            config_backup = backup_dir / f"config_{timestamp}.toml"
            shutil.copy2(config_path, config_backup)
            console.print(f"[green]✓[/green] Config backed up to: {escape(str(config_backup))}")

        console.print("\n[green]Backup complete![/green]", style="bold")
        console.print(f"[dim]Backup directory: {escape(str(backup_dir))}[/dim]")

    except OSError as e:
        console.print(f"[red]Backup failed: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def init_command(force: bool = False) -> None:
    """Create the config file and an entries file with example entries."""
    config_path = get_config_path()
    settings = load_settings()
    data_path = resolve_data_path(settings)

    if not force and (data_file_exists(data_path) or config_path.exists()):
        console.print("[red]Initialization failed:[/red]", style="bold")
        if data_file_exists(data_path):
            console.print(f"  Entries file already exists: {escape(str(data_path))}")
        if config_path.exists():
            console.print(f"  Config already exists: {escape(str(config_path))}")
        console.print("\n[yellow]Use 'spendlog init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        console.print(f"[cyan]Creating config file at {escape(str(config_path))}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")

        console.print(f"[cyan]Creating entries file at {escape(str(data_path))}...[/cyan]")
        save_entries(seed_entries(today(), now_ms()), data_path)
        console.print("[green]✓[/green] Entries file created with two example entries")

    except OSError as e:
        console.print(f"[red]Filesystem error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Entries: {escape(str(data_path))}[/dim]")
    console.print(f"[dim]Config: {escape(str(config_path))}[/dim]")


def config_command(key: str, value: str) -> None:
    """Set a configuration value."""
    if key not in CONFIG_KEYS:
        console.print(f"[red]Unknown config key '{escape(key)}'[/red]")
        console.print(f"[dim]Available keys: {', '.join(CONFIG_KEYS)}[/dim]")
        sys.exit(1)

    parsed: str | int = value
    if key == "chart_max_slices":
        try:
            parsed = int(value)
        except ValueError:
            console.print("[red]chart_max_slices must be an integer[/red]")
            sys.exit(1)

    try:
        set_value(key, parsed)
    except ConfigError as e:
        console.print(f"[red]Config error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] {escape(key)} = {escape(str(parsed))}")


def export_command(output: str | None = None, stdout: bool = False) -> None:
    """Export all entries as pretty-printed JSON.

    Args:
        output: Destination file (default: expense_tracker_backup.json).
        stdout: Print the payload instead, e.g. to pipe into a clipboard tool.
    """
    settings = load_settings()
    entries = load_all_entries(resolve_data_path(settings))
    payload = export_payload(entries)

    if stdout:
        typer.echo(payload)
        return

    output_path = Path(output or EXPORT_FILENAME).expanduser()
    try:
        output_path.write_text(payload + "\n", encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Export failed: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Exported {len(entries)} entries to: {escape(str(output_path))}")


def import_command(path: str, yes: bool = False) -> None:
    """Replace all entries with the contents of a backup file.

    Args:
        path: JSON file holding an array of entries ('-' reads stdin).
        yes: Skip the confirmation prompt.
    """
    settings = load_settings()
    data_path = resolve_data_path(settings)

    if path == "-" and not yes:
        console.print("[red]Reading from stdin needs --yes (the confirmation prompt also reads stdin)[/red]")
        sys.exit(1)

    try:
        text = sys.stdin.read() if path == "-" else Path(path).expanduser().read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        console.print("[red]Error reading file. Please ensure it is a valid backup file.[/red]", style="bold")
        sys.exit(1)

    try:
        records = parse_import_payload(text)
    except PayloadError as e:
        console.print(f"[red]{escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    if not yes and not typer.confirm(
        "This will replace your current data with the imported file. Are you sure?", default=False
    ):
        console.print("[dim]Import cancelled, existing data kept[/dim]")
        return

    try:
        replace_records(records, data_path)
    except OSError as e:
        console.print(f"[red]Filesystem error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Data imported successfully! ({len(records)} entries)")
