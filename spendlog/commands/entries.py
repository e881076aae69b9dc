"""Entry management commands (add, edit, delete, list)."""

import sys
from pathlib import Path

import typer
from rich.markup import escape
from rich.table import Table

from spendlog.commands.common import (
    build_filter,
    console,
    load_all_entries,
    load_settings,
    normalize_optional_date,
    now_ms,
    resolve_data_path,
)
from spendlog.dates import format_entry_date, to_iso, today
from spendlog.domain.entries import (
    EntryStore,
    add_line_item,
    build_entry,
    match_entry_id,
    next_entry_id,
    parse_food_input,
    parse_line_item_spec,
    remove_line_item,
)
from spendlog.domain.filters import apply_filter, describe_filter
from spendlog.domain.models import Entry, LineItem, coerce_amount
from spendlog.domain.report import format_amount
from spendlog.store import save_entries


def parse_item_options(items: list[LineItem], specs: list[str]) -> tuple[LineItem, ...]:
    """Append parsed "detail=amount" specs to a line item list, exiting on bad input."""
    result = tuple(items)
    for spec in specs:
        parsed, error = parse_line_item_spec(spec)
        if parsed is None:
            console.print(f"[red]{escape(error)}[/red]")
            sys.exit(1)
        detail, amount = parsed
        result = add_line_item(result, detail, amount)
    return result


def save_store(store: EntryStore, data_path: Path) -> None:
    try:
        save_entries(store.list(), data_path)
    except OSError as e:
        console.print(f"[red]Filesystem error: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)


def print_entry(entry: Entry, currency: str) -> None:
    console.print(f"  ID: {escape(str(entry.id))}")
    console.print(f"  Date: {escape(str(entry.date))}")
    console.print(f"  Food: {format_amount(coerce_amount(entry.food), currency)}")
    for item in entry.others:
        amount = format_amount(coerce_amount(item.amount), currency)
        console.print(f"  [dim]#{escape(str(item.id))}[/dim] {escape(str(item.detail))}: {amount}")
    console.print(f"  [bold]Total: {format_amount(entry.total, currency)}[/bold]")


def add_command(
    date: str | None = None,
    food: str | None = None,
    items: list[str] | None = None,
) -> None:
    """Add a new entry.

    Args:
        date: Entry date (YYYY-MM-DD, DD/MM/YYYY, ...). Defaults to today.
        food: Food amount.
        items: Other expenses as "detail=amount" strings.
    """
    settings = load_settings()
    data_path = resolve_data_path(settings)
    entries = load_all_entries(data_path)

    entry_date = normalize_optional_date(date, "date") or to_iso(today())

    food_amount, error = parse_food_input(food)
    if error:
        console.print(f"[red]{escape(error)}[/red]")
        sys.exit(1)

    others = parse_item_options([], items or [])

    entry, error = build_entry(next_entry_id(entries, now_ms()), entry_date, food_amount, others)
    if entry is None:
        console.print(f"[red]{escape(error)}[/red]")
        sys.exit(1)

    store = EntryStore(entries)
    store.upsert(entry)
    save_store(store, data_path)

    console.print("[green]✓[/green] Entry added:")
    print_entry(entry, settings.currency)


def edit_command(
    entry_id: str,
    date: str | None = None,
    food: str | None = None,
    items: list[str] | None = None,
    remove_items: list[str] | None = None,
    clear_items: bool = False,
) -> None:
    """Edit an entry; the saved entry replaces the old one wholesale.

    Args:
        entry_id: Id of the entry (from 'spendlog list').
        date: New date, or None to keep.
        food: New food amount, or None to keep.
        items: Line items to add as "detail=amount".
        remove_items: Ids of line items to remove.
        clear_items: Remove all existing line items first.
    """
    settings = load_settings()
    data_path = resolve_data_path(settings)
    entries = load_all_entries(data_path)

    store = EntryStore(entries)
    stored_id = match_entry_id(entries, entry_id)
    existing = store.get(stored_id) if stored_id is not None else None
    if existing is None:
        console.print(f"[yellow]Entry {escape(entry_id)} not found, nothing changed[/yellow]")
        return

    entry_date = normalize_optional_date(date, "date") or existing.date

    if food is None:
        food_amount = coerce_amount(existing.food)
    else:
        food_amount, error = parse_food_input(food)
        if error:
            console.print(f"[red]{escape(error)}[/red]")
            sys.exit(1)

    others: tuple[LineItem, ...] = () if clear_items else existing.others
    for raw_item_id in remove_items or []:
        matching = [item.id for item in others if str(item.id) == raw_item_id.strip()]
        if not matching:
            console.print(f"[yellow]Line item {escape(raw_item_id)} not found in entry {escape(entry_id)}[/yellow]")
        for item_id in matching:
            others = remove_line_item(others, item_id)
    others = parse_item_options(list(others), items or [])

    entry, error = build_entry(existing.id, entry_date, food_amount, others)
    if entry is None:
        console.print(f"[red]{escape(error)}[/red]")
        sys.exit(1)

    store.upsert(entry)
    save_store(store, data_path)

    console.print(f"[green]✓[/green] Entry {escape(str(entry.id))} updated:")
    print_entry(entry, settings.currency)


def delete_command(entry_id: str, yes: bool = False) -> None:
    """Delete an entry after confirmation.

    Args:
        entry_id: Id of the entry (from 'spendlog list').
        yes: Skip the confirmation prompt.
    """
    settings = load_settings()
    data_path = resolve_data_path(settings)
    entries = load_all_entries(data_path)

    stored_id = match_entry_id(entries, entry_id)
    if stored_id is None:
        console.print(f"[yellow]Entry {escape(entry_id)} not found, nothing changed[/yellow]")
        return

    if not yes and not typer.confirm("Are you sure you want to delete this entry?", default=False):
        console.print("[dim]Delete cancelled[/dim]")
        return

    store = EntryStore(entries)
    store.remove(stored_id)
    save_store(store, data_path)

    console.print(f"[green]✓[/green] Entry {escape(entry_id)} deleted ({len(store)} entries left)")


def list_command(
    window: str | None = None,
    start: str | None = None,
    end: str | None = None,
) -> None:
    """List entries in the selected window, newest first."""
    settings = load_settings()
    data_path = resolve_data_path(settings)
    entries = load_all_entries(data_path)

    config = build_filter(window, start, end, settings)
    filtered = apply_filter(entries, config, today())

    if not filtered:
        console.print(f"[yellow]No expenses found for {describe_filter(config)}[/yellow]")
        return

    table = Table(title=f"Recent History - {describe_filter(config)} ({len(filtered)} entries)")
    table.add_column("ID", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Food", justify="right")
    table.add_column("Others", style="white")
    table.add_column("Total", justify="right", style="bold blue")

    currency = settings.currency
    for entry in filtered:
        others = ", ".join(
            f"{escape(str(item.detail))} {format_amount(coerce_amount(item.amount), currency)}"
            for item in entry.others
        )
        table.add_row(
            escape(str(entry.id)),
            escape(format_entry_date(entry.date)),
            format_amount(coerce_amount(entry.food), currency),
            others or "[dim]-[/dim]",
            format_amount(entry.total, currency),
        )

    console.print(table)
