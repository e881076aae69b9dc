"""Summary, breakdown and calendar commands for viewing spending."""

import sys
from datetime import datetime

from rich.markup import escape
from rich.table import Table

from spendlog.commands.common import build_filter, console, load_all_entries, load_settings, resolve_data_path
from spendlog.dates import month_range, today
from spendlog.domain.calendar_index import build_month_grid, daily_totals, index_dates
from spendlog.domain.categories import category_icon
from spendlog.domain.filters import apply_filter, describe_filter
from spendlog.domain.report import (
    ChartSlice,
    build_chart_series,
    calculate_breakdown,
    calculate_histogram_bar_length,
    calculate_share,
    calculate_totals,
    format_amount,
)

HEAT_STYLES = ("dim", "green", "yellow", "dark_orange", "bold red")


def summary_command(
    window: str | None = None,
    start: str | None = None,
    end: str | None = None,
) -> None:
    """Show food, other and grand totals for the selected window."""
    settings = load_settings()
    entries = load_all_entries(resolve_data_path(settings))

    config = build_filter(window, start, end, settings)
    totals = calculate_totals(apply_filter(entries, config, today()))
    currency = settings.currency

    console.print(f"[bold cyan]{describe_filter(config)}[/bold cyan]\n")
    console.print(f"  [bold]Food:[/bold]        {format_amount(totals.food_total, currency)}")
    console.print(f"  [bold]Others:[/bold]      {format_amount(totals.other_total, currency)}")
    console.print(f"\n  [bold blue]Total spent:[/bold blue] {format_amount(totals.grand_total, currency)}")


def render_chart_line(chart_slice: ChartSlice, grand_total: float, max_value: float, currency: str) -> None:
    """Render one chart slice with a histogram bar.

    Args:
        chart_slice: Slice to render.
        grand_total: Sum of all slices, for the share column.
        max_value: Largest slice value, for bar scaling.
        currency: Currency symbol.
    """
    bar_width = 30
    bar_length = calculate_histogram_bar_length(chart_slice.value, max_value, bar_width)
    share = calculate_share(chart_slice.value, grand_total)
    style = {"food": "green", "misc": "dim"}.get(chart_slice.kind, "magenta")
    amount_display = format_amount(chart_slice.value, currency)
    label = escape(f"{chart_slice.label[:20]:20}")
    console.print(
        f"  {label} {amount_display:>12} {share:5.1f}%  [{style}]{'█' * bar_length}[/{style}]"
    )


def breakdown_command(
    window: str | None = None,
    start: str | None = None,
    end: str | None = None,
    chart: bool = False,
    max_slices: int | None = None,
) -> None:
    """Show other spending grouped by label, optionally with a chart."""
    settings = load_settings()
    entries = load_all_entries(resolve_data_path(settings))

    config = build_filter(window, start, end, settings)
    filtered = apply_filter(entries, config, today())
    breakdown = calculate_breakdown(filtered)
    currency = settings.currency

    if breakdown:
        table = Table(title=f"Other Expenses Breakdown - {describe_filter(config)}")
        table.add_column("", justify="center")
        table.add_column("Detail", style="white")
        table.add_column("Total", justify="right", style="bold")

        for row in breakdown:
            table.add_row(category_icon(row.label), escape(row.label), format_amount(row.total, currency))

        console.print(table)
    else:
        console.print(f"[dim]No other expenses for {describe_filter(config)}[/dim]")

    if not chart:
        return

    cap = max_slices if max_slices is not None else settings.chart_max_slices
    if cap is not None and cap < 2:
        console.print("[red]--max-slices must be at least 2[/red]")
        sys.exit(1)

    totals = calculate_totals(filtered)
    series = build_chart_series(totals.food_total, breakdown, cap)
    if not series:
        console.print("[dim]Nothing to chart[/dim]")
        return

    console.print("\n[bold cyan]Spending chart:[/bold cyan]\n")
    max_value = max(s.value for s in series)
    for chart_slice in series:
        render_chart_line(chart_slice, totals.grand_total, max_value, currency)


def calendar_command(month: str | None = None) -> None:
    """Show a month calendar marking days with spending.

    The markers always come from the full history, not the filter window.
    """
    settings = load_settings()
    entries = load_all_entries(resolve_data_path(settings))

    if month:
        try:
            month_dt = datetime.strptime(month, "%Y-%m")
        except ValueError:
            console.print(f"[red]Invalid month '{escape(month)}' (use YYYY-MM)[/red]")
            sys.exit(1)
    else:
        month_dt = datetime.combine(today(), datetime.min.time())

    _, _, label = month_range(month_dt.strftime("%Y-%m"))
    index = index_dates(entries)
    totals = daily_totals(entries)
    weeks = build_month_grid(month_dt.year, month_dt.month, index, totals)

    table = Table(title=label, show_lines=False)
    for day_name in ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"):
        table.add_column(day_name, justify="right")

    spending_days = 0
    month_total = 0.0
    for week in weeks:
        cells = []
        for cell in week:
            if cell is None:
                cells.append("")
            elif cell.has_entry:
                spending_days += 1
                month_total += cell.total
                cells.append(f"[{HEAT_STYLES[cell.heat]}]{cell.day}•[/{HEAT_STYLES[cell.heat]}]")
            else:
                cells.append(f"[dim]{cell.day}[/dim]")
        table.add_row(*cells)

    console.print(table)
    console.print(
        f"[dim]{spending_days} spending days, {format_amount(month_total, settings.currency)} this month[/dim]"
    )
