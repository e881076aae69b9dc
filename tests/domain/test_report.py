"""Tests for spendlog.domain.report pure functions."""

from datetime import date

import pytest

from spendlog.domain.filters import FilterConfig, apply_filter
from spendlog.domain.models import Amount, Entry, IsoDate, Label, LineItem
from spendlog.domain.report import (
    BreakdownRow,
    ChartSlice,
    Totals,
    build_chart_series,
    calculate_breakdown,
    calculate_histogram_bar_length,
    calculate_share,
    calculate_totals,
    format_amount,
)


def item(item_id: int, detail: str, amount: object) -> LineItem:
    return LineItem(id=item_id, detail=detail, amount=amount)


def sample_entries() -> list[Entry]:
    return [
        Entry(
            id=1,
            date=IsoDate("2024-06-01"),
            food=250,
            others=(item(1, "Uber", 150), item(2, "Notebook", 40)),
        ),
        Entry(id=2, date=IsoDate("2024-05-31"), food=300, others=()),
    ]


class TestCalculateTotals:
    """Tests for calculate_totals."""

    def test_empty_input_is_all_zero(self) -> None:
        """Should return zero totals for no entries."""
        assert calculate_totals([]) == Totals(Amount(0.0), Amount(0.0), Amount(0.0))

    def test_sums_food_and_others(self) -> None:
        """Should total food, others and both."""
        totals = calculate_totals(sample_entries())

        assert totals.food_total == 550
        assert totals.other_total == 190
        assert totals.grand_total == 740

    def test_bad_amounts_count_as_zero(self) -> None:
        """Should coerce missing and non-numeric amounts to 0."""
        entries = [
            Entry(id=1, date=IsoDate("2024-06-01"), food=None, others=(item(1, "Pen", "abc"), item(2, "Ink", "5"))),
            Entry(id=2, date=IsoDate("2024-06-01"), food="x"),
        ]

        totals = calculate_totals(entries)

        assert totals == Totals(Amount(0.0), Amount(5.0), Amount(5.0))

    def test_grand_total_matches_entry_totals(self) -> None:
        """Should agree with the per-entry displayed totals."""
        entries = sample_entries()

        assert calculate_totals(entries).grand_total == sum(e.total for e in entries)

    def test_totals_split_over_disjoint_sets(self) -> None:
        """Should give the same totals for a union as for the parts added."""
        first, second = sample_entries()

        assert calculate_totals([first, second]) == calculate_totals([first]) + calculate_totals([second])
        assert calculate_totals([second, first]) == calculate_totals([first, second])


class TestCalculateBreakdown:
    """Tests for calculate_breakdown."""

    def test_sorted_by_total_descending(self) -> None:
        """Should list the largest label first."""
        rows = calculate_breakdown(sample_entries())

        assert rows == [
            BreakdownRow(Label("Uber"), Amount(150.0)),
            BreakdownRow(Label("Notebook"), Amount(40.0)),
        ]

    def test_labels_merge_case_and_whitespace_insensitively(self) -> None:
        """Should merge "Uber" and " uber " and keep the first-seen label."""
        entries = [
            Entry(id=1, date=IsoDate("2024-06-02"), others=(item(1, " uber ", 20),)),
            Entry(id=2, date=IsoDate("2024-06-01"), others=(item(1, "Uber", 30),)),
        ]

        rows = calculate_breakdown(entries)

        assert rows == [BreakdownRow(Label("uber"), Amount(50.0))]

    def test_ties_keep_first_seen_order(self) -> None:
        """Should break ties by first encounter."""
        entries = [
            Entry(id=1, date=IsoDate("2024-06-01"), others=(item(1, "Pen", 10), item(2, "Bus", 10))),
            Entry(id=2, date=IsoDate("2024-05-01"), others=(item(1, "Ink", 10),)),
        ]

        assert [row.label for row in calculate_breakdown(entries)] == ["Pen", "Bus", "Ink"]

    def test_food_is_not_part_of_breakdown(self) -> None:
        """Should only group other line items."""
        entries = [Entry(id=1, date=IsoDate("2024-06-01"), food=100)]

        assert calculate_breakdown(entries) == []

    def test_bad_amounts_count_as_zero(self) -> None:
        """Should keep a row for a label whose amounts are all invalid."""
        entries = [Entry(id=1, date=IsoDate("2024-06-01"), others=(item(1, "Pen", None),))]

        assert calculate_breakdown(entries) == [BreakdownRow(Label("Pen"), Amount(0.0))]


class TestBuildChartSeries:
    """Tests for build_chart_series."""

    def test_food_first_then_breakdown(self) -> None:
        """Should start with food and follow breakdown order."""
        breakdown = calculate_breakdown(sample_entries())

        series = build_chart_series(Amount(550.0), breakdown)

        assert series == [
            ChartSlice(Label("Food"), Amount(550.0), "food"),
            ChartSlice(Label("Uber"), Amount(150.0)),
            ChartSlice(Label("Notebook"), Amount(40.0)),
        ]

    def test_zero_slices_dropped(self) -> None:
        """Should skip zero food and zero-value labels."""
        breakdown = [BreakdownRow(Label("Pen"), Amount(5.0)), BreakdownRow(Label("Ink"), Amount(0.0))]

        series = build_chart_series(Amount(0.0), breakdown)

        assert series == [ChartSlice(Label("Pen"), Amount(5.0))]

    def test_no_cap_by_default(self) -> None:
        """Should keep every slice when no cap is given."""
        breakdown = [BreakdownRow(Label(f"L{i}"), Amount(float(20 - i))) for i in range(12)]

        assert len(build_chart_series(Amount(10.0), breakdown)) == 13

    def test_cap_folds_tail_into_misc(self) -> None:
        """Should fold slices past the cap into a trailing Misc slice."""
        breakdown = [
            BreakdownRow(Label("Rent"), Amount(500.0)),
            BreakdownRow(Label("Uber"), Amount(150.0)),
            BreakdownRow(Label("Pen"), Amount(5.0)),
            BreakdownRow(Label("Ink"), Amount(3.0)),
        ]

        series = build_chart_series(Amount(100.0), breakdown, max_slices=3)

        assert series == [
            ChartSlice(Label("Food"), Amount(100.0), "food"),
            ChartSlice(Label("Rent"), Amount(500.0)),
            ChartSlice(Label("Misc"), Amount(158.0), "misc"),
        ]

    def test_cap_not_reached(self) -> None:
        """Should leave a short series untouched."""
        breakdown = [BreakdownRow(Label("Pen"), Amount(5.0))]

        assert len(build_chart_series(Amount(1.0), breakdown, max_slices=2)) == 2

    def test_cap_below_two_rejected(self) -> None:
        """Should reject caps that leave no room for Misc."""
        with pytest.raises(ValueError):
            build_chart_series(Amount(1.0), [], max_slices=1)


class TestHelpers:
    """Tests for share, histogram and formatting helpers."""

    def test_share(self) -> None:
        """Should compute a percentage, 0 for an empty total."""
        assert calculate_share(Amount(25.0), Amount(100.0)) == 25.0
        assert calculate_share(Amount(25.0), Amount(0.0)) == 0.0

    def test_histogram_bar_length(self) -> None:
        """Should scale bars to the largest amount."""
        assert calculate_histogram_bar_length(Amount(50.0), Amount(100.0), 30) == 15
        assert calculate_histogram_bar_length(Amount(50.0), Amount(0.0), 30) == 0

    def test_format_amount(self) -> None:
        """Should drop cents for whole amounts."""
        assert format_amount(1234) == "$1,234"
        assert format_amount(12.5, "₹") == "₹12.50"


class TestScenario:
    """End-to-end check of filter, totals and breakdown together."""

    def test_seven_day_window(self) -> None:
        """Should include both sample entries and total them."""
        filtered = apply_filter(sample_entries(), FilterConfig(mode="7"), date(2024, 6, 1))

        assert len(filtered) == 2
        assert calculate_totals(filtered) == Totals(Amount(550.0), Amount(190.0), Amount(740.0))
        assert [(r.label, r.total) for r in calculate_breakdown(filtered)] == [("Uber", 150.0), ("Notebook", 40.0)]
