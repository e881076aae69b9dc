"""Tests for spendlog.domain.entries pure functions."""

from spendlog.domain.entries import (
    MISSING_AMOUNTS_ERROR,
    EntryStore,
    add_line_item,
    build_entry,
    match_entry_id,
    next_entry_id,
    next_line_item_id,
    parse_amount_input,
    parse_food_input,
    parse_line_item_spec,
    remove_entry,
    remove_line_item,
    upsert_entry,
)
from spendlog.domain.models import Amount, Entry, IsoDate, LineItem


def make_entry(entry_id: object, day: str, food: float = 10) -> Entry:
    return Entry(id=entry_id, date=IsoDate(day), food=food)


class TestUpsertEntry:
    """Tests for upsert_entry."""

    def test_new_entry_sorted_newest_first(self) -> None:
        """Should insert and re-sort by date descending."""
        entries = [make_entry(1, "2024-06-03"), make_entry(2, "2024-06-01")]

        result = upsert_entry(entries, make_entry(3, "2024-06-02"))

        assert [e.id for e in result] == [1, 3, 2]

    def test_new_entry_on_existing_date_goes_first(self) -> None:
        """Should keep insertion order among equal dates (new entry prepended)."""
        entries = [make_entry(1, "2024-06-01"), make_entry(2, "2024-05-31")]

        result = upsert_entry(entries, make_entry(3, "2024-06-01"))

        assert [e.id for e in result] == [3, 1, 2]

    def test_existing_id_replaced_in_place(self) -> None:
        """Should replace the whole entry without moving it."""
        entries = [make_entry(1, "2024-06-03"), make_entry(2, "2024-06-01")]
        edited = Entry(id=2, date=IsoDate("2024-06-05"), food=99)

        result = upsert_entry(entries, edited)

        assert [e.id for e in result] == [1, 2]
        assert result[1] == edited

    def test_input_not_mutated(self) -> None:
        """Should return a new list."""
        entries = [make_entry(1, "2024-06-03")]

        upsert_entry(entries, make_entry(2, "2024-06-04"))

        assert len(entries) == 1


class TestRemoveEntry:
    """Tests for remove_entry."""

    def test_removes_matching_id(self) -> None:
        """Should drop the entry with the id."""
        entries = [make_entry(1, "2024-06-03"), make_entry(2, "2024-06-01")]

        assert [e.id for e in remove_entry(entries, 1)] == [2]

    def test_unknown_id_is_noop(self) -> None:
        """Should leave the collection unchanged."""
        entries = [make_entry(1, "2024-06-03")]

        assert remove_entry(entries, 42) == entries


class TestEntryStore:
    """Tests for EntryStore."""

    def test_list_upsert_remove(self) -> None:
        """Should expose list, upsert and remove."""
        store = EntryStore([make_entry(1, "2024-06-01")])

        store.upsert(make_entry(2, "2024-06-02"))
        assert [e.id for e in store.list()] == [2, 1]

        assert store.remove(1) is True
        assert [e.id for e in store.list()] == [2]

    def test_remove_unknown_is_noop(self) -> None:
        """Should report nothing removed and keep entries."""
        store = EntryStore([make_entry(1, "2024-06-01")])

        assert store.remove(99) is False
        assert len(store) == 1

    def test_list_returns_copy(self) -> None:
        """Should not let callers mutate the store."""
        store = EntryStore([make_entry(1, "2024-06-01")])

        store.list().clear()

        assert len(store) == 1


class TestIds:
    """Tests for id assignment."""

    def test_entry_id_uses_clock(self) -> None:
        """Should use the current epoch milliseconds."""
        assert next_entry_id([make_entry(5, "2024-06-01")], 1_700_000_000_000) == 1_700_000_000_000

    def test_entry_id_stays_unique(self) -> None:
        """Should step past an id at or beyond now."""
        entries = [make_entry(1_700_000_000_000, "2024-06-01")]

        assert next_entry_id(entries, 1_700_000_000_000) == 1_700_000_000_001

    def test_line_item_ids(self) -> None:
        """Should number line items after the highest id."""
        items = [LineItem(id=1, detail="Pen", amount=1), LineItem(id=4, detail="Ink", amount=1)]

        assert next_line_item_id([]) == 1
        assert next_line_item_id(items) == 5

    def test_match_entry_id_by_text(self) -> None:
        """Should resolve typed ids to stored numeric or string ids."""
        entries = [make_entry(1717200000000, "2024-06-01"), make_entry("abc", "2024-06-01")]

        assert match_entry_id(entries, "1717200000000") == 1717200000000
        assert match_entry_id(entries, "abc") == "abc"
        assert match_entry_id(entries, "nope") is None


class TestInputParsing:
    """Tests for amount and line item parsing."""

    def test_parse_amount(self) -> None:
        """Should accept non-negative numbers only."""
        assert parse_amount_input("12.5") == (12.5, None)
        assert parse_amount_input("-1") == (None, "Amount must be positive")
        assert parse_amount_input("ten")[0] is None

    def test_parse_food(self) -> None:
        """Should treat blank or unparseable food as 0 and reject negatives."""
        assert parse_food_input(None) == (0.0, None)
        assert parse_food_input("") == (0.0, None)
        assert parse_food_input("abc") == (0.0, None)
        assert parse_food_input("250") == (250.0, None)
        assert parse_food_input("-3")[1] == "Food amount must be positive"

    def test_parse_line_item_spec(self) -> None:
        """Should split on the last '='."""
        assert parse_line_item_spec("Uber to work=150") == (("Uber to work", 150.0), None)
        assert parse_line_item_spec("a=b=2") == (("a=b", 2.0), None)

    def test_line_item_needs_detail_and_amount(self) -> None:
        """Should reject specs missing either part."""
        assert parse_line_item_spec("Uber")[0] is None
        assert parse_line_item_spec("=150")[0] is None
        assert parse_line_item_spec("Uber=")[0] is None

    def test_add_and_remove_line_items(self) -> None:
        """Should append with fresh ids and drop by id."""
        items = add_line_item((), "Pen", Amount(2.0))
        items = add_line_item(items, "Ink", Amount(3.0))

        assert [(i.id, i.detail) for i in items] == [(1, "Pen"), (2, "Ink")]
        assert [i.detail for i in remove_line_item(items, 1)] == ["Ink"]
        assert remove_line_item(items, 9) == items


class TestBuildEntry:
    """Tests for build_entry."""

    def test_food_only(self) -> None:
        """Should accept an entry with only food."""
        entry, error = build_entry(1, IsoDate("2024-06-01"), Amount(250.0), [])

        assert error is None
        assert entry == Entry(id=1, date=IsoDate("2024-06-01"), food=250.0, others=())

    def test_others_only(self) -> None:
        """Should accept an entry with only line items."""
        items = (LineItem(id=1, detail="Pen", amount=2.0),)

        entry, error = build_entry(1, IsoDate("2024-06-01"), Amount(0.0), items)

        assert error is None
        assert entry is not None
        assert entry.others == items

    def test_nothing_entered(self) -> None:
        """Should require food or a line item."""
        entry, error = build_entry(1, IsoDate("2024-06-01"), Amount(0.0), [])

        assert entry is None
        assert error == MISSING_AMOUNTS_ERROR

    def test_date_required(self) -> None:
        """Should require a date."""
        entry, error = build_entry(1, IsoDate(""), Amount(5.0), [])

        assert entry is None
        assert error == "Date is required"
