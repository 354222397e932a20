"""
tests/test_query.py
────────────────────
Tests for the generic filter/sort engine.
"""
from dataclasses import dataclass

import pytest

from src.analytics.query import (
    ANY,
    FilterSpec,
    RecordView,
    SortDirection,
    Specific,
    filter_value,
    query,
)
from src.errors import InvalidFilterError, InvalidSortKeyError, QueryError


@dataclass(frozen=True)
class Row:
    name: str
    kind: str
    rank: int | None = None


ROWS = [
    Row("Office Printer X1000", "Printer", 3),
    Row("Conference Room AC Unit", "HVAC", 1),
    Row("Kitchen Refrigerator", "Appliance", None),
    Row("Lobby AC Unit", "HVAC", 1),
    Row("Basement Boiler", "HVAC", 2),
]

VIEW = RecordView(
    name="rows",
    text_fields=(lambda r: r.name,),
    matchers={"kind": lambda r, v: r.kind == v},
    sort_keys={"rank": lambda r: r.rank, "name": lambda r: r.name},
)


class TestFilterValue:
    @pytest.mark.parametrize("raw", [None, "", "ALL", "all", "All"])
    def test_any_sentinels(self, raw):
        assert filter_value(raw) is ANY

    def test_specific(self):
        assert filter_value("HVAC") == Specific("HVAC")

    def test_passthrough(self):
        assert filter_value(ANY) is ANY
        assert filter_value(Specific(0)) == Specific(0)

    def test_any_is_singleton(self):
        assert type(ANY)() is ANY


class TestTextQuery:
    def test_case_insensitive_substring(self):
        result = query(
            [ROWS[0], ROWS[1]], FilterSpec(text_query="ac"), VIEW.matchers, VIEW.text_fields
        )
        assert result == [ROWS[1]]

    def test_blank_query_matches_all(self):
        assert VIEW.run(ROWS, VIEW.spec("   ")) == ROWS

    def test_none_text_fields_never_match(self):
        rows = [Row("A", "x"), Row("B", "y")]
        result = query(rows, FilterSpec(text_query="a"), {}, (lambda r: None, lambda r: r.name))
        assert result == [rows[0]]

    def test_or_across_text_fields(self):
        view = RecordView("rows", (lambda r: r.name, lambda r: r.kind), {}, {})
        assert view.run(ROWS, view.spec("appliance")) == [ROWS[2]]


class TestFieldFilters:
    def test_specific_filter(self):
        assert VIEW.run(ROWS, VIEW.spec(filters={"kind": "HVAC"})) == [ROWS[1], ROWS[3], ROWS[4]]

    def test_all_is_no_op(self):
        assert VIEW.run(ROWS, VIEW.spec(filters={"kind": "ALL"})) == ROWS

    def test_filters_and_text_combine(self):
        result = VIEW.run(ROWS, VIEW.spec("unit", {"kind": "HVAC"}))
        assert result == [ROWS[1], ROWS[3]]

    def test_unknown_filter_rejected_at_spec(self):
        with pytest.raises(InvalidFilterError) as exc_info:
            VIEW.spec(filters={"colour": "red"})
        assert exc_info.value.field == "colour"
        assert exc_info.value.allowed == ["kind"]

    def test_unknown_filter_rejected_by_query(self):
        with pytest.raises(InvalidFilterError):
            query(ROWS, FilterSpec(field_filters={"colour": ANY}), VIEW.matchers)


class TestSorting:
    def test_ascending_is_stable(self):
        result = VIEW.run(ROWS, VIEW.spec(sort_key="rank"))
        assert [r.name for r in result] == [
            "Conference Room AC Unit",
            "Lobby AC Unit",
            "Basement Boiler",
            "Office Printer X1000",
            "Kitchen Refrigerator",
        ]

    def test_descending_keeps_ties_and_nones_last(self):
        result = VIEW.run(ROWS, VIEW.spec(sort_key="rank", sort_direction="desc"))
        assert [r.rank for r in result] == [3, 2, 1, 1, None]
        assert result[2] is ROWS[1] and result[3] is ROWS[3]

    def test_no_sort_keeps_insertion_order(self):
        assert VIEW.run(ROWS, VIEW.spec()) == ROWS

    def test_default_sort_applies(self):
        view = RecordView(
            "rows", VIEW.text_fields, VIEW.matchers, VIEW.sort_keys,
            default_sort_key="name", default_direction=SortDirection.DESC,
        )
        assert [r.name for r in view.run(ROWS, view.spec())][0] == "Office Printer X1000"

    def test_unknown_sort_key(self):
        with pytest.raises(InvalidSortKeyError) as exc_info:
            VIEW.spec(sort_key="weight")
        assert isinstance(exc_info.value, QueryError)
        assert exc_info.value.allowed == ["name", "rank"]

    @pytest.mark.parametrize("records", [ROWS, []])
    def test_sort_key_without_declared_keys(self, records):
        with pytest.raises(InvalidSortKeyError) as exc_info:
            query(records, FilterSpec(sort_key="name"), {})
        assert exc_info.value.allowed == []

    def test_unknown_key_in_bare_query(self):
        with pytest.raises(InvalidSortKeyError):
            query(ROWS, FilterSpec(sort_key="weight"), VIEW.matchers, VIEW.text_fields, VIEW.sort_keys)


class TestQueryContract:
    def test_empty_input(self):
        assert VIEW.run([], VIEW.spec("x", {"kind": "HVAC"}, "rank")) == []

    def test_returns_new_list(self):
        records = list(ROWS)
        result = VIEW.run(records, VIEW.spec())
        assert result == records
        assert result is not records

    def test_idempotent(self):
        spec = VIEW.spec("a", {"kind": "HVAC"}, "rank", "desc")
        once = VIEW.run(ROWS, spec)
        assert VIEW.run(once, spec) == once

    def test_result_is_subset(self):
        result = VIEW.run(ROWS, VIEW.spec("o"))
        assert all(r in ROWS for r in result)

    def test_accepts_generators(self):
        assert VIEW.run((r for r in ROWS), VIEW.spec(filters={"kind": "Printer"})) == [ROWS[0]]
