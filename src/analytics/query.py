"""
src/analytics/query.py
──────────────────────
Generic filter / sort engine shared by every list view.

A query runs three stages over an in-memory collection:
  1. text     — case-insensitive substring over declared text fields (OR)
  2. filters  — one matcher per field; ANY is a no-op (AND across fields)
  3. sort     — stable sort on a declared key, ascending or descending

Records are never mutated; the result is a new list.
"""
from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from src.errors import InvalidFilterError, InvalidSortKeyError

R = TypeVar("R")

Matcher = Callable[[Any, Any], bool]
TextField = Callable[[Any], "str | None"]
SortKey = Callable[[Any], Any]

ALL_SENTINEL = "ALL"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


# ── Filter values: ANY | Specific(value) ─────────────────────────────────────

class _AnyValue:
    """Matches every record. Use the ANY singleton."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ANY"


ANY = _AnyValue()


@dataclass(frozen=True)
class Specific:
    value: Any


FilterValue = _AnyValue | Specific


def filter_value(raw: Any) -> FilterValue:
    """Parse a UI control value; None, "" and "ALL" (any case) mean ANY."""
    if isinstance(raw, (_AnyValue, Specific)):
        return raw
    if raw is None or raw == "" or (isinstance(raw, str) and raw.upper() == ALL_SENTINEL):
        return ANY
    return Specific(raw)


@dataclass(frozen=True)
class FilterSpec:
    text_query: str = ""
    field_filters: Mapping[str, FilterValue] = field(default_factory=dict)
    sort_key: str | None = None
    sort_direction: SortDirection = SortDirection.ASC


# ── Engine ────────────────────────────────────────────────────────────────────

def _matches_text(record: Any, needle: str, text_fields: Sequence[TextField]) -> bool:
    for get in text_fields:
        value = get(record)
        if value is not None and needle in str(value).lower():
            return True
    return False


def _stable_sort(records: list, key: SortKey, direction: SortDirection) -> list:
    # Python's sort is stable in both directions; None keys always go last.
    present = [r for r in records if key(r) is not None]
    missing = [r for r in records if key(r) is None]
    present.sort(key=key, reverse=direction == SortDirection.DESC)
    return present + missing


def query(
    records: Iterable[R],
    spec: FilterSpec,
    matchers: Mapping[str, Matcher],
    text_fields: Sequence[TextField] = (),
    sort_keys: Mapping[str, SortKey] | None = None,
) -> list[R]:
    """
    Select and order `records` according to `spec`.

    Args:
        records: Collection in insertion order
        spec: Text query, field filters and sort order
        matchers: field name → (record, value) → bool
        text_fields: Accessors for the fields searched by the text query
        sort_keys: sort key name → accessor; without it no sort key is valid

    Raises:
        InvalidFilterError: a filter names a field with no matcher
        InvalidSortKeyError: spec.sort_key is not in sort_keys
    """
    for name in spec.field_filters:
        if name not in matchers:
            raise InvalidFilterError(name, matchers.keys())

    sort_keys = sort_keys or {}
    key: SortKey | None = None
    if spec.sort_key is not None:
        if spec.sort_key not in sort_keys:
            raise InvalidSortKeyError(spec.sort_key, sort_keys.keys())
        key = sort_keys[spec.sort_key]

    needle = spec.text_query.strip().lower()
    active = [
        (matchers[name], f.value) for name, f in spec.field_filters.items() if isinstance(f, Specific)
    ]

    selected = [
        r
        for r in records
        if (not needle or _matches_text(r, needle, text_fields))
        and all(match(r, value) for match, value in active)
    ]

    if key is None:
        return selected
    return _stable_sort(selected, key, spec.sort_direction)


# ── Record views ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RecordView(Generic[R]):
    """
    Query configuration for one record kind.

    `spec()` validates sort key and filter names when the spec is built, so a
    misconfigured view fails before anything is rendered.
    """

    name: str
    text_fields: tuple[TextField, ...]
    matchers: Mapping[str, Matcher]
    sort_keys: Mapping[str, SortKey]
    default_sort_key: str | None = None
    default_direction: SortDirection = SortDirection.ASC

    def spec(
        self,
        text_query: str | None = "",
        filters: Mapping[str, Any] | None = None,
        sort_key: str | None = None,
        sort_direction: SortDirection | str | None = None,
    ) -> FilterSpec:
        filters = filters or {}
        for name in filters:
            if name not in self.matchers:
                raise InvalidFilterError(name, self.matchers.keys())

        if sort_key is None:
            sort_key = self.default_sort_key
            direction = SortDirection(sort_direction or self.default_direction)
        else:
            direction = SortDirection(sort_direction or SortDirection.ASC)
        if sort_key is not None and sort_key not in self.sort_keys:
            raise InvalidSortKeyError(sort_key, self.sort_keys.keys())

        return FilterSpec(
            text_query=text_query or "",
            field_filters={name: filter_value(raw) for name, raw in filters.items()},
            sort_key=sort_key,
            sort_direction=direction,
        )

    def run(self, records: Iterable[R], spec: FilterSpec) -> list[R]:
        return query(records, spec, self.matchers, self.text_fields, self.sort_keys)
