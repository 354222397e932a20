"""
src/errors.py
─────────────
Error taxonomy for the health & query engine and the record store.

  OutOfOrderSampleError   — sample older than the newest accepted one; dropped
  InvalidSortKeyError     — view asked to sort on a field it does not declare
  InvalidFilterError      — view asked to filter on a field without a matcher
                            or with a value the field does not accept
  ReferentialCascadeError — delete would orphan dependents; needs confirmation
  RecordNotFoundError     — unknown id in a collection
"""
from __future__ import annotations

from datetime import datetime


class MaintenanceError(Exception):
    """Base class for every error raised by this package."""


class OutOfOrderSampleError(MaintenanceError):
    def __init__(self, equipment_id: str, timestamp: datetime, latest: datetime):
        self.equipment_id = equipment_id
        self.timestamp = timestamp
        self.latest = latest
        super().__init__(
            f"{equipment_id}: sample at {timestamp.isoformat()} precedes "
            f"latest sample at {latest.isoformat()}"
        )


class QueryError(MaintenanceError):
    pass


class InvalidSortKeyError(QueryError):
    def __init__(self, key: str, allowed):
        self.key = key
        self.allowed = sorted(allowed)
        super().__init__(f"Unknown sort key {key!r}; expected one of {self.allowed}")


class InvalidFilterError(QueryError):
    """Unknown filter field, or (when `value` is given) a value the field does not accept."""

    def __init__(self, field: str, allowed, value=None):
        self.field = field
        self.value = value
        self.allowed = sorted(allowed)
        if value is None:
            message = f"No matcher for filter field {field!r}; expected one of {self.allowed}"
        else:
            message = f"Invalid value {value!r} for filter {field!r}; expected one of {self.allowed}"
        super().__init__(message)


class ReferentialCascadeError(MaintenanceError):
    """
    Raised when deleting a record that other records still reference.

    `dependents` maps collection name → number of referencing records, so the
    UI can phrase its confirmation prompt before retrying with cascade=True.
    """

    def __init__(self, record_id: str, dependents: dict[str, int]):
        self.record_id = record_id
        self.dependents = dependents
        summary = ", ".join(f"{n} {kind}" for kind, n in dependents.items())
        super().__init__(f"{record_id} is still referenced by {summary}")


class RecordNotFoundError(MaintenanceError, KeyError):
    def __init__(self, kind: str, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"Unknown {kind}: {record_id}")

    def __str__(self) -> str:
        return self.args[0]
