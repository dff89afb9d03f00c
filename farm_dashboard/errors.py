"""Exception types raised by the farm dashboard."""

from __future__ import annotations


class FarmDashboardError(Exception):
    """Base class for errors raised by this package."""


class InvalidDateError(FarmDashboardError, ValueError):
    """A date field could not be parsed into a calendar date."""

    def __init__(self, value: object, field: str = "date"):
        self.value = value
        self.field = field
        super().__init__(f"Invalid {field}: {value!r}")


class RecordNotFoundError(FarmDashboardError, LookupError):
    """A record store lookup referenced an id that does not exist."""

    def __init__(self, entity: str, record_id: int):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} not found: {record_id}")
