"""Categorical and date-range filter over inventory records."""

from dataclasses import dataclass, fields
from datetime import date as Date
from typing import Optional

from ..constants import ALL
from ..models.inventory_record import InventoryRecord


#: Filterable categorical fields, in presentation order
CATEGORICAL_FIELDS = ('item_code', 'location_code', 'item_class', 'unit_of_measure', 'strategy')


def _unconstrained(value: Optional[str]) -> bool:
    return value is None or value == ALL


@dataclass(frozen=True)
class RecordFilter:
    """
    Filter combining categorical matches and an inclusive date range.

    ``None`` or ``"All"`` leaves a categorical field unconstrained. An absent
    date bound is unconstrained on that side. As soon as either bound is
    set, records with an invalid date are excluded.

    Attributes:
        item_code: Item code to match
        location_code: Inventory organisation to match
        item_class: Item class to match
        unit_of_measure: Unit of measure to match
        strategy: Planning strategy to match
        start_date: First day included
        end_date: Last day included
    """
    item_code: Optional[str] = None
    location_code: Optional[str] = None
    item_class: Optional[str] = None
    unit_of_measure: Optional[str] = None
    strategy: Optional[str] = None
    start_date: Optional[Date] = None
    end_date: Optional[Date] = None

    def __post_init__(self):
        """Validate the date range."""
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError(
                f"start_date ({self.start_date}) must not be after end_date ({self.end_date})"
            )

    @property
    def has_date_bounds(self) -> bool:
        return self.start_date is not None or self.end_date is not None

    def in_date_range(self, record: InventoryRecord) -> bool:
        """
        Check the record's date against the range.

        Args:
            record: Record to check

        Returns:
            True if the record falls inside the range (or no range is set)
        """
        if not self.has_date_bounds:
            return True
        if record.record_date is None:
            return False
        if self.start_date is not None and record.record_date < self.start_date:
            return False
        if self.end_date is not None and record.record_date > self.end_date:
            return False
        return True

    def matches(self, record: InventoryRecord, exclude: Optional[str] = None) -> bool:
        """
        Check whether a record passes the filter.

        Args:
            record: Record to check
            exclude: Optional categorical field to ignore (used to build
                cascading option lists)

        Returns:
            True if the record passes
        """
        if not self.in_date_range(record):
            return False

        for name in CATEGORICAL_FIELDS:
            if name == exclude:
                continue
            wanted = getattr(self, name)
            if _unconstrained(wanted):
                continue
            if getattr(record, name) != wanted:
                return False
        return True

    def __str__(self) -> str:
        """String representation."""
        parts = [
            f"{f.name}={getattr(self, f.name)}"
            for f in fields(self)
            if getattr(self, f.name) is not None and getattr(self, f.name) != ALL
        ]
        return f"RecordFilter({', '.join(parts) or 'all'})"
