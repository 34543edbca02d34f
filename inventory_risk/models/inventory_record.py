"""Inventory time-series record model."""

from datetime import date as Date
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ItemType(str, Enum):
    """Material type of an item."""
    RAW_MATERIAL = "RM"
    FINISHED_GOOD = "FG"
    OTHER = "Other"


class InventoryRecord(BaseModel):
    """
    One parsed row of the per-day, per-item inventory export.

    A record carries a single metric value (e.g. ``Tot.Req.``) for one item
    at one inventory organisation on one day. Records are immutable once
    parsed. Rows whose date could not be parsed keep ``record_date=None`` and
    are excluded from every date-bounded view; rows whose value was not
    numeric carry ``value=0.0`` and keep the original text in ``raw_value``.

    Attributes:
        item_code: Item (material) code
        location_code: Inventory organisation code (plant or DC)
        item_class: Item class (e.g. "MR", "FA")
        unit_of_measure: Unit of measure (e.g. "KG", "LM")
        strategy: Planning strategy (e.g. "MTS")
        item_type: Raw material, finished good or other
        metric_name: Whitespace-trimmed metric label
        record_date: Calendar day, or None when unparseable
        value: Numeric value (0.0 when the source value was not numeric)
        raw_value: Original source text when it was not numeric
        factory: Optional factory code
    """
    model_config = ConfigDict(frozen=True)

    item_code: str = Field(..., description="Item code")
    location_code: str = Field(..., description="Inventory organisation")
    item_class: str = Field("", description="Item class")
    unit_of_measure: str = Field("", description="Unit of measure")
    strategy: str = Field("", description="Planning strategy")
    item_type: ItemType = Field(ItemType.OTHER, description="RM / FG / Other")
    metric_name: str = Field(..., description="Metric label")
    record_date: Optional[Date] = Field(None, description="Calendar day of the value")
    value: float = Field(0.0, description="Numeric value")
    raw_value: Optional[str] = Field(None, description="Unparsed value text, if not numeric")
    factory: str = Field("", description="Factory code")

    @field_validator(
        'item_code', 'location_code', 'item_class', 'unit_of_measure',
        'strategy', 'metric_name', 'factory',
    )
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Trim surrounding whitespace from text fields."""
        return v.strip()

    @property
    def has_valid_date(self) -> bool:
        """True if the record's date parsed to a calendar day."""
        return self.record_date is not None

    @property
    def has_numeric_value(self) -> bool:
        """True if the source value was numeric."""
        return self.raw_value is None

    @property
    def key(self) -> Tuple[str, str]:
        """(item_code, location_code) pair identifying the series."""
        return (self.item_code, self.location_code)

    def __str__(self) -> str:
        """String representation."""
        day = self.record_date.isoformat() if self.record_date else "invalid-date"
        return f"{self.item_code}@{self.location_code} {day} {self.metric_name}={self.value:g}"
