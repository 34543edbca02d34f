"""Risk state, shortage block and item risk group models."""

from dataclasses import dataclass
from datetime import date as Date
from enum import Enum
from typing import Tuple


class RiskState(str, Enum):
    """Risk classification of one (item, location, day)."""
    NONE = "None"
    CRITICAL = "Critical"
    WATCH_OUT = "Watch Out"


#: Sentinel for "no risk beyond the lead-time horizon"; sorts after every real date
NO_OUTSIDE_LEAD_TIME_RISK = Date.max


@dataclass(frozen=True)
class ShortageBlock:
    """
    Maximal run of consecutive days sharing one risk state.

    Attributes:
        start_date: First day of the run
        end_date: Last day of the run
        state: Critical or Watch Out
        day_count: Number of days folded into the block. Only days present
            in the input count, so this can be less than the calendar span.
    """
    start_date: Date
    end_date: Date
    state: RiskState
    day_count: int

    @property
    def is_critical(self) -> bool:
        return self.state == RiskState.CRITICAL

    def __str__(self) -> str:
        """String representation."""
        return f"{self.state.value}: {self.start_date} to {self.end_date} ({self.day_count}d)"


@dataclass(frozen=True)
class ItemRiskGroup:
    """
    Shortage blocks and ranking metrics for one (item, location) pair.

    Attributes:
        item_code: Item code
        location_code: Inventory organisation
        blocks: Chronologically ordered, non-overlapping shortage blocks
        total_shortage_days: Sum of block day counts
        has_inside_lead_time_risk: True if any block starts on or before the
            location's lead-time boundary date
        first_outside_lead_time_risk: Earliest start date among blocks beyond
            the boundary, or NO_OUTSIDE_LEAD_TIME_RISK if there are none
    """
    item_code: str
    location_code: str
    blocks: Tuple[ShortageBlock, ...]
    total_shortage_days: int
    has_inside_lead_time_risk: bool
    first_outside_lead_time_risk: Date = NO_OUTSIDE_LEAD_TIME_RISK

    @property
    def key(self) -> Tuple[str, str]:
        """(item_code, location_code) pair."""
        return (self.item_code, self.location_code)

    @property
    def has_outside_lead_time_risk(self) -> bool:
        return self.first_outside_lead_time_risk != NO_OUTSIDE_LEAD_TIME_RISK

    def __str__(self) -> str:
        """String representation."""
        flag = " [inside lead time]" if self.has_inside_lead_time_risk else ""
        return (
            f"{self.item_code}@{self.location_code}: {len(self.blocks)} blocks, "
            f"{self.total_shortage_days} shortage days{flag}"
        )
