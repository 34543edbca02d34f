"""Interval merging: day-level risk states -> contiguous shortage blocks.

A single linear pass over one (item, location) series. Days must arrive in
strictly ascending date order; only days present in the input count, so a
gap in the input closes the open block even if both sides share a state.

Example:
    days = [
        (date(2025, 11, 19), RiskState.CRITICAL),
        (date(2025, 11, 20), RiskState.CRITICAL),
        (date(2025, 11, 21), RiskState.NONE),
        (date(2025, 11, 22), RiskState.WATCH_OUT),
    ]
    merge_risk_days(days)
    # [Critical 11-19..11-20 (2d), Watch Out 11-22..11-22 (1d)]
"""

from dataclasses import dataclass
from datetime import date as Date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..constants import CONTIGUITY_TOLERANCE
from ..models.risk import NO_OUTSIDE_LEAD_TIME_RISK, RiskState, ShortageBlock


class UnsortedSequenceError(ValueError):
    """Raised when a day sequence handed to the merger is not strictly ascending."""

    def __init__(self, message: str, context: Optional[Dict] = None):
        self.message = message
        self.context = context or {}
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with context."""
        msg = f"Interval merge precondition violated: {self.message}"
        if self.context:
            msg += "\n\nContext:"
            for key, value in self.context.items():
                msg += f"\n  {key}: {value}"
        return msg


@dataclass
class _OpenBlock:
    start_date: Date
    end_date: Date
    state: RiskState
    day_count: int = 1

    def close(self) -> ShortageBlock:
        return ShortageBlock(
            start_date=self.start_date,
            end_date=self.end_date,
            state=self.state,
            day_count=self.day_count,
        )


def merge_risk_days(
    days: Iterable[Tuple[Date, RiskState]],
    tolerance: timedelta = CONTIGUITY_TOLERANCE,
) -> List[ShortageBlock]:
    """
    Merge a day-ordered risk-state sequence into shortage blocks.

    Args:
        days: (date, RiskState) pairs in strictly ascending date order
        tolerance: Largest gap between a block's end and the next day that
            still counts as consecutive

    Returns:
        Chronologically ordered, non-overlapping blocks covering exactly
        the non-None days of the input

    Raises:
        UnsortedSequenceError: If a date is not after its predecessor
    """
    blocks: List[ShortageBlock] = []
    current: Optional[_OpenBlock] = None
    previous: Optional[Date] = None

    for position, (day, state) in enumerate(days):
        if previous is not None and day <= previous:
            raise UnsortedSequenceError(
                "days must be in strictly ascending date order",
                context={'position': position, 'previous': previous, 'current': day},
            )
        previous = day

        if state == RiskState.NONE:
            if current is not None:
                blocks.append(current.close())
                current = None
            continue

        if current is not None and current.state == state and day - current.end_date <= tolerance:
            current.end_date = day
            current.day_count += 1
            continue

        if current is not None:
            blocks.append(current.close())
        current = _OpenBlock(start_date=day, end_date=day, state=state)

    if current is not None:
        blocks.append(current.close())

    return blocks


@dataclass(frozen=True)
class LeadTimeExposure:
    """
    How a series' shortage blocks sit relative to the lead-time boundary.

    Attributes:
        has_inside_risk: Some block starts on or before the boundary
        first_outside_risk: Earliest start among blocks after the boundary,
            or NO_OUTSIDE_LEAD_TIME_RISK
    """
    has_inside_risk: bool
    first_outside_risk: Date = NO_OUTSIDE_LEAD_TIME_RISK


def lead_time_exposure(blocks: Sequence[ShortageBlock], boundary_date: Date) -> LeadTimeExposure:
    """
    Classify blocks against a lead-time boundary date.

    Args:
        blocks: Shortage blocks of one series
        boundary_date: Last day inside the lead-time horizon

    Returns:
        LeadTimeExposure
    """
    has_inside = False
    first_outside = NO_OUTSIDE_LEAD_TIME_RISK

    for block in blocks:
        if block.start_date <= boundary_date:
            has_inside = True
        elif block.start_date < first_outside:
            first_outside = block.start_date

    return LeadTimeExposure(has_inside_risk=has_inside, first_outside_risk=first_outside)
