"""Location-specific procurement lead-time policy.

The lead-time boundary of a location is ``reference_date + weeks * 7 days``.
Risk starting on or before the boundary is already inside the procurement
horizon and can no longer be fixed by a new order.

The reference date is always an explicit argument with a "today" default,
so production callers get wall-clock behaviour and tests stay deterministic.
"""

from dataclasses import dataclass, field
from datetime import date as Date, timedelta
from typing import Dict, Optional, Tuple

from ..constants import DEFAULT_LEAD_TIME_WEEKS, LEAD_TIME_WEEKS_BY_LOCATION


@dataclass(frozen=True)
class LeadTimePolicy:
    """
    Lookup table from inventory organisation to lead time in weeks.

    Attributes:
        weeks_by_location: Location code -> lead time in weeks
        default_weeks: Lead time for unmapped locations
    """
    weeks_by_location: Dict[str, int] = field(
        default_factory=lambda: dict(LEAD_TIME_WEEKS_BY_LOCATION)
    )
    default_weeks: int = DEFAULT_LEAD_TIME_WEEKS

    def __post_init__(self):
        """Validate lead times."""
        if self.default_weeks < 0:
            raise ValueError(f"default_weeks must be >= 0, got {self.default_weeks}")
        negative = {loc: w for loc, w in self.weeks_by_location.items() if w < 0}
        if negative:
            raise ValueError(f"Lead times must be >= 0 weeks: {negative}")

    def weeks_for(self, location_code: str) -> int:
        """Lead time in weeks (unmapped codes fall through to the default)."""
        return self.weeks_by_location.get(location_code, self.default_weeks)

    def boundary_date(self, location_code: str, reference_date: Optional[Date] = None) -> Date:
        """
        Last day inside the location's lead-time horizon.

        Args:
            location_code: Inventory organisation
            reference_date: Day the computation runs (default: today)

        Returns:
            reference_date + lead time
        """
        reference_date = reference_date or Date.today()
        return reference_date + timedelta(weeks=self.weeks_for(location_code))

    def window(self, location_code: str, reference_date: Optional[Date] = None) -> Tuple[Date, Date]:
        """
        Date range covering only the lead-time horizon.

        Args:
            location_code: Inventory organisation
            reference_date: Day the computation runs (default: today)

        Returns:
            (reference_date, boundary_date)
        """
        reference_date = reference_date or Date.today()
        return reference_date, self.boundary_date(location_code, reference_date)


DEFAULT_LEAD_TIME_POLICY = LeadTimePolicy()


def lead_time_weeks(location_code: str) -> int:
    """Lead time in weeks under the default policy."""
    return DEFAULT_LEAD_TIME_POLICY.weeks_for(location_code)


def lead_time_boundary(location_code: str, reference_date: Optional[Date] = None) -> Date:
    """Lead-time boundary date under the default policy."""
    return DEFAULT_LEAD_TIME_POLICY.boundary_date(location_code, reference_date)
