"""Node health summaries for the supply chain map."""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date as Date, timedelta
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional

from ..constants import (
    DISTRIBUTION_CENTER_LOCATIONS,
    LOW_INVENTORY_THRESHOLD,
    METRIC_TOTAL_INVENTORY_FORECAST,
    METRIC_TOTAL_TARGET_INVENTORY,
)
from ..models.graph import NodeCategory
from ..models.inventory_record import InventoryRecord, ItemType


class HealthStatus(str, Enum):
    """Inventory health of a node at its latest forecast day."""
    CRITICAL = "Critical"
    LOW = "Low"
    GOOD = "Good"


@dataclass(frozen=True)
class WeeklyHealth:
    """
    Inventory coverage of one week.

    Attributes:
        week_start: Monday of the week
        pct: Average inventory as a percentage of average target
    """
    week_start: Date
    pct: float


@dataclass
class NodeHealth:
    """
    Health card for one (item, location) node.

    Attributes:
        item_code: Item code
        location_code: Inventory organisation
        item_class: Item class of the node
        category: Column the node belongs to (RM / FG / DC)
        current_inventory: Latest Tot.Inventory (Forecast) value
        status: Health status derived from current_inventory
        weekly_health: Week-by-week coverage, oldest first
    """
    item_code: str
    location_code: str
    item_class: str
    category: NodeCategory
    current_inventory: float
    status: HealthStatus
    weekly_health: List[WeeklyHealth] = field(default_factory=list)

    @property
    def key(self) -> str:
        return f"{self.item_code}|{self.location_code}"

    def __str__(self) -> str:
        return f"{self.key} [{self.category.value}] {self.status.value} ({self.current_inventory:,.0f})"


def health_status(current_inventory: float) -> HealthStatus:
    """Map a current inventory figure to a HealthStatus."""
    if current_inventory < 0:
        return HealthStatus.CRITICAL
    if current_inventory < LOW_INVENTORY_THRESHOLD:
        return HealthStatus.LOW
    return HealthStatus.GOOD


def node_category(
    item_type: ItemType,
    location_code: str,
    distribution_centers: FrozenSet[str] = DISTRIBUTION_CENTER_LOCATIONS,
) -> NodeCategory:
    """
    Column of the supply chain map a node belongs to.

    Finished goods held at a distribution center go in the DC column.
    """
    if item_type == ItemType.RAW_MATERIAL:
        return NodeCategory.RAW_MATERIAL
    if item_type == ItemType.FINISHED_GOOD:
        if location_code in distribution_centers:
            return NodeCategory.DISTRIBUTION_CENTER
        return NodeCategory.FINISHED_GOOD
    return NodeCategory.OTHER


def _week_start(day: Date) -> Date:
    return day - timedelta(days=day.weekday())


def weekly_health(records: Iterable[InventoryRecord]) -> List[WeeklyHealth]:
    """
    Bucket inventory and target rows by Monday-anchored week.

    Both averages divide by the number of inventory rows in the week; a week
    with target rows only has an average target of 1. Coverage is 0 when
    the average target is not positive.

    Args:
        records: Records of one node (already date-filtered)

    Returns:
        WeeklyHealth per week that has inventory or target rows, oldest first
    """
    inventory: Dict[Date, float] = defaultdict(float)
    target: Dict[Date, float] = defaultdict(float)
    count: Dict[Date, int] = defaultdict(int)
    weeks = set()

    for record in records:
        if record.record_date is None:
            continue
        week = _week_start(record.record_date)
        if record.metric_name == METRIC_TOTAL_INVENTORY_FORECAST:
            inventory[week] += record.value
            count[week] += 1
            weeks.add(week)
        elif record.metric_name == METRIC_TOTAL_TARGET_INVENTORY:
            target[week] += record.value
            weeks.add(week)

    result = []
    for week in sorted(weeks):
        n = count[week]
        avg_inventory = inventory[week] / n if n else 0.0
        avg_target = target[week] / n if n else 1.0
        pct = (avg_inventory / avg_target) * 100 if avg_target > 0 else 0.0
        result.append(WeeklyHealth(week_start=week, pct=pct))
    return result


def node_health(
    records: Iterable[InventoryRecord],
    item_code: str,
    location_code: str,
    start_date: Optional[Date] = None,
    end_date: Optional[Date] = None,
    category: Optional[NodeCategory] = None,
) -> Optional[NodeHealth]:
    """
    Summarise the health of one (item, location) node.

    Args:
        records: Record set to read the node's rows from
        item_code: Item code
        location_code: Inventory organisation
        start_date: First day included (None = unbounded)
        end_date: Last day included (None = unbounded)
        category: Column override (default: derived from item type and location)

    Returns:
        NodeHealth, or None if the node has no records at all
    """
    node_records = [
        r for r in records
        if r.item_code == item_code and r.location_code == location_code
    ]
    if not node_records:
        return None

    first = node_records[0]
    in_range = [
        r for r in node_records
        if r.record_date is not None
        and (start_date is None or r.record_date >= start_date)
        and (end_date is None or r.record_date <= end_date)
    ]

    inventory_rows = [r for r in in_range if r.metric_name == METRIC_TOTAL_INVENTORY_FORECAST]
    current = max(inventory_rows, key=lambda r: r.record_date).value if inventory_rows else 0.0

    return NodeHealth(
        item_code=item_code,
        location_code=location_code,
        item_class=first.item_class,
        category=category or node_category(first.item_type, location_code),
        current_inventory=current,
        status=health_status(current),
        weekly_health=weekly_health(in_range),
    )
