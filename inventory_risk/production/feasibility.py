"""
BOM feasibility projection.

This module projects raw-material availability into finished-good
production capacity: for each direct BOM child of a selected finished good,
the child's inventory forecast on a day divided by its consumption ratio is
the maximum number of parent units that child alone would allow.
"""

from collections import OrderedDict, defaultdict
from dataclasses import dataclass, field
from datetime import date as Date
from typing import Dict, Iterable, List, Set, Union
import logging

import pandas as pd

from ..constants import METRIC_TOTAL_INVENTORY_FORECAST
from ..models.bom import BomEdge, BomIndex
from ..models.inventory_record import InventoryRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeasibilityPoint:
    """
    Producible quantity implied by one child on one day.

    Attributes:
        point_date: Day of the projection
        child_inventory: Child's Tot.Inventory (Forecast) on that day
        ratio: Child units consumed per parent unit
        max_producible_units: child_inventory / ratio
    """
    point_date: Date
    child_inventory: float
    ratio: float
    max_producible_units: float

    def __str__(self) -> str:
        return f"{self.point_date}: {self.max_producible_units:,.0f} units"


@dataclass
class ChildFeasibility:
    """
    Feasibility series contributed by one BOM child.

    Attributes:
        child_item: Child item code
        ratio: Consumption ratio from the BOM
        points: Day-ordered projection points (empty when infeasible)
        is_feasible: False when the ratio cannot be divided by
        reason: Explanation when infeasible
    """
    child_item: str
    ratio: float
    points: List[FeasibilityPoint] = field(default_factory=list)
    is_feasible: bool = True
    reason: str = ""

    def __str__(self) -> str:
        if self.is_feasible:
            return f"{self.child_item}: {len(self.points)} days"
        return f"{self.child_item}: infeasible ({self.reason})"


@dataclass
class FeasibilityProjection:
    """
    Feasibility series for one selected finished good.

    An empty ``children`` mapping means the BOM lists no children for the
    item; callers should show an explicit "no BOM" state rather than an
    empty chart.

    Attributes:
        parent_item: Selected finished good
        location_code: Selected inventory organisation
        children: Child item -> ChildFeasibility, in BOM order
    """
    parent_item: str
    location_code: str
    children: Dict[str, ChildFeasibility] = field(default_factory=OrderedDict)

    @property
    def has_bom(self) -> bool:
        return bool(self.children)

    @property
    def infeasible_children(self) -> Set[str]:
        """Children whose ratio cannot be divided by."""
        return {code for code, child in self.children.items() if not child.is_feasible}

    def series(self) -> Dict[str, List[FeasibilityPoint]]:
        """Child item -> projection points, for feasible children only."""
        return {
            code: list(child.points)
            for code, child in self.children.items()
            if child.is_feasible
        }

    def bottleneck(self) -> Dict[Date, float]:
        """
        Per-day minimum producible quantity across children.

        Only days with at least one point contribute. This is a convenience
        reduction; the projection itself does not aggregate children.

        Returns:
            Date -> minimum max_producible_units, in date order
        """
        minimum: Dict[Date, float] = {}
        for child in self.children.values():
            for point in child.points:
                current = minimum.get(point.point_date)
                if current is None or point.max_producible_units < current:
                    minimum[point.point_date] = point.max_producible_units
        return dict(sorted(minimum.items()))

    def to_dataframe(self) -> pd.DataFrame:
        """Projection as a DataFrame: dates as rows, one column per child."""
        columns = {
            code: pd.Series({p.point_date: p.max_producible_units for p in points}, dtype=float)
            for code, points in self.series().items()
        }
        if not columns:
            return pd.DataFrame(index=pd.Index([], name='date'))
        df = pd.DataFrame(columns).sort_index()
        df.index.name = 'date'
        return df


class BomFeasibilityProjector:
    """
    Joins a finished good's series with its children's inventory forecasts.

    For each direct child ``c`` of the selected parent and each day present
    in both the parent's series and ``c``'s inventory forecast:

        max_producible_units = child_inventory / ratio

    A ratio of zero (or less) never divides; the child is reported as
    infeasible and contributes no points.
    """

    def __init__(self, bom: Union[BomIndex, Iterable[BomEdge]]):
        """
        Initialize projector.

        Args:
            bom: BomIndex, or BOM edges to index
        """
        self.bom = bom if isinstance(bom, BomIndex) else BomIndex(bom)

    def project(
        self,
        records: Iterable[InventoryRecord],
        item_code: str,
        location_code: str,
    ) -> FeasibilityProjection:
        """
        Project producible quantities for a selected finished good.

        Child inventory is read at the selected location. BOM rows scoped to
        a different plant are ignored.

        Args:
            records: Record set to read parent and child series from
                (already date-filtered by the caller)
            item_code: Selected finished good
            location_code: Selected inventory organisation

        Returns:
            FeasibilityProjection (no children when the item has no BOM)
        """
        projection = FeasibilityProjection(parent_item=item_code, location_code=location_code)

        edges = self.bom.edges_for_parent(item_code, location_code)
        if not edges:
            logger.info(f"No BOM children for {item_code} at {location_code}")
            return projection

        child_codes = {edge.child_item for edge in edges}
        parent_dates: Set[Date] = set()
        child_inventory: Dict[str, Dict[Date, float]] = defaultdict(lambda: defaultdict(float))

        for record in records:
            if record.record_date is None or record.location_code != location_code:
                continue
            if record.item_code == item_code:
                parent_dates.add(record.record_date)
            if record.item_code in child_codes and record.metric_name == METRIC_TOTAL_INVENTORY_FORECAST:
                child_inventory[record.item_code][record.record_date] += record.value

        for edge in edges:
            if edge.child_item in projection.children:
                logger.debug(f"Duplicate BOM row ignored: {edge}")
                continue
            projection.children[edge.child_item] = self._project_child(
                edge, parent_dates, child_inventory.get(edge.child_item, {})
            )

        return projection

    @staticmethod
    def _project_child(
        edge: BomEdge,
        parent_dates: Set[Date],
        inventory_by_date: Dict[Date, float],
    ) -> ChildFeasibility:
        if not edge.is_feasible_ratio:
            logger.warning(f"BOM ratio {edge.ratio:g} for {edge.parent_item} -> {edge.child_item} is not usable")
            return ChildFeasibility(
                child_item=edge.child_item,
                ratio=edge.ratio,
                is_feasible=False,
                reason=f"ratio must be > 0, got {edge.ratio:g}",
            )

        points = [
            FeasibilityPoint(
                point_date=day,
                child_inventory=inventory_by_date[day],
                ratio=edge.ratio,
                max_producible_units=inventory_by_date[day] / edge.ratio,
            )
            for day in sorted(parent_dates & set(inventory_by_date))
        ]
        return ChildFeasibility(child_item=edge.child_item, ratio=edge.ratio, points=points)
