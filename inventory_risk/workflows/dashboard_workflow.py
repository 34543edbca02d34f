"""Dashboard workflow: one full re-derivation of every engine output.

Every call to ``RiskDashboardWorkflow.run`` starts from the raw record and
BOM snapshots; nothing computed by an earlier run is reused, so a changed
input (filters, date range, selection, graph configuration) always yields
consistent output.
"""

from dataclasses import dataclass, field
from datetime import date as Date
from typing import List, Optional, Union
import logging

from ..analysis.lead_time import DEFAULT_LEAD_TIME_POLICY, LeadTimePolicy
from ..analysis.risk_ranker import RiskFilterConfig, SortStrategy
from ..analysis.risk_timeline import RiskTimelineBuilder
from ..data.record_filter import RecordFilter
from ..data.record_store import MetricPivot, RecordStore
from ..models.bom import BomEdge, BomIndex
from ..models.inventory_record import InventoryRecord
from ..models.risk import ItemRiskGroup
from ..network.graph_builder import GraphConfig, RelationshipGraph, RelationshipGraphBuilder
from ..production.feasibility import BomFeasibilityProjector, FeasibilityProjection

logger = logging.getLogger(__name__)


@dataclass
class DashboardInputs:
    """Everything one dashboard recomputation depends on.

    Attributes:
        records: Parsed inventory records
        bom_edges: Parsed BOM table
        record_filter: Categorical filters and date range
        risk_filter: Block filter for the risk timeline
        sort_strategy: Ordering of the risk timeline
        graph_config: Relationship graph configuration
        selected_item_code: Item selected for the detail views (optional)
        selected_location_code: Location of the selected item (optional)
        reference_date: Day lead-time horizons start from (None = today)
        lead_time_policy: Lead-time lookup
    """
    records: List[InventoryRecord]
    bom_edges: List[BomEdge] = field(default_factory=list)
    record_filter: RecordFilter = field(default_factory=RecordFilter)
    risk_filter: RiskFilterConfig = field(default_factory=RiskFilterConfig)
    sort_strategy: Union[SortStrategy, str] = SortStrategy.ITEM_CODE
    graph_config: GraphConfig = field(default_factory=GraphConfig)
    selected_item_code: Optional[str] = None
    selected_location_code: Optional[str] = None
    reference_date: Optional[Date] = None
    lead_time_policy: LeadTimePolicy = DEFAULT_LEAD_TIME_POLICY

    def __post_init__(self):
        """Validate configuration."""
        self.sort_strategy = SortStrategy(self.sort_strategy)
        if (self.selected_item_code is None) != (self.selected_location_code is None):
            raise ValueError(
                "selected_item_code and selected_location_code must be given together"
            )

    @property
    def has_selection(self) -> bool:
        return self.selected_item_code is not None


@dataclass
class DashboardResult:
    """Outputs of one dashboard recomputation.

    Attributes:
        reference_date: Day lead-time horizons were computed from
        filtered_record_count: Records passing the record filter
        risk_groups: Ordered item risk groups for the timeline
        graph: Relationship graph for the network view
        pivot: Metric-by-date pivot of the selected item (None without a selection)
        feasibility: BOM feasibility of the selected item (None without a selection)
    """
    reference_date: Date
    filtered_record_count: int
    risk_groups: List[ItemRiskGroup] = field(default_factory=list)
    graph: RelationshipGraph = field(default_factory=RelationshipGraph)
    pivot: Optional[MetricPivot] = None
    feasibility: Optional[FeasibilityProjection] = None

    @property
    def is_empty(self) -> bool:
        return self.filtered_record_count == 0


class RiskDashboardWorkflow:
    """Recomputes the dashboard from scratch.

    Workflow Execution Steps:
        1. Filter records by the categorical filters and date range
        2. Build, filter and rank the risk timeline
        3. Build the selected item's pivot and feasibility projection
        4. Build the relationship graph

    Example:
        workflow = RiskDashboardWorkflow()
        result = workflow.run(DashboardInputs(records=records, bom_edges=bom))
    """

    def run(self, inputs: DashboardInputs) -> DashboardResult:
        """Run every step and collect the outputs.

        Args:
            inputs: Dashboard inputs

        Returns:
            DashboardResult
        """
        reference_date = inputs.reference_date or Date.today()
        store = RecordStore(inputs.records)
        bom = BomIndex(inputs.bom_edges)

        logger.info(f"Starting dashboard recomputation ({len(store)} records, {len(bom)} BOM rows)")

        # Step 1: Filter records
        logger.info(f"Step 1: Filtering records with {inputs.record_filter}")
        filtered = store.filter(inputs.record_filter)

        # Step 2: Risk timeline
        logger.info("Step 2: Building risk timeline")
        builder = RiskTimelineBuilder(inputs.lead_time_policy, reference_date)
        risk_groups = builder.build(filtered, inputs.risk_filter, inputs.sort_strategy)

        # Step 3: Selected item detail
        pivot = None
        feasibility = None
        if inputs.has_selection:
            logger.info(
                f"Step 3: Building detail views for "
                f"{inputs.selected_item_code}@{inputs.selected_location_code}"
            )
            pivot, feasibility = self._selection_views(store, bom, inputs)
        else:
            logger.info("Step 3: Skipping detail views (no selection)")

        # Step 4: Relationship graph
        logger.info("Step 4: Building relationship graph")
        graph = RelationshipGraphBuilder(filtered, bom).build(inputs.graph_config)

        result = DashboardResult(
            reference_date=reference_date,
            filtered_record_count=len(filtered),
            risk_groups=risk_groups,
            graph=graph,
            pivot=pivot,
            feasibility=feasibility,
        )
        logger.info(
            f"Dashboard recomputed: {len(risk_groups)} risk groups, "
            f"{len(graph.nodes)} graph nodes"
        )
        return result

    def _selection_views(self, store: RecordStore, bom: BomIndex, inputs: DashboardInputs):
        start_date = inputs.record_filter.start_date
        end_date = inputs.record_filter.end_date

        pivot = store.metric_pivot(
            inputs.selected_item_code, inputs.selected_location_code, start_date, end_date
        )

        # Children are not narrowed by the categorical filters, only by dates
        in_range = store.filter(RecordFilter(start_date=start_date, end_date=end_date))
        feasibility = BomFeasibilityProjector(bom).project(
            in_range, inputs.selected_item_code, inputs.selected_location_code
        )
        return pivot, feasibility
