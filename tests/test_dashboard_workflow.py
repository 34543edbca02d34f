"""Tests for the dashboard recomputation workflow."""

import pytest
from datetime import date

from inventory_risk.analysis import SortStrategy
from inventory_risk.constants import METRIC_TOTAL_INVENTORY_FORECAST
from inventory_risk.data import RecordFilter
from inventory_risk.network import GraphConfig
from inventory_risk.workflows import DashboardInputs, RiskDashboardWorkflow


DAY1 = date(2025, 11, 19)
DAY2 = date(2025, 11, 20)


@pytest.fixture
def inputs(sample_records, sample_bom, reference_date):
    """Fixture for inputs selecting the sample finished good."""
    return DashboardInputs(
        records=sample_records,
        bom_edges=sample_bom,
        selected_item_code="AAG620-MR2",
        selected_location_code="MYBGPM",
        reference_date=reference_date,
    )


class TestDashboardInputs:
    """Tests for DashboardInputs validation."""

    def test_sort_strategy_string(self, sample_records):
        """Test that the sort strategy accepts its string value."""
        inputs = DashboardInputs(records=sample_records, sort_strategy="duration")

        assert inputs.sort_strategy == SortStrategy.DURATION

    def test_unknown_sort_strategy(self, sample_records):
        """Test that an unknown sort strategy is an error."""
        with pytest.raises(ValueError):
            DashboardInputs(records=sample_records, sort_strategy="random")

    def test_selection_must_be_complete(self, sample_records):
        """Test that an item without a location is rejected."""
        with pytest.raises(ValueError, match="together"):
            DashboardInputs(records=sample_records, selected_item_code="AAG620-MR2")


class TestRiskDashboardWorkflow:
    """Tests for RiskDashboardWorkflow.run."""

    def test_full_run(self, inputs):
        """Test every output for the sample with a selection."""
        result = RiskDashboardWorkflow().run(inputs)

        assert result.reference_date == DAY1
        assert result.filtered_record_count == 13
        assert not result.is_empty
        assert [g.item_code for g in result.risk_groups] == ["AAG620-MR2", "BAB250-MR1"]

        assert result.pivot.dates == [DAY1, DAY2, date(2025, 11, 21)]
        assert result.pivot.get(METRIC_TOTAL_INVENTORY_FORECAST, DAY2) == 400.0

        assert result.feasibility.bottleneck() == {DAY1: 5000.0, DAY2: 4800.0}

        assert result.graph.node_ids == ["AAG620-MR2|MYBGPM", "BAB250-MR1|MYBGPM"]

    def test_no_selection(self, sample_records, reference_date):
        """Test that detail views are absent without a selection."""
        result = RiskDashboardWorkflow().run(
            DashboardInputs(records=sample_records, reference_date=reference_date)
        )

        assert result.pivot is None
        assert result.feasibility is None
        assert len(result.risk_groups) == 2

    def test_categorical_filter_narrows_timeline_not_feasibility(self, inputs):
        """Test that filters narrow the timeline while BOM children stay visible."""
        inputs.record_filter = RecordFilter(item_class="FA")

        result = RiskDashboardWorkflow().run(inputs)

        assert result.filtered_record_count == 4
        assert [g.item_code for g in result.risk_groups] == ["BAB250-MR1"]
        assert result.feasibility.bottleneck() == {DAY1: 5000.0, DAY2: 4800.0}

    def test_date_range(self, inputs):
        """Test that the date range bounds every view."""
        inputs.record_filter = RecordFilter(start_date=DAY2, end_date=DAY2)

        result = RiskDashboardWorkflow().run(inputs)

        assert result.pivot.dates == [DAY2]
        assert result.feasibility.bottleneck() == {DAY2: 4800.0}
        assert all(
            block.start_date == DAY2 and block.end_date == DAY2
            for group in result.risk_groups
            for block in group.blocks
        )

    def test_graph_config_applied(self, inputs):
        """Test that the graph configuration reaches the graph builder."""
        inputs.graph_config = GraphConfig(metric_selector=METRIC_TOTAL_INVENTORY_FORECAST)

        result = RiskDashboardWorkflow().run(inputs)

        assert result.graph.node("BAB250-MR1|MYBGPM").aggregated_metric_value == pytest.approx(4900.0)

    def test_empty_records(self, reference_date):
        """Test that no records give empty outputs."""
        result = RiskDashboardWorkflow().run(
            DashboardInputs(records=[], reference_date=reference_date)
        )

        assert result.is_empty
        assert result.risk_groups == []
        assert result.graph.nodes == []

    def test_idempotent(self, inputs):
        """Test that two runs over the same inputs give equal results."""
        workflow = RiskDashboardWorkflow()

        first = workflow.run(inputs)
        second = workflow.run(inputs)

        assert first.risk_groups == second.risk_groups
        assert first.pivot == second.pivot
        assert first.graph.nodes == second.graph.nodes
        assert first.graph.edges == second.graph.edges
        assert first.feasibility.bottleneck() == second.feasibility.bottleneck()
