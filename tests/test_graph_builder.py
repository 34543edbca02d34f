"""Tests for the relationship graph builder."""

import pytest
import networkx as nx
from datetime import date

from inventory_risk.constants import (
    CLUSTER_EDGE_WEIGHT,
    LAYOUT_LANE_HEIGHT,
    LAYOUT_WIDTH,
    METRIC_TOTAL_INVENTORY_FORECAST,
    METRIC_TOTAL_REQUIREMENT,
)
from inventory_risk.models import ItemType, LinkingDimension, NodeCategory, RelationKind
from inventory_risk.network import (
    GraphConfig,
    RelationshipGraphBuilder,
    layout_position,
)


DAY1 = date(2025, 11, 19)


@pytest.fixture
def network_records(sample_records, make_record):
    """Fixture for the sample plus DC stock and one unrelated raw material."""
    return sample_records + [
        make_record(item_code="AAG620-MR2", location_code="VNHCDM", record_date=DAY1, value=1200),
        make_record(item_code="AAG620-MR2", location_code="VNHCDM", record_date=DAY1,
                    metric_name=METRIC_TOTAL_REQUIREMENT, value=-300),
        make_record(item_code="ZZZ-RM", location_code="MYBGPM", record_date=DAY1, value=50,
                    item_type=ItemType.RAW_MATERIAL, item_class="ORPH", strategy="MTO"),
    ]


@pytest.fixture
def builder(network_records, sample_bom):
    """Fixture for a builder over the network records and default BOM."""
    return RelationshipGraphBuilder(network_records, sample_bom)


class TestGraphConfig:
    """Tests for GraphConfig."""

    def test_string_dimension(self):
        """Test that dimension names are accepted as strings."""
        assert GraphConfig(linking_dimension="strategy").linking_dimension == LinkingDimension.STRATEGY

    def test_unknown_dimension_rejected(self):
        """Test that an unknown linking dimension is an error."""
        with pytest.raises(ValueError):
            GraphConfig(linking_dimension="colour")

    def test_metric_selector(self):
        """Test metric selection, including the 'All' sentinel."""
        assert GraphConfig().includes_metric("anything")
        assert GraphConfig(metric_selector="All").includes_metric("anything")
        selected = GraphConfig(metric_selector="Tot.Req.")
        assert selected.includes_metric("Tot.Req.")
        assert not selected.includes_metric("Tot.Target Inv.")


class TestNodes:
    """Tests for node construction."""

    def test_item_and_dc_nodes(self, builder):
        """Test one node per (item, location) plus one per DC present."""
        graph = builder.build()

        assert graph.node_ids == [
            "AAG620-MR2|MYBGPM",
            "BAB250-MR1|MYBGPM",
            "AAG620-MR2|VNHCDM",
            "ZZZ-RM|MYBGPM",
            "DC|VNHCDM",
        ]
        assert graph.node("AAG620-MR2|MYBGPM").category == NodeCategory.FINISHED_GOOD
        assert graph.node("BAB250-MR1|MYBGPM").category == NodeCategory.RAW_MATERIAL
        assert graph.node("DC|VNHCDM").category == NodeCategory.DISTRIBUTION_CENTER
        assert graph.node("DC|VNHCDM").label == "VNHCDM"

    def test_selected_metric_aggregation(self, builder):
        """Test that only the selected metric accumulates."""
        graph = builder.build(GraphConfig(metric_selector=METRIC_TOTAL_INVENTORY_FORECAST))

        node = graph.node("AAG620-MR2|MYBGPM")
        assert node.aggregated_metric_value == pytest.approx(5000.0)
        assert node.per_metric_totals == {METRIC_TOTAL_INVENTORY_FORECAST: pytest.approx(5000.0)}

    def test_all_metrics_aggregation(self, builder):
        """Test that all metrics combine into the aggregate and per-metric totals."""
        node = builder.build().node("BAB250-MR1|MYBGPM")

        assert node.aggregated_metric_value == pytest.approx(10900.0)
        assert node.per_metric_totals == {
            "Tot.Inventory (Forecast)": pytest.approx(4900.0),
            "Tot.Target Inv.": pytest.approx(6000.0),
        }


class TestEdges:
    """Tests for flow, BOM and cluster edges."""

    def edge_map(self, graph):
        return {(e.source_id, e.target_id, e.relation_kind): e.weight for e in graph.edges}

    def test_flow_edges(self, builder):
        """Test item -> DC flow edges weighted by absolute metric totals."""
        edges = self.edge_map(builder.build())

        flow = RelationKind.DIRECT_BOM_OR_FLOW
        assert edges[("AAG620-MR2|MYBGPM", "DC|VNHCDM", flow)] == pytest.approx(1500.0)
        assert edges[("AAG620-MR2|VNHCDM", "DC|VNHCDM", flow)] == pytest.approx(1500.0)

    def test_flow_edge_weight_floor(self, make_record):
        """Test that a zero-valued flow edge keeps weight 1."""
        records = [make_record(item_code="FG9", location_code="THBNDM", value=0.0)]

        graph = RelationshipGraphBuilder(records).build()

        assert [(e.target_id, e.weight) for e in graph.edges] == [("DC|THBNDM", 1.0)]

    def test_bom_edge(self, builder):
        """Test that the BOM child links to its parent at the same location."""
        edges = self.edge_map(builder.build())

        weight = edges[("BAB250-MR1|MYBGPM", "AAG620-MR2|MYBGPM", RelationKind.DIRECT_BOM_OR_FLOW)]
        assert weight == pytest.approx(10900.0 * 0.5)

    def test_two_member_cluster_is_one_edge(self, builder):
        """Test that a two-member item-class group yields a single edge."""
        graph = builder.build()

        cluster = [e for e in graph.edges if e.relation_kind == RelationKind.CLUSTER_SAME_CLASS]
        assert [(e.source_id, e.target_id, e.weight) for e in cluster] == [
            ("AAG620-MR2|MYBGPM", "AAG620-MR2|VNHCDM", CLUSTER_EDGE_WEIGHT),
        ]

    def test_strategy_ring(self, builder):
        """Test a closed ring over a three-member strategy group."""
        graph = builder.build(GraphConfig(linking_dimension=LinkingDimension.STRATEGY))

        cluster = [
            (e.source_id, e.target_id)
            for e in graph.edges
            if e.relation_kind == RelationKind.CLUSTER_SAME_STRATEGY
        ]
        assert cluster == [
            ("AAG620-MR2|MYBGPM", "BAB250-MR1|MYBGPM"),
            ("BAB250-MR1|MYBGPM", "AAG620-MR2|VNHCDM"),
            ("AAG620-MR2|VNHCDM", "AAG620-MR2|MYBGPM"),
        ]

    def test_ring_cap(self, make_record):
        """Test that large groups are capped at eight ring members."""
        records = [make_record(item_code=f"I{n:02d}", location_code="X") for n in range(10)]

        graph = RelationshipGraphBuilder(records).build()

        assert len(graph.edges) == 8
        members = {e.source_id for e in graph.edges} | {e.target_id for e in graph.edges}
        assert members == {f"I{n:02d}|X" for n in range(8)}

    def test_degree(self, builder):
        """Test degrees from edge incidence."""
        graph = builder.build()

        degrees = {node.id: node.degree for node in graph.nodes}
        assert degrees == {
            "AAG620-MR2|MYBGPM": 3,
            "BAB250-MR1|MYBGPM": 1,
            "AAG620-MR2|VNHCDM": 2,
            "ZZZ-RM|MYBGPM": 0,
            "DC|VNHCDM": 2,
        }


class TestOrphansAndLayout:
    """Tests for orphan hiding, layout and export."""

    def test_hide_orphans(self, builder):
        """Test that the isolated node disappears and connected nodes are untouched."""
        shown = builder.build(GraphConfig(hide_orphans=False))
        hidden = builder.build(GraphConfig(hide_orphans=True))

        assert "ZZZ-RM|MYBGPM" in shown.node_ids
        assert "ZZZ-RM|MYBGPM" not in hidden.node_ids
        assert hidden.nodes == [n for n in shown.nodes if n.id != "ZZZ-RM|MYBGPM"]
        assert hidden.edges == shown.edges

    def test_positions_deterministic(self, builder):
        """Test that identical inputs produce identical positions."""
        first = builder.build()
        second = RelationshipGraphBuilder(builder.records, builder.bom).build()

        assert [(n.id, n.x, n.y) for n in first.nodes] == [(n.id, n.x, n.y) for n in second.nodes]

    def test_positions_in_category_lanes(self, builder):
        """Test that each category occupies its own horizontal band."""
        lanes = {
            NodeCategory.RAW_MATERIAL: 0,
            NodeCategory.FINISHED_GOOD: 1,
            NodeCategory.DISTRIBUTION_CENTER: 2,
        }

        for node in builder.build().nodes:
            lane = lanes[node.category]
            assert lane * LAYOUT_LANE_HEIGHT <= node.y < (lane + 1) * LAYOUT_LANE_HEIGHT
            assert 0 <= node.x < LAYOUT_WIDTH

    def test_layout_position_depends_on_id(self):
        """Test that different ids spread out within a lane."""
        a = layout_position("A|X", NodeCategory.OTHER)
        b = layout_position("B|X", NodeCategory.OTHER)

        assert a != b
        assert a == layout_position("A|X", NodeCategory.OTHER)

    def test_to_networkx(self, builder):
        """Test the NetworkX export."""
        graph = builder.build()

        nx_graph = graph.to_networkx()

        assert nx_graph.number_of_nodes() == 5
        assert nx_graph.number_of_edges() == len(graph.edges)
        assert list(nx.isolates(nx_graph)) == ["ZZZ-RM|MYBGPM"]
        assert nx_graph.nodes["DC|VNHCDM"]["category"] == "DC"

    def test_empty_records(self):
        """Test that no records give an empty graph."""
        graph = RelationshipGraphBuilder([]).build(GraphConfig(hide_orphans=True))

        assert graph.nodes == []
        assert graph.edges == []
