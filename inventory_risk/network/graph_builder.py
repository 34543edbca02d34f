"""
Relationship graph builder for the network view.

This module derives a raw material -> finished good -> distribution center
graph from the filtered inventory records and the BOM table, and exports it
as a NetworkX multigraph for degree and neighbourhood analysis.

Node ids:
    "ITEM|LOC"  one node per distinct (item, location) in the records
    "DC|LOC"    one node per distribution center present in the records

Edges:
    flow     item node -> DC node wherever the item has records at that DC
    BOM      child node -> parent node at the same location
    cluster  small rings joining items that share an item class or strategy
"""

from collections import OrderedDict, defaultdict
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple, Union
import hashlib
import logging

import networkx as nx

from ..constants import (
    ALL,
    CLUSTER_EDGE_WEIGHT,
    CLUSTER_RING_CAP,
    DISTRIBUTION_CENTER_LOCATIONS,
    LAYOUT_LANE_FILL,
    LAYOUT_LANE_HEIGHT,
    LAYOUT_WIDTH,
    MIN_FLOW_EDGE_WEIGHT,
)
from ..models.bom import BomEdge, BomIndex
from ..models.graph import GraphEdge, GraphNode, LinkingDimension, NodeCategory, RelationKind
from ..models.inventory_record import InventoryRecord, ItemType

logger = logging.getLogger(__name__)


#: Vertical lane of each node category, top to bottom
_LANE_INDEX = {
    NodeCategory.RAW_MATERIAL: 0,
    NodeCategory.FINISHED_GOOD: 1,
    NodeCategory.DISTRIBUTION_CENTER: 2,
    NodeCategory.OTHER: 3,
}


@dataclass
class GraphConfig:
    """
    Configuration of one relationship graph build.

    Attributes:
        linking_dimension: Attribute used to cluster item nodes
        metric_selector: Metric to aggregate; None or "All" combines
            every metric
        hide_orphans: Drop nodes without incident edges
        distribution_centers: Locations that get a DC endpoint node
    """
    linking_dimension: LinkingDimension = LinkingDimension.ITEM_CLASS
    metric_selector: Optional[str] = None
    hide_orphans: bool = False
    distribution_centers: FrozenSet[str] = DISTRIBUTION_CENTER_LOCATIONS

    def __post_init__(self):
        """Validate configuration."""
        # Raises ValueError for an unknown dimension string
        self.linking_dimension = LinkingDimension(self.linking_dimension)
        if self.metric_selector is not None:
            self.metric_selector = self.metric_selector.strip() or None
        self.distribution_centers = frozenset(self.distribution_centers)

    @property
    def combines_all_metrics(self) -> bool:
        return self.metric_selector is None or self.metric_selector == ALL

    def includes_metric(self, metric_name: str) -> bool:
        """Check whether a metric contributes to node and edge values."""
        return self.combines_all_metrics or metric_name == self.metric_selector


@dataclass
class RelationshipGraph:
    """
    Positioned node/edge graph for the network view.

    Attributes:
        nodes: Graph nodes in discovery order (DC nodes last)
        edges: Graph edges (flow, BOM, then cluster)
    """
    nodes: List[GraphNode] = field(default_factory=list)
    edges: List[GraphEdge] = field(default_factory=list)

    def node(self, node_id: str) -> Optional[GraphNode]:
        """Look up a node by id."""
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    @property
    def node_ids(self) -> List[str]:
        return [node.id for node in self.nodes]

    def to_networkx(self) -> nx.MultiGraph:
        """
        Export the graph to NetworkX.

        A multigraph keeps a BOM edge and a cluster edge between the same
        pair of items as two edges, so degrees match edge incidence.

        Returns:
            MultiGraph with node and edge attributes
        """
        graph = nx.MultiGraph()
        for node in self.nodes:
            graph.add_node(
                node.id,
                label=node.label,
                category=node.category.value,
                location_code=node.location_code,
                aggregated_metric_value=node.aggregated_metric_value,
                x=node.x,
                y=node.y,
            )
        for edge in self.edges:
            graph.add_edge(
                edge.source_id,
                edge.target_id,
                weight=edge.weight,
                relation_kind=edge.relation_kind.value,
            )
        return graph

    def __str__(self) -> str:
        return f"RelationshipGraph({len(self.nodes)} nodes, {len(self.edges)} edges)"


def layout_position(node_id: str, category: NodeCategory) -> Tuple[float, float]:
    """
    Deterministic pseudo-layout position of a node.

    The md5 digest of the node id gives a horizontal position in
    [0, LAYOUT_WIDTH) and a vertical offset inside the category's lane.

    Args:
        node_id: Node identifier
        category: Node category (selects the lane)

    Returns:
        (x, y)
    """
    digest = hashlib.md5(node_id.encode('utf-8')).digest()
    hx = int.from_bytes(digest[:8], 'big') / 2 ** 64
    hy = int.from_bytes(digest[8:], 'big') / 2 ** 64

    lane_top = _LANE_INDEX[category] * LAYOUT_LANE_HEIGHT
    margin = (1 - LAYOUT_LANE_FILL) / 2 * LAYOUT_LANE_HEIGHT
    return hx * LAYOUT_WIDTH, lane_top + margin + hy * LAYOUT_LANE_FILL * LAYOUT_LANE_HEIGHT


def item_node_id(item_code: str, location_code: str) -> str:
    return f"{item_code}|{location_code}"


def dc_node_id(location_code: str) -> str:
    return f"DC|{location_code}"


class RelationshipGraphBuilder:
    """
    Builds the relationship graph from records and a BOM table.

    Every build starts from scratch; no node identity is kept between
    builds.

    Example:
        builder = RelationshipGraphBuilder(records, bom_edges)
        graph = builder.build(GraphConfig(hide_orphans=True))
    """

    def __init__(
        self,
        records: Iterable[InventoryRecord],
        bom: Union[BomIndex, Iterable[BomEdge]] = (),
    ):
        """
        Initialize graph builder.

        Args:
            records: Filtered record set
            bom: BomIndex, or BOM edges to index
        """
        self.records = list(records)
        self.bom = bom if isinstance(bom, BomIndex) else BomIndex(bom)

    def build(self, config: Optional[GraphConfig] = None) -> RelationshipGraph:
        """
        Build the positioned relationship graph.

        Args:
            config: Graph configuration (default: item-class linking,
                all metrics, orphans shown)

        Returns:
            RelationshipGraph
        """
        config = config or GraphConfig()

        item_nodes, link_values = self._build_item_nodes(config)
        dc_nodes = self._build_dc_nodes(config)

        edges = (
            self._build_flow_edges(config, dc_nodes)
            + self._build_bom_edges(item_nodes)
            + self._build_cluster_edges(config, link_values)
        )
        graph = RelationshipGraph(
            nodes=list(item_nodes.values()) + list(dc_nodes.values()),
            edges=edges,
        )

        nx_graph = graph.to_networkx()
        for node in graph.nodes:
            node.degree = nx_graph.degree(node.id)
            node.x, node.y = layout_position(node.id, node.category)

        if config.hide_orphans:
            orphans = set(nx.isolates(nx_graph))
            if orphans:
                logger.debug(f"Hiding {len(orphans)} orphan node(s)")
            graph.nodes = [node for node in graph.nodes if node.id not in orphans]
            kept = set(graph.node_ids)
            graph.edges = [
                edge for edge in graph.edges
                if edge.source_id in kept and edge.target_id in kept
            ]

        logger.info(f"Built {graph} ({config.linking_dimension.value} linking)")
        return graph

    def _build_item_nodes(
        self, config: GraphConfig
    ) -> Tuple[Dict[str, GraphNode], Dict[str, str]]:
        nodes: Dict[str, GraphNode] = OrderedDict()
        link_values: Dict[str, str] = {}

        for record in self.records:
            node_id = item_node_id(record.item_code, record.location_code)
            node = nodes.get(node_id)
            if node is None:
                node = nodes[node_id] = GraphNode(
                    id=node_id,
                    label=record.item_code,
                    category=_item_category(record.item_type),
                    location_code=record.location_code,
                )
                link_values[node_id] = getattr(record, config.linking_dimension.value)
            _accumulate(node, record, config)

        return nodes, link_values

    def _build_dc_nodes(self, config: GraphConfig) -> Dict[str, GraphNode]:
        nodes: Dict[str, GraphNode] = OrderedDict()

        for record in self.records:
            if record.location_code not in config.distribution_centers:
                continue
            node_id = dc_node_id(record.location_code)
            node = nodes.get(node_id)
            if node is None:
                node = nodes[node_id] = GraphNode(
                    id=node_id,
                    label=record.location_code,
                    category=NodeCategory.DISTRIBUTION_CENTER,
                    location_code=record.location_code,
                )
            _accumulate(node, record, config)

        return nodes

    def _build_flow_edges(
        self, config: GraphConfig, dc_nodes: Dict[str, GraphNode]
    ) -> List[GraphEdge]:
        locations_by_item: Dict[str, List[str]] = OrderedDict()
        # item -> DC location -> accumulated absolute metric value
        flow_by_item: Dict[str, Dict[str, float]] = defaultdict(OrderedDict)

        for record in self.records:
            locations = locations_by_item.setdefault(record.item_code, [])
            if record.location_code not in locations:
                locations.append(record.location_code)
            if dc_node_id(record.location_code) not in dc_nodes:
                continue
            totals = flow_by_item[record.item_code]
            contribution = abs(record.value) if config.includes_metric(record.metric_name) else 0.0
            totals[record.location_code] = totals.get(record.location_code, 0.0) + contribution

        edges = []
        for item_code, locations in locations_by_item.items():
            for location_code in locations:
                for dc_location, total in flow_by_item.get(item_code, {}).items():
                    edges.append(GraphEdge(
                        source_id=item_node_id(item_code, location_code),
                        target_id=dc_node_id(dc_location),
                        weight=max(MIN_FLOW_EDGE_WEIGHT, total),
                        relation_kind=RelationKind.DIRECT_BOM_OR_FLOW,
                    ))
        return edges

    def _build_bom_edges(self, item_nodes: Dict[str, GraphNode]) -> List[GraphEdge]:
        locations_by_item: Dict[str, List[str]] = defaultdict(list)
        for node in item_nodes.values():
            locations_by_item[node.label].append(node.location_code)

        edges = []
        seen = set()
        for bom_edge in self.bom.edges:
            if bom_edge.parent_item == bom_edge.child_item:
                logger.warning(f"Skipping self-referencing BOM row: {bom_edge}")
                continue
            for location_code in locations_by_item.get(bom_edge.child_item, []):
                if not bom_edge.applies_to(location_code):
                    continue
                source_id = item_node_id(bom_edge.child_item, location_code)
                target_id = item_node_id(bom_edge.parent_item, location_code)
                if target_id not in item_nodes or (source_id, target_id) in seen:
                    continue
                seen.add((source_id, target_id))
                child_value = abs(item_nodes[source_id].aggregated_metric_value)
                edges.append(GraphEdge(
                    source_id=source_id,
                    target_id=target_id,
                    weight=max(MIN_FLOW_EDGE_WEIGHT, child_value * bom_edge.ratio),
                    relation_kind=RelationKind.DIRECT_BOM_OR_FLOW,
                ))
        return edges

    def _build_cluster_edges(
        self, config: GraphConfig, link_values: Dict[str, str]
    ) -> List[GraphEdge]:
        groups: Dict[str, List[str]] = OrderedDict()
        for node_id, value in link_values.items():
            if value:
                groups.setdefault(value, []).append(node_id)

        relation_kind = config.linking_dimension.relation_kind
        edges = []
        for members in groups.values():
            ring = members[:CLUSTER_RING_CAP]
            if len(ring) < 2:
                continue
            pairs = list(zip(ring, ring[1:]))
            if len(ring) > 2:
                pairs.append((ring[-1], ring[0]))
            edges.extend(
                GraphEdge(
                    source_id=source_id,
                    target_id=target_id,
                    weight=CLUSTER_EDGE_WEIGHT,
                    relation_kind=relation_kind,
                )
                for source_id, target_id in pairs
            )
        return edges


def _item_category(item_type: ItemType) -> NodeCategory:
    if item_type == ItemType.RAW_MATERIAL:
        return NodeCategory.RAW_MATERIAL
    if item_type == ItemType.FINISHED_GOOD:
        return NodeCategory.FINISHED_GOOD
    return NodeCategory.OTHER


def _accumulate(node: GraphNode, record: InventoryRecord, config: GraphConfig) -> None:
    if not config.includes_metric(record.metric_name):
        return
    node.aggregated_metric_value += record.value
    node.per_metric_totals[record.metric_name] = (
        node.per_metric_totals.get(record.metric_name, 0.0) + record.value
    )
