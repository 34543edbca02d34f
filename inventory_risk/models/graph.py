"""Relationship graph data models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict


class NodeCategory(str, Enum):
    """Lane a node is drawn in."""
    RAW_MATERIAL = "RM"
    FINISHED_GOOD = "FG"
    DISTRIBUTION_CENTER = "DC"
    OTHER = "Other"


class RelationKind(str, Enum):
    """Why two nodes are connected."""
    DIRECT_BOM_OR_FLOW = "DirectBomOrFlow"
    CLUSTER_SAME_CLASS = "ClusterSameClass"
    CLUSTER_SAME_STRATEGY = "ClusterSameStrategy"


class LinkingDimension(str, Enum):
    """Record attribute used to cluster item nodes."""
    ITEM_CLASS = "item_class"
    STRATEGY = "strategy"

    @property
    def relation_kind(self) -> RelationKind:
        """Relation kind of the cluster edges this dimension produces."""
        if self == LinkingDimension.ITEM_CLASS:
            return RelationKind.CLUSTER_SAME_CLASS
        return RelationKind.CLUSTER_SAME_STRATEGY


@dataclass
class GraphNode:
    """
    Node of the relationship graph.

    Attributes:
        id: Node identifier ("ITEM|LOC" for items, "DC|LOC" for DCs)
        label: Display label
        category: Lane the node belongs to
        location_code: Inventory organisation of the node
        aggregated_metric_value: Sum of the selected metric(s)
        per_metric_totals: Metric name -> summed value
        degree: Number of incident edges
        x: Horizontal layout position
        y: Vertical layout position
    """
    id: str
    label: str
    category: NodeCategory
    location_code: str
    aggregated_metric_value: float = 0.0
    per_metric_totals: Dict[str, float] = field(default_factory=dict)
    degree: int = 0
    x: float = 0.0
    y: float = 0.0

    def __str__(self) -> str:
        return f"{self.id} [{self.category.value}] degree={self.degree}"


@dataclass
class GraphEdge:
    """
    Edge of the relationship graph.

    Attributes:
        source_id: Source node id
        target_id: Target node id
        weight: Accumulated absolute metric value, or a fixed
            constant for cluster edges
        relation_kind: Why the nodes are connected
    """
    source_id: str
    target_id: str
    weight: float
    relation_kind: RelationKind

    def __str__(self) -> str:
        return f"{self.source_id} -> {self.target_id} ({self.relation_kind.value}, {self.weight:g})"
