"""Data models for the inventory risk engine."""

from .inventory_record import InventoryRecord, ItemType
from .metrics import MetricBucket
from .risk import RiskState, ShortageBlock, ItemRiskGroup, NO_OUTSIDE_LEAD_TIME_RISK
from .bom import BomEdge, BomIndex
from .graph import NodeCategory, RelationKind, LinkingDimension, GraphNode, GraphEdge

__all__ = [
    # Records
    "InventoryRecord",
    "ItemType",
    "MetricBucket",
    # Risk timeline
    "RiskState",
    "ShortageBlock",
    "ItemRiskGroup",
    "NO_OUTSIDE_LEAD_TIME_RISK",
    # Bill of materials
    "BomEdge",
    "BomIndex",
    # Relationship graph
    "NodeCategory",
    "RelationKind",
    "LinkingDimension",
    "GraphNode",
    "GraphEdge",
]
