"""Network views: relationship graph and supply chain map."""

from .graph_builder import (
    GraphConfig,
    RelationshipGraph,
    RelationshipGraphBuilder,
    dc_node_id,
    item_node_id,
    layout_position,
)
from .supply_chain_map import ColumnSort, MapFocus, SupplyChainColumns, SupplyChainMap

__all__ = [
    "GraphConfig",
    "RelationshipGraph",
    "RelationshipGraphBuilder",
    "dc_node_id",
    "item_node_id",
    "layout_position",
    "ColumnSort",
    "MapFocus",
    "SupplyChainColumns",
    "SupplyChainMap",
]
