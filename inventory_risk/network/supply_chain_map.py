"""
Supply chain map: RM -> FG (plant) -> DC columns of node health cards.

Raw materials are limited to BOM children, plant finished goods to BOM
parents, and the DC column holds finished goods stocked at distribution
centers. Focusing an item narrows the columns to its BOM neighbourhood.
"""

from dataclasses import dataclass, field
from datetime import date as Date
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple, Union
import logging

from ..analysis.node_health import NodeHealth, node_health
from ..constants import DISTRIBUTION_CENTER_LOCATIONS, PLANT_LOCATIONS
from ..models.bom import BomEdge, BomIndex
from ..models.graph import NodeCategory
from ..models.inventory_record import InventoryRecord, ItemType

logger = logging.getLogger(__name__)


class ColumnSort(str, Enum):
    """Ordering of cards inside a column."""
    ALPHA = "alpha"              # Item code ascending
    INVENTORY_DESC = "invDesc"   # Current inventory descending


@dataclass(frozen=True)
class MapFocus:
    """
    Item the map is focused on.

    Attributes:
        item_code: Focused item
        location_code: Location the item was selected at
        category: Column of the focused item; when None it is derived
            from the location (plant -> FG, DC -> DC, otherwise RM)
    """
    item_code: str
    location_code: str
    category: Optional[NodeCategory] = None

    @property
    def column(self) -> NodeCategory:
        """Column the focus narrows from."""
        if self.category is not None:
            return self.category
        if self.location_code in PLANT_LOCATIONS:
            return NodeCategory.FINISHED_GOOD
        if self.location_code in DISTRIBUTION_CENTER_LOCATIONS:
            return NodeCategory.DISTRIBUTION_CENTER
        return NodeCategory.RAW_MATERIAL


@dataclass
class SupplyChainColumns:
    """
    Node health cards per column.

    Attributes:
        raw_materials: RM column
        finished_goods: FG (plant) column
        distribution_centers: DC column
    """
    raw_materials: List[NodeHealth] = field(default_factory=list)
    finished_goods: List[NodeHealth] = field(default_factory=list)
    distribution_centers: List[NodeHealth] = field(default_factory=list)

    def __str__(self) -> str:
        return (
            f"RM={len(self.raw_materials)} FG={len(self.finished_goods)} "
            f"DC={len(self.distribution_centers)}"
        )


class SupplyChainMap:
    """
    Builds the three-column supply chain map.

    Example:
        scm = SupplyChainMap(records, bom_edges)
        columns = scm.columns(focus=MapFocus("AAG620-MR2", "MYBGPM"))
    """

    def __init__(
        self,
        records: Iterable[InventoryRecord],
        bom: Union[BomIndex, Iterable[BomEdge]],
    ):
        """
        Index records by node.

        Args:
            records: Record set the map is drawn from
            bom: BomIndex, or BOM edges to index
        """
        self.bom = bom if isinstance(bom, BomIndex) else BomIndex(bom)
        self._records_by_key: Dict[Tuple[str, str], List[InventoryRecord]] = {}
        self._rm_keys: List[Tuple[str, str]] = []
        self._fg_keys: List[Tuple[str, str]] = []
        self._dc_keys: List[Tuple[str, str]] = []

        for record in records:
            key = record.key
            if key not in self._records_by_key:
                self._records_by_key[key] = []
                if record.item_type == ItemType.RAW_MATERIAL:
                    self._rm_keys.append(key)
                elif record.item_type == ItemType.FINISHED_GOOD:
                    if record.location_code in PLANT_LOCATIONS:
                        self._fg_keys.append(key)
                    elif record.location_code in DISTRIBUTION_CENTER_LOCATIONS:
                        self._dc_keys.append(key)
            self._records_by_key[key].append(record)

    def columns(
        self,
        focus: Optional[MapFocus] = None,
        start_date: Optional[Date] = None,
        end_date: Optional[Date] = None,
        sort: Union[ColumnSort, str] = ColumnSort.ALPHA,
    ) -> SupplyChainColumns:
        """
        Build the column contents.

        Args:
            focus: Focused item (None shows every BOM-linked node)
            start_date: First day included in health figures
            end_date: Last day included in health figures
            sort: Card ordering applied to every column

        Returns:
            SupplyChainColumns
        """
        sort = ColumnSort(sort)
        children = self.bom.children
        parents = self.bom.parents

        rm_keys = [k for k in self._rm_keys if k[0] in children]
        fg_keys = [k for k in self._fg_keys if k[0] in parents]
        dc_keys = list(self._dc_keys)

        if focus is not None:
            rm_keys, fg_keys, dc_keys = self._narrow(focus, rm_keys, fg_keys, dc_keys)

        result = SupplyChainColumns(
            raw_materials=self._cards(rm_keys, NodeCategory.RAW_MATERIAL, start_date, end_date, sort),
            finished_goods=self._cards(fg_keys, NodeCategory.FINISHED_GOOD, start_date, end_date, sort),
            distribution_centers=self._cards(dc_keys, NodeCategory.DISTRIBUTION_CENTER, start_date, end_date, sort),
        )
        logger.debug(f"Supply chain columns: {result}")
        return result

    def _narrow(self, focus: MapFocus, rm_keys, fg_keys, dc_keys):
        item = focus.item_code

        if focus.column == NodeCategory.FINISHED_GOOD:
            ingredients = self.bom.children_of(item)
            rm_keys = [k for k in rm_keys if k[0] in ingredients]
            dc_keys = [k for k in dc_keys if k[0] == item]

        elif focus.column == NodeCategory.RAW_MATERIAL:
            consumers = self.bom.parents_of(item)
            fg_keys = [k for k in fg_keys if k[0] in consumers]
            visible = {k[0] for k in fg_keys}
            dc_keys = [k for k in dc_keys if k[0] in visible]

        else:
            fg_keys = [k for k in fg_keys if k[0] == item]
            ingredients = self.bom.children_of(item)
            rm_keys = [k for k in rm_keys if k[0] in ingredients]

        return rm_keys, fg_keys, dc_keys

    def _cards(
        self,
        keys: List[Tuple[str, str]],
        category: NodeCategory,
        start_date: Optional[Date],
        end_date: Optional[Date],
        sort: ColumnSort,
    ) -> List[NodeHealth]:
        cards = [
            node_health(
                self._records_by_key[key], key[0], key[1],
                start_date=start_date, end_date=end_date, category=category,
            )
            for key in keys
        ]
        if sort == ColumnSort.INVENTORY_DESC:
            return sorted(cards, key=lambda card: -card.current_inventory)
        return sorted(cards, key=lambda card: card.item_code)
