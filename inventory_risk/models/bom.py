"""Bill of materials data model."""

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, field_validator


class BomEdge(BaseModel):
    """
    Parent -> child relationship in a bill of materials.

    Attributes:
        parent_item: Finished good (parent) item code
        child_item: Component (child) item code
        ratio: Child units consumed per parent unit produced
        plant: Optional plant the relationship is scoped to
    """
    model_config = ConfigDict(frozen=True)

    parent_item: str = Field(..., min_length=1, description="Parent item code")
    child_item: str = Field(..., min_length=1, description="Child item code")
    ratio: float = Field(0.0, description="Child units per parent unit")
    plant: Optional[str] = Field(None, description="Plant scope")

    @field_validator('parent_item', 'child_item')
    @classmethod
    def strip_codes(cls, v: str) -> str:
        """Trim item codes and reject whitespace-only codes."""
        if not v.strip():
            raise ValueError("BOM item code cannot be whitespace only")
        return v.strip()

    @field_validator('plant')
    @classmethod
    def blank_plant_is_unscoped(cls, v: Optional[str]) -> Optional[str]:
        """Treat a blank plant as 'applies to every plant'."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def is_feasible_ratio(self) -> bool:
        """True if the ratio can be divided by."""
        return self.ratio > 0

    def applies_to(self, location_code: str) -> bool:
        """Check whether this edge is valid at a given plant."""
        return self.plant is None or self.plant == location_code

    def __str__(self) -> str:
        """String representation."""
        scope = f" @{self.plant}" if self.plant else ""
        return f"{self.parent_item} -> {self.child_item} x{self.ratio:g}{scope}"


class BomIndex:
    """
    Lookup structure over a BOM table.

    Indexes parent -> children and child -> parents relationships so the
    feasibility projector, graph builder and supply chain map can navigate
    the BOM without rescanning the edge list.
    """

    def __init__(self, edges: Iterable[BomEdge]):
        """
        Build the index.

        Args:
            edges: BOM edges (duplicates are kept in the edge list but
                collapse in the parent/child sets)
        """
        self.edges: List[BomEdge] = list(edges)
        self._by_parent: Dict[str, List[BomEdge]] = defaultdict(list)
        self._parents_of: Dict[str, Set[str]] = defaultdict(set)
        self._children_of: Dict[str, Set[str]] = defaultdict(set)

        for edge in self.edges:
            self._by_parent[edge.parent_item].append(edge)
            self._children_of[edge.parent_item].add(edge.child_item)
            self._parents_of[edge.child_item].add(edge.parent_item)

    @property
    def parents(self) -> Set[str]:
        """All item codes that appear as a BOM parent."""
        return set(self._children_of)

    @property
    def children(self) -> Set[str]:
        """All item codes that appear as a BOM child."""
        return set(self._parents_of)

    def edges_for_parent(self, parent_item: str, location_code: Optional[str] = None) -> List[BomEdge]:
        """
        Get the direct BOM edges of a parent item.

        Args:
            parent_item: Parent item code
            location_code: If given, only edges valid at this plant

        Returns:
            List of edges in table order
        """
        edges = self._by_parent.get(parent_item, [])
        if location_code is None:
            return list(edges)
        return [edge for edge in edges if edge.applies_to(location_code)]

    def children_of(self, parent_item: str) -> Set[str]:
        """Direct children of a parent item."""
        return set(self._children_of.get(parent_item, set()))

    def parents_of(self, child_item: str) -> Set[str]:
        """Direct parents of a child item."""
        return set(self._parents_of.get(child_item, set()))

    def __len__(self) -> int:
        return len(self.edges)
