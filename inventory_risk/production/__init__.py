"""Production capacity projections derived from the bill of materials."""

from .feasibility import (
    FeasibilityPoint,
    ChildFeasibility,
    FeasibilityProjection,
    BomFeasibilityProjector,
)

__all__ = [
    "FeasibilityPoint",
    "ChildFeasibility",
    "FeasibilityProjection",
    "BomFeasibilityProjector",
]
