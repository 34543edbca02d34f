"""Centralized constants for the inventory risk engine.

This module contains the hardcoded values shared across the risk timeline,
BOM feasibility and relationship graph components: source metric labels,
numeric tolerances, the lead-time table, location groupings and graph
layout geometry. Centralizing these values keeps them consistent and easy
to tune.
"""

from datetime import timedelta


# ============================================================================
# SOURCE METRIC LABELS
# ============================================================================

#: Total (dependent) requirement for the item on the day
METRIC_TOTAL_REQUIREMENT = "Tot.Req."

#: Independent requirement (forecast demand) for the item on the day
METRIC_INDEPENDENT_REQUIREMENT = "Indep. Req. (Forecast)"

#: Projected on-hand inventory at the end of the day
METRIC_TOTAL_INVENTORY_FORECAST = "Tot.Inventory (Forecast)"

#: Target (safety) inventory level for the day
METRIC_TOTAL_TARGET_INVENTORY = "Tot.Target Inv."

#: Filter value meaning "no constraint" for categorical filters
ALL = "All"


# ============================================================================
# RISK CLASSIFICATION
# ============================================================================

#: Requirement at or below this value counts as "no requirement"
#: Guards the Watch Out rule against floating-point noise
REQUIREMENT_EPSILON = 0.001

#: Maximum gap between two risk days that still counts as consecutive
#: One calendar day plus a few seconds of slack for parsed timestamps
CONTIGUITY_TOLERANCE = timedelta(days=1, seconds=10)


# ============================================================================
# LEAD TIME (weeks)
# ============================================================================

#: Procurement lead time by inventory organisation
LEAD_TIME_WEEKS_BY_LOCATION = {
    "IDCKDM": 6,
    "VNHCDM": 7,
    "VNHNDM": 7,
    "THBNDM": 5,
    "MYBGPM": 5,
}

#: Lead time for locations missing from the table
DEFAULT_LEAD_TIME_WEEKS = 4


# ============================================================================
# NETWORK LOCATIONS
# ============================================================================

#: Inventory organisations that are manufacturing plants
PLANT_LOCATIONS = frozenset({"THRYPM", "MYBGPM"})

#: Inventory organisations that are distribution centers
DISTRIBUTION_CENTER_LOCATIONS = frozenset({"THBNDM", "VNHCDM", "VNHNDM", "IDCKDM", "PHPSDM"})


# ============================================================================
# RELATIONSHIP GRAPH
# ============================================================================

#: Largest ring of cluster edges emitted for one linking group
#: Bounds edge count on large item classes / strategies
CLUSTER_RING_CAP = 8

#: Weight of same-class / same-strategy cluster edges
CLUSTER_EDGE_WEIGHT = 0.25

#: Minimum weight of flow and BOM edges so degenerate edges stay visible
MIN_FLOW_EDGE_WEIGHT = 1.0

#: Horizontal extent of the pseudo-layout
LAYOUT_WIDTH = 1000.0

#: Height of one category lane in the pseudo-layout
LAYOUT_LANE_HEIGHT = 200.0

#: Share of the lane height used for vertical jitter inside a lane
LAYOUT_LANE_FILL = 0.8


# ============================================================================
# NODE HEALTH
# ============================================================================

#: Current inventory below this value is reported as Low
LOW_INVENTORY_THRESHOLD = 1000.0
