"""Per-day risk classification.

Rules, evaluated in order for one (item, location, day):

    requirement = Tot.Req. + Indep. Req. (Forecast)

    Critical:  requirement > Tot.Inventory (Forecast)
    Watch Out: Tot.Inventory (Forecast) < Tot.Target Inv.
               and requirement <= REQUIREMENT_EPSILON
    None:      otherwise

Missing metrics read as zero. Each day is classified on its own; there is
no memory of earlier days.
"""

from ..constants import (
    METRIC_INDEPENDENT_REQUIREMENT,
    METRIC_TOTAL_INVENTORY_FORECAST,
    METRIC_TOTAL_REQUIREMENT,
    METRIC_TOTAL_TARGET_INVENTORY,
    REQUIREMENT_EPSILON,
)
from ..models.metrics import MetricBucket
from ..models.risk import RiskState


def classify_values(
    total_requirement: float,
    independent_requirement: float,
    inventory_forecast: float,
    target_inventory: float,
) -> RiskState:
    """
    Classify one day from its four driving figures.

    Args:
        total_requirement: Tot.Req.
        independent_requirement: Indep. Req. (Forecast)
        inventory_forecast: Tot.Inventory (Forecast)
        target_inventory: Tot.Target Inv.

    Returns:
        RiskState (Critical takes precedence over Watch Out)
    """
    requirement = total_requirement + independent_requirement

    if requirement > inventory_forecast:
        return RiskState.CRITICAL
    if inventory_forecast < target_inventory and requirement <= REQUIREMENT_EPSILON:
        return RiskState.WATCH_OUT
    return RiskState.NONE


def classify_bucket(bucket: MetricBucket) -> RiskState:
    """Classify one day's MetricBucket."""
    return classify_values(
        total_requirement=bucket.get(METRIC_TOTAL_REQUIREMENT),
        independent_requirement=bucket.get(METRIC_INDEPENDENT_REQUIREMENT),
        inventory_forecast=bucket.get(METRIC_TOTAL_INVENTORY_FORECAST),
        target_inventory=bucket.get(METRIC_TOTAL_TARGET_INVENTORY),
    )
