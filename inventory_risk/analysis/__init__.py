"""Risk analysis for inventory time series.

This module provides the analytic core of the risk timeline:
- Lead-time policy and horizon dates
- Per-day risk classification (Critical / Watch Out)
- Merging of risk days into shortage blocks
- Filtering and ranking of item risk groups
- Node health summaries for the supply chain map
"""

from .lead_time import (
    LeadTimePolicy,
    DEFAULT_LEAD_TIME_POLICY,
    lead_time_weeks,
    lead_time_boundary,
)
from .risk_classifier import classify_bucket, classify_values
from .interval_merger import (
    UnsortedSequenceError,
    LeadTimeExposure,
    merge_risk_days,
    lead_time_exposure,
)
from .risk_ranker import (
    RiskFilterConfig,
    SortStrategy,
    filter_risk_groups,
    sort_risk_groups,
    rank_risk_groups,
)
from .risk_timeline import RiskTimelineBuilder
from .node_health import (
    HealthStatus,
    WeeklyHealth,
    NodeHealth,
    health_status,
    node_category,
    node_health,
    weekly_health,
)

__all__ = [
    "LeadTimePolicy",
    "DEFAULT_LEAD_TIME_POLICY",
    "lead_time_weeks",
    "lead_time_boundary",
    "classify_bucket",
    "classify_values",
    "UnsortedSequenceError",
    "LeadTimeExposure",
    "merge_risk_days",
    "lead_time_exposure",
    "RiskFilterConfig",
    "SortStrategy",
    "filter_risk_groups",
    "sort_risk_groups",
    "rank_risk_groups",
    "RiskTimelineBuilder",
    "HealthStatus",
    "WeeklyHealth",
    "NodeHealth",
    "health_status",
    "node_category",
    "node_health",
    "weekly_health",
]
