"""Risk filtering and ranking of item risk groups."""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Dict, Iterable, List, Union

from ..models.risk import ItemRiskGroup, RiskState, ShortageBlock


class SortStrategy(str, Enum):
    """Ordering of item risk groups in the timeline."""
    ITEM_CODE = "itemCode"     # Lexicographic on item code
    LEAD_TIME = "leadTime"     # Inside-lead-time risk first, then longest
    DURATION = "duration"      # Longest total shortage first
    PLANNING = "planning"      # Earliest risk beyond the lead-time horizon first


@dataclass(frozen=True)
class RiskFilterConfig:
    """
    Which shortage blocks survive into the timeline.

    Attributes:
        include_critical: Keep Critical blocks
        include_watch_out: Keep Watch Out blocks
        min_consecutive_days: Drop blocks shorter than this many days
    """
    include_critical: bool = True
    include_watch_out: bool = True
    min_consecutive_days: int = 1

    def __post_init__(self):
        """Validate configuration."""
        if self.min_consecutive_days < 1:
            raise ValueError(
                f"min_consecutive_days must be >= 1, got {self.min_consecutive_days}"
            )

    def keeps(self, block: ShortageBlock) -> bool:
        """Check whether a block passes the filter."""
        if block.day_count < self.min_consecutive_days:
            return False
        if block.state == RiskState.CRITICAL and not self.include_critical:
            return False
        if block.state == RiskState.WATCH_OUT and not self.include_watch_out:
            return False
        return True


_SORT_KEYS: Dict[SortStrategy, Callable[[ItemRiskGroup], object]] = {
    SortStrategy.ITEM_CODE: lambda g: g.item_code,
    SortStrategy.LEAD_TIME: lambda g: (not g.has_inside_lead_time_risk, -g.total_shortage_days),
    SortStrategy.DURATION: lambda g: -g.total_shortage_days,
    SortStrategy.PLANNING: lambda g: g.first_outside_lead_time_risk,
}


def filter_risk_groups(
    groups: Iterable[ItemRiskGroup],
    config: RiskFilterConfig,
) -> List[ItemRiskGroup]:
    """
    Apply a RiskFilterConfig to item risk groups.

    Blocks failing the filter are removed, ``total_shortage_days`` is
    recomputed from the retained blocks only, and groups left without
    blocks are dropped. Lead-time flags are carried over unchanged.

    Args:
        groups: Unfiltered groups
        config: Filter configuration

    Returns:
        Filtered groups in input order
    """
    filtered = []
    for group in groups:
        blocks = tuple(block for block in group.blocks if config.keeps(block))
        if not blocks:
            continue
        filtered.append(replace(
            group,
            blocks=blocks,
            total_shortage_days=sum(block.day_count for block in blocks),
        ))
    return filtered


def sort_risk_groups(
    groups: Iterable[ItemRiskGroup],
    strategy: Union[SortStrategy, str] = SortStrategy.ITEM_CODE,
) -> List[ItemRiskGroup]:
    """
    Order groups by a sort strategy.

    The sort is stable, so groups that tie under the strategy keep their
    input (discovery) order.

    Args:
        groups: Groups to order
        strategy: SortStrategy or its string value

    Returns:
        New sorted list

    Raises:
        ValueError: If strategy is not a known sort strategy
    """
    strategy = SortStrategy(strategy)
    return sorted(groups, key=_SORT_KEYS[strategy])


def rank_risk_groups(
    groups: Iterable[ItemRiskGroup],
    config: RiskFilterConfig,
    strategy: Union[SortStrategy, str] = SortStrategy.ITEM_CODE,
) -> List[ItemRiskGroup]:
    """Filter then sort item risk groups."""
    return sort_risk_groups(filter_risk_groups(groups, config), strategy)
