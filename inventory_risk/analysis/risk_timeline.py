"""Risk timeline pipeline: records -> ranked item risk groups.

Pipeline per (item, location) series:
    1. Bucket records per day (duplicates summed)
    2. Sort days ascending and classify each day
    3. Merge consecutive same-state days into shortage blocks
    4. Relate blocks to the location's lead-time boundary
Then across series:
    5. Filter blocks by state and minimum duration
    6. Sort groups by the selected strategy

Series are independent of each other; the builder keeps no state between
calls, so identical inputs always produce identical output.
"""

from datetime import date as Date
from typing import Iterable, List, Optional, Union
import logging

from ..data.record_store import RecordStore
from ..models.inventory_record import InventoryRecord
from ..models.risk import ItemRiskGroup
from .interval_merger import lead_time_exposure, merge_risk_days
from .lead_time import DEFAULT_LEAD_TIME_POLICY, LeadTimePolicy
from .risk_classifier import classify_bucket
from .risk_ranker import RiskFilterConfig, SortStrategy, rank_risk_groups

logger = logging.getLogger(__name__)


class RiskTimelineBuilder:
    """
    Builds the shortage timeline shown in the risk view.

    Example:
        builder = RiskTimelineBuilder(reference_date=date(2025, 11, 19))
        groups = builder.build(
            store.filter(record_filter),
            RiskFilterConfig(min_consecutive_days=2),
            SortStrategy.LEAD_TIME,
        )
    """

    def __init__(
        self,
        lead_time_policy: LeadTimePolicy = DEFAULT_LEAD_TIME_POLICY,
        reference_date: Optional[Date] = None,
    ):
        """
        Initialize the builder.

        Args:
            lead_time_policy: Lead-time lookup
            reference_date: Day the lead-time horizon starts from
                (default: today, read once per build)
        """
        self.lead_time_policy = lead_time_policy
        self.reference_date = reference_date

    def build_groups(self, records: Iterable[InventoryRecord]) -> List[ItemRiskGroup]:
        """
        Build unfiltered item risk groups.

        Args:
            records: Filtered record set

        Returns:
            One group per (item, location) series that has at least one
            shortage block, in discovery order
        """
        reference_date = self.reference_date or Date.today()
        buckets = RecordStore.metric_buckets(records)
        groups = []

        for (item_code, location_code), days in buckets.items():
            ordered = sorted(days.values(), key=lambda bucket: bucket.bucket_date)
            blocks = merge_risk_days(
                (bucket.bucket_date, classify_bucket(bucket)) for bucket in ordered
            )
            if not blocks:
                continue

            boundary = self.lead_time_policy.boundary_date(location_code, reference_date)
            exposure = lead_time_exposure(blocks, boundary)

            group = ItemRiskGroup(
                item_code=item_code,
                location_code=location_code,
                blocks=tuple(blocks),
                total_shortage_days=sum(block.day_count for block in blocks),
                has_inside_lead_time_risk=exposure.has_inside_risk,
                first_outside_lead_time_risk=exposure.first_outside_risk,
            )
            logger.debug(f"{group} (lead-time boundary {boundary})")
            groups.append(group)

        logger.info(f"Built {len(groups)} risk groups from {len(buckets)} series")
        return groups

    def build(
        self,
        records: Iterable[InventoryRecord],
        risk_filter: Optional[RiskFilterConfig] = None,
        sort_strategy: Union[SortStrategy, str] = SortStrategy.ITEM_CODE,
    ) -> List[ItemRiskGroup]:
        """
        Build, filter and rank item risk groups.

        Args:
            records: Filtered record set
            risk_filter: Block filter (default: every state, 1+ days)
            sort_strategy: Group ordering

        Returns:
            Ordered groups that keep at least one block after filtering
        """
        risk_filter = risk_filter or RiskFilterConfig()
        return rank_risk_groups(self.build_groups(records), risk_filter, sort_strategy)
