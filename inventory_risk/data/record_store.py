"""Record store: indexed, filterable views over parsed inventory records.

The store holds an immutable snapshot of InventoryRecords and derives every
view (filtered record sets, cascading filter options, per-day metric
buckets, the detail pivot and chart series) from scratch on each call.
Nothing is cached between calls, so a changed filter always re-derives
consistent output.
"""

from collections import OrderedDict
from dataclasses import dataclass, field
from datetime import date as Date
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple
import logging

import pandas as pd

from ..constants import ALL
from ..models.inventory_record import InventoryRecord
from ..models.metrics import MetricBucket
from .record_filter import CATEGORICAL_FIELDS, RecordFilter

logger = logging.getLogger(__name__)


SeriesKey = Tuple[str, str]


@dataclass
class FilterOptions:
    """
    Cascading option lists for the categorical filters.

    Each list holds the sorted distinct values among records that pass the
    date range and every other active categorical filter.
    """
    item_codes: List[str] = field(default_factory=list)
    location_codes: List[str] = field(default_factory=list)
    item_classes: List[str] = field(default_factory=list)
    units_of_measure: List[str] = field(default_factory=list)
    strategies: List[str] = field(default_factory=list)
    metrics: List[str] = field(default_factory=list)


@dataclass
class MetricPivot:
    """
    Metric-by-date values for one selected item, for the detail table.

    Attributes:
        item_code: Selected item
        location_code: Selected inventory organisation
        dates: Sorted distinct dates
        metrics: Sorted distinct metric names
        values: metric -> date -> summed value (missing cells are absent)
    """
    item_code: str
    location_code: str
    dates: List[Date] = field(default_factory=list)
    metrics: List[str] = field(default_factory=list)
    values: Dict[str, Dict[Date, float]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.dates

    def get(self, metric_name: str, day: Date) -> Optional[float]:
        """Value for one cell, None if the cell is empty."""
        return self.values.get(metric_name, {}).get(day)

    def to_dataframe(self) -> pd.DataFrame:
        """Pivot as a DataFrame: metrics as rows, dates as columns."""
        return pd.DataFrame(
            [[self.get(metric, day) for day in self.dates] for metric in self.metrics],
            index=pd.Index(self.metrics, name='metric'),
            columns=pd.Index(self.dates, name='date'),
            dtype=float,
        )


class RecordStore:
    """
    Holds parsed inventory records and exposes filtered views.

    Example:
        store = RecordStore(InventoryRecordParser().parse_rows(rows))
        records = store.filter(RecordFilter(location_code="MYBGPM"))
        buckets = RecordStore.metric_buckets(records)
    """

    def __init__(self, records: Iterable[InventoryRecord]):
        """
        Initialize the store.

        Args:
            records: Parsed records (order is preserved)
        """
        self._records: Tuple[InventoryRecord, ...] = tuple(records)

    def __len__(self) -> int:
        return len(self._records)

    def all_records(self) -> List[InventoryRecord]:
        """All records, including those with invalid dates."""
        return list(self._records)

    def select(self, predicate: Callable[[InventoryRecord], bool]) -> List[InventoryRecord]:
        """Records for which predicate returns True."""
        return [record for record in self._records if predicate(record)]

    def filter(self, record_filter: Optional[RecordFilter] = None) -> List[InventoryRecord]:
        """
        Records passing a RecordFilter.

        Args:
            record_filter: Filter to apply (None returns every record)

        Returns:
            Matching records in store order
        """
        if record_filter is None:
            return self.all_records()
        return self.select(record_filter.matches)

    def for_item(
        self,
        item_code: str,
        location_code: str,
        start_date: Optional[Date] = None,
        end_date: Optional[Date] = None,
    ) -> List[InventoryRecord]:
        """Records of one (item, location) series within a date range."""
        return self.filter(RecordFilter(
            item_code=item_code,
            location_code=location_code,
            start_date=start_date,
            end_date=end_date,
        ))

    def filter_options(self, record_filter: Optional[RecordFilter] = None) -> FilterOptions:
        """
        Build cascading option lists.

        For each categorical field, options come from the records that pass
        the date range and all other categorical filters, so picking one
        filter narrows the choices offered by the others but never its own.

        Args:
            record_filter: Active filter (None = unconstrained)

        Returns:
            FilterOptions with sorted distinct non-empty values
        """
        record_filter = record_filter or RecordFilter()

        def distinct(field_name: str, exclude: Optional[str]) -> List[str]:
            values = {
                getattr(record, field_name)
                for record in self._records
                if record_filter.matches(record, exclude=exclude)
            }
            return sorted(value for value in values if value)

        item_codes, location_codes, item_classes, units, strategies = (
            distinct(name, exclude=name) for name in CATEGORICAL_FIELDS
        )

        return FilterOptions(
            item_codes=item_codes,
            location_codes=location_codes,
            item_classes=item_classes,
            units_of_measure=units,
            strategies=strategies,
            metrics=distinct('metric_name', exclude=None),
        )

    def default_date_range(self) -> Tuple[Optional[Date], Optional[Date]]:
        """
        Date range spanning every valid record date.

        Returns:
            (earliest, latest), or (None, None) if no record has a valid date
        """
        dates = [record.record_date for record in self._records if record.record_date is not None]
        if not dates:
            return None, None
        return min(dates), max(dates)

    @staticmethod
    def metric_buckets(
        records: Iterable[InventoryRecord],
    ) -> Dict[SeriesKey, Dict[Date, MetricBucket]]:
        """
        Group records into per-day metric buckets.

        Series keep the order in which their (item, location) pair is first
        seen. Duplicate (item, location, metric, date) rows are summed.
        Records with an invalid date cannot be placed on a timeline and are
        skipped.

        Args:
            records: Records to group

        Returns:
            (item_code, location_code) -> {date -> MetricBucket}; the inner
            mappings are in insertion order, not date order
        """
        grouped: Dict[SeriesKey, Dict[Date, MetricBucket]] = OrderedDict()
        skipped = 0

        for record in records:
            if record.record_date is None:
                skipped += 1
                continue
            days = grouped.setdefault(record.key, {})
            bucket = days.get(record.record_date)
            if bucket is None:
                bucket = days[record.record_date] = MetricBucket(bucket_date=record.record_date)
            bucket.add(record.metric_name, record.value)

        if skipped:
            logger.debug(f"Skipped {skipped} record(s) without a valid date while bucketing")

        return grouped

    def metric_pivot(
        self,
        item_code: str,
        location_code: str,
        start_date: Optional[Date] = None,
        end_date: Optional[Date] = None,
    ) -> MetricPivot:
        """
        Build the metric-by-date pivot for one selected item.

        Args:
            item_code: Selected item
            location_code: Selected inventory organisation
            start_date: First day included (None = unbounded)
            end_date: Last day included (None = unbounded)

        Returns:
            MetricPivot (empty if the item has no dated records in range)
        """
        values: Dict[str, Dict[Date, float]] = {}
        dates = set()

        for record in self.for_item(item_code, location_code, start_date, end_date):
            if record.record_date is None:
                continue
            dates.add(record.record_date)
            by_date = values.setdefault(record.metric_name, {})
            by_date[record.record_date] = by_date.get(record.record_date, 0.0) + record.value

        return MetricPivot(
            item_code=item_code,
            location_code=location_code,
            dates=sorted(dates),
            metrics=sorted(values),
            values=values,
        )

    @staticmethod
    def chart_series(
        records: Iterable[InventoryRecord],
        metrics: Optional[Sequence[str]] = None,
    ) -> pd.DataFrame:
        """
        Day-grouped metric totals for the trend chart.

        Args:
            records: Records to chart
            metrics: Metric names to include; None or a list containing
                "All" includes every metric

        Returns:
            DataFrame indexed by date (ascending) with one column per metric
        """
        include_all = metrics is None or ALL in metrics
        wanted = set(metrics or ())

        rows = [
            {'date': record.record_date, 'metric': record.metric_name, 'value': record.value}
            for record in records
            if record.record_date is not None and (include_all or record.metric_name in wanted)
        ]
        if not rows:
            return pd.DataFrame(index=pd.Index([], name='date'))

        df = pd.DataFrame(rows)
        series = df.pivot_table(index='date', columns='metric', values='value', aggfunc='sum')
        series.columns.name = None
        return series.sort_index()
