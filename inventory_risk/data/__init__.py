"""Record store and filters."""

from .record_filter import RecordFilter, CATEGORICAL_FIELDS
from .record_store import RecordStore, FilterOptions, MetricPivot

__all__ = [
    'RecordFilter',
    'CATEGORICAL_FIELDS',
    'RecordStore',
    'FilterOptions',
    'MetricPivot',
]
