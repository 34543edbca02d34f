"""Per-day metric accumulation for one item at one location."""

from dataclasses import dataclass, field
from datetime import date as Date
from typing import Dict


@dataclass
class MetricBucket:
    """
    Accumulated metric values for one (item, location, day).

    Duplicate rows for the same metric are summed, never overwritten.
    Metrics that were never added read as 0.0.

    Attributes:
        bucket_date: Calendar day of the bucket
        metrics: Metric label -> accumulated value
    """
    bucket_date: Date
    metrics: Dict[str, float] = field(default_factory=dict)

    def add(self, metric_name: str, value: float) -> None:
        """
        Add a value to a metric's running total.

        Args:
            metric_name: Metric label
            value: Value to add
        """
        self.metrics[metric_name] = self.metrics.get(metric_name, 0.0) + value

    def get(self, metric_name: str) -> float:
        """Get a metric's total, 0.0 if absent."""
        return self.metrics.get(metric_name, 0.0)

    def __str__(self) -> str:
        """String representation."""
        values = ", ".join(f"{name}: {value:g}" for name, value in sorted(self.metrics.items()))
        return f"{self.bucket_date.isoformat()} [{values}]"
