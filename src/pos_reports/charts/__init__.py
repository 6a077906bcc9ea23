"""Chart series module.

Example:
    >>> from pos_reports.charts import project
    >>> buckets = project(transactions, "weekly")
    >>> [b.label for b in buckets]
    ['W-7', 'W-6', 'W-5', 'W-4', 'W-3', 'W-2', 'W-1', 'Wnow']
"""

from pos_reports.charts.projector import (
    BUCKET_COUNTS,
    ChartBucket,
    buckets_to_frame,
    has_chart_data,
    project,
)

__all__ = [
    "BUCKET_COUNTS",
    "ChartBucket",
    "buckets_to_frame",
    "has_chart_data",
    "project",
]
