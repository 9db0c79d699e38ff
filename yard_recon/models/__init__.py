"""Domain models for the YMS / Dock Dash reconciliation tool."""

from .error_record import ErrorRecord
from .metrics_report import MetricBucket, MetricsReport
from .outcomes import DatasetSlot, LoadResult, LoadStatus, ReconcileOutcome, ReconcileStatus
from .record import MISSING_PLACEHOLDER, Dataset, Record, RecordRef

__all__ = [
    # Input models
    "Dataset",
    "Record",
    "RecordRef",
    "MISSING_PLACEHOLDER",
    # Metrics
    "MetricBucket",
    "MetricsReport",
    # Session results
    "DatasetSlot",
    "LoadResult",
    "LoadStatus",
    "ReconcileOutcome",
    "ReconcileStatus",
    # Logging
    "ErrorRecord",
]
