from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .metrics_report import MetricsReport
from .record import Dataset

"""Result objects returned to the presentation layer by the session.

Failures are reported as values (status + message) so the caller always gets
a well-defined state back, never a half-applied one.
"""

__all__ = [
    "DatasetSlot",
    "LoadResult",
    "LoadStatus",
    "ReconcileOutcome",
    "ReconcileStatus",
]


class DatasetSlot(Enum):
    """The two input slots held by a session."""
    YMS = "yms"
    DOCK_DASH = "dockdash"

    @property
    def label(self) -> str:
        return "YMS" if self is DatasetSlot.YMS else "Dock Dash"


class LoadStatus(Enum):
    LOADED = "loaded"
    CANCELED = "canceled"
    FAILED = "failed"


class ReconcileStatus(Enum):
    """Outcome of one reconciliation request.

    - NOT_READY: one or both datasets missing (normal UI state, not an error)
    - SUCCESS: reconciled, no critical metric active
    - CRITICAL: reconciled, AZNG trailers over 72h remain
    - FAILED: reconciliation aborted (prior report retained)
    """
    NOT_READY = "not_ready"
    SUCCESS = "success"
    CRITICAL = "critical"
    FAILED = "failed"

    @property
    def reconciled(self) -> bool:
        return self in (ReconcileStatus.SUCCESS, ReconcileStatus.CRITICAL)


@dataclass(frozen=True)
class LoadResult:
    slot: DatasetSlot
    status: LoadStatus
    message: str
    dataset: Dataset | None = None

    @property
    def ok(self) -> bool:
        return self.status is LoadStatus.LOADED


@dataclass(frozen=True)
class ReconcileOutcome:
    status: ReconcileStatus
    message: str
    report: MetricsReport | None = None
    excluded_count: int = 0
    summary_text: str | None = None
