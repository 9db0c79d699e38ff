from __future__ import annotations

import logging
from pathlib import Path

from ..csvio.reader import load_csv
from ..errors import CsvParseError, CsvReadError, MissingHeaderError, ReconError
from ..logging.error_log import ErrorLogBuffer
from ..models.error_record import ErrorRecord
from ..models.metrics_report import MetricBucket, MetricsReport
from ..models.outcomes import DatasetSlot, LoadResult, LoadStatus, ReconcileOutcome, ReconcileStatus
from ..models.record import Dataset, RecordRef
from .clipboard import ClipboardError, ClipboardSink
from .presentation import render_status
from .reconciler import reconcile

"""Reconciliation session: the process-wide state of one application run.

Holds the two dataset slots and the last successful report. All mutation goes
through ``load`` / ``reset`` / ``reconcile``, which never leave a slot or the
report half-updated:

- load 失敗時: 対象スロットのみ空に戻す (もう片方は保持)
- reconcile 失敗時: 直前の成功レポートを保持 (last-good-state)
"""

__all__ = [
    "AWAITING_MESSAGE",
    "READY_MESSAGE",
    "ReconciliationSession",
]

logger = logging.getLogger(__name__)

READY_MESSAGE = "Ready to reconcile."
AWAITING_MESSAGE = "Awaiting file selections to begin reconciliation..."
CANCELED_MESSAGE = "Selection canceled."


class ReconciliationSession:
    """State holder for one run: YMS slot, Dock Dash slot, last report."""

    def __init__(
        self,
        *,
        clipboard: ClipboardSink | None = None,
        error_log: ErrorLogBuffer | None = None,
    ) -> None:
        self.clipboard = clipboard
        self.error_log = error_log if error_log is not None else ErrorLogBuffer()
        self._datasets: dict[DatasetSlot, Dataset] = {slot: Dataset() for slot in DatasetSlot}
        self._report: MetricsReport | None = None
        self._last_outcome: ReconcileOutcome | None = None

    # ------------------------------------------------------------------ state
    @property
    def yms(self) -> Dataset:
        return self._datasets[DatasetSlot.YMS]

    @property
    def dockdash(self) -> Dataset:
        return self._datasets[DatasetSlot.DOCK_DASH]

    @property
    def report(self) -> MetricsReport | None:
        return self._report

    @property
    def last_outcome(self) -> ReconcileOutcome | None:
        return self._last_outcome

    @property
    def is_ready(self) -> bool:
        return not self.yms.is_empty and not self.dockdash.is_empty

    @property
    def dockdash_selectable(self) -> bool:
        """Dock Dash selection is offered only once YMS is loaded."""
        return not self.yms.is_empty

    def dataset(self, slot: DatasetSlot) -> Dataset:
        return self._datasets[slot]

    def status_message(self) -> str:
        if self._last_outcome is not None:
            return render_status(self._last_outcome)
        return READY_MESSAGE if self.is_ready else AWAITING_MESSAGE

    # ------------------------------------------------------------------ loading
    def reset(self, slot: DatasetSlot | None = None) -> None:
        """Clear one slot (or both when ``slot`` is None)."""
        slots = list(DatasetSlot) if slot is None else [slot]
        for s in slots:
            self._datasets[s] = Dataset()
        if slot is None:
            self._report = None
            self._last_outcome = None

    def load(self, slot: DatasetSlot, path: str | Path | None) -> LoadResult:
        """Load a CSV into ``slot``. ``path=None`` (dialog canceled) is a no-op."""
        if path is None:
            logger.info(f"{slot.label}: selection canceled")
            return LoadResult(slot=slot, status=LoadStatus.CANCELED, message=CANCELED_MESSAGE)

        # 新しいファイル選択で表示状態はリセット (レポート自体は保持)
        self._last_outcome = None
        p = Path(path)
        try:
            dataset = load_csv(p)
        except (CsvParseError, CsvReadError) as e:
            self._datasets[slot] = Dataset()
            error_type = "READ_ERROR" if isinstance(e, CsvReadError) else "PARSE_ERROR"
            self.error_log.append(ErrorRecord.create(p.name, slot.value, -1, error_type, str(e)))
            logger.error(f"{slot.label}: failed to load {p.name}: {e}")
            return LoadResult(slot=slot, status=LoadStatus.FAILED, message=f"Failed to load file: {e}")

        self._datasets[slot] = dataset
        for line_number in dataset.skipped_rows:
            self.error_log.append(
                ErrorRecord.create(
                    p.name,
                    slot.value,
                    line_number,
                    "MALFORMED_ROW",
                    f"field count does not match header ({len(dataset.headers)} columns)",
                )
            )
        message = f"Loaded {p.name} ({len(dataset)} records)"
        logger.info(f"{slot.label}: {message}")
        return LoadResult(slot=slot, status=LoadStatus.LOADED, message=message, dataset=dataset)

    # ------------------------------------------------------------------ reconcile
    def reconcile(self) -> ReconcileOutcome:
        """Run reconciliation on the loaded datasets.

        The held report is replaced only on success.
        """
        try:
            outcome = reconcile(self.yms, self.dockdash)
        except ReconError as e:
            error_type = "MISSING_HEADER" if isinstance(e, MissingHeaderError) else "RECONCILE_ERROR"
            yms_name = Path(self.yms.source).name if self.yms.source else ""
            self.error_log.append(ErrorRecord.create(yms_name, "reconcile", -1, error_type, str(e)))
            logger.error(f"reconcile: {e}")
            outcome = ReconcileOutcome(status=ReconcileStatus.FAILED, message=f"Reconciliation Error: {e}")
            self._last_outcome = outcome
            return outcome

        self._last_outcome = outcome
        if outcome.status is ReconcileStatus.NOT_READY:
            logger.info(outcome.message)
            return outcome

        self._report = outcome.report
        logger.info(outcome.message)
        if self.clipboard is not None and outcome.summary_text is not None:
            try:
                self.clipboard.copy(outcome.summary_text)
                logger.info("summary copied")
            except ClipboardError as e:
                logger.warning(f"clipboard: {e}")
        return outcome

    # ------------------------------------------------------------------ detail
    def detail(self, bucket: MetricBucket) -> tuple[RecordRef, ...]:
        """Records of ``bucket`` in the last successful report (empty if none)."""
        if self._report is None:
            return ()
        return self._report.bucket(bucket)
