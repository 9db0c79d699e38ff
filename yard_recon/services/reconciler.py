from __future__ import annotations

import logging

from ..csvio.fields import normalize
from ..models.outcomes import ReconcileOutcome, ReconcileStatus
from ..models.record import Dataset, RecordRef
from .metrics import compute_metrics
from .summary import render_clipboard_summary

"""Reconciler: compares Dock Dash against YMS and drives the metrics engine.

YMS is the source of truth. Dock Dash records whose VRID is not found in YMS
are "excluded" (already gone from the yard) and reported separately; every
metric is computed from YMS alone.
"""

__all__ = [
    "NOT_READY_MESSAGE",
    "build_exclusion_list",
    "reconcile",
    "yms_key_set",
]

logger = logging.getLogger(__name__)

KEY_COLUMN = "VRID"
NOT_READY_MESSAGE = "Please load both YMS and Dock Dash files first."


def yms_key_set(yms: Dataset) -> set[str]:
    """Normalized, non-blank VRIDs present in YMS."""
    keys = (normalize(r.get(KEY_COLUMN)) for r in yms)
    return {k for k in keys if k}


def build_exclusion_list(yms: Dataset, dockdash: Dataset) -> list[RecordRef]:
    """Dock Dash records with a non-blank VRID absent from YMS (Dock Dash order)."""
    known = yms_key_set(yms)
    excluded: list[RecordRef] = []
    for record in dockdash:
        vrid = normalize(record.get(KEY_COLUMN))
        # 空 VRID は照合キーとして扱わない
        if vrid and vrid not in known:
            excluded.append(RecordRef.from_record(record))
    return excluded


def reconcile(yms: Dataset, dockdash: Dataset) -> ReconcileOutcome:
    """Reconcile the two datasets.

    Returns a NOT_READY outcome (no computation) when either dataset is empty.

    Raises:
        MissingHeaderError: YMS lacks a required column (see metrics.REQUIRED_HEADERS)
    """
    if yms.is_empty or dockdash.is_empty:
        return ReconcileOutcome(status=ReconcileStatus.NOT_READY, message=NOT_READY_MESSAGE)

    excluded = build_exclusion_list(yms, dockdash)
    report = compute_metrics(yms, excluded)
    logger.debug(f"reconciled yms_rows={len(yms)} dockdash_rows={len(dockdash)} excluded={len(excluded)}")

    status = ReconcileStatus.CRITICAL if report.azng_over_72 else ReconcileStatus.SUCCESS
    return ReconcileOutcome(
        status=status,
        message=f"Reconciliation complete. {len(excluded)} records excluded from Dock Dash.",
        report=report,
        excluded_count=len(excluded),
        summary_text=render_clipboard_summary(report),
    )
