from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .record import RecordRef

"""Metrics report model and the closed set of metric buckets.

Each MetricBucket member maps to one tuple field on MetricsReport. Display
metadata (tile titles, critical flags) lives in services.presentation, not here.
"""

__all__ = [
    "MetricBucket",
    "MetricsReport",
]


class MetricBucket(Enum):
    """Record-list buckets exposed for detail lookup.

    Values are the identifiers used on the command line and in exports.
    """
    DROP_PALLETS = "dropPallets"
    DROP_FLOOR = "dropFloor"
    PARCELS_DOCK = "parcelsDock"
    PARCELS_YARD = "parcelsYard"
    TRANSSHIP_YARD = "transshipYard"
    AZNG_OVER_72 = "azngOver72"
    LIVES_HANDED = "livesHanded"
    EXCLUDED = "excluded"

    @property
    def field_name(self) -> str:
        return self.name.lower()

    @classmethod
    def from_id(cls, bucket_id: str) -> MetricBucket:
        """Resolve a bucket from its identifier (``dropPallets``) or member name."""
        for member in cls:
            if bucket_id in (member.value, member.name, member.field_name):
                return member
        raise ValueError(f"Unknown metric bucket: {bucket_id}")


@dataclass(frozen=True)
class MetricsReport:
    """Result of one metrics computation over the YMS dataset."""
    drop_pallets: tuple[RecordRef, ...] = ()
    drop_floor: tuple[RecordRef, ...] = ()
    parcels_dock: tuple[RecordRef, ...] = ()
    parcels_yard: tuple[RecordRef, ...] = ()
    transship_yard: tuple[RecordRef, ...] = ()
    azng_over_72: tuple[RecordRef, ...] = ()
    lives_handed: tuple[RecordRef, ...] = ()
    excluded: tuple[RecordRef, ...] = ()
    volume_doors: int = 0
    volume_yard: int = 0

    def bucket(self, bucket: MetricBucket) -> tuple[RecordRef, ...]:
        return getattr(self, bucket.field_name)

    def count(self, bucket: MetricBucket) -> int:
        return len(self.bucket(bucket))

    @property
    def total_parcels(self) -> int:
        # 表示専用の派生値 (バケットとしては保持しない)
        return len(self.parcels_dock) + len(self.parcels_yard)

    def counts(self) -> dict[str, int]:
        """Bucket id -> record count, in enum order."""
        return {b.value: self.count(b) for b in MetricBucket}
