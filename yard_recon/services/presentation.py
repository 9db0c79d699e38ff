from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd

from ..models.metrics_report import MetricBucket, MetricsReport
from ..models.outcomes import ReconcileOutcome, ReconcileStatus
from ..models.record import RecordRef
from .summary import format_volume

"""Presentation adapter: tile metadata, status messages and detail tables.

Kept apart from the metrics engine so that display wording can change without
touching the classification rules.
"""

__all__ = [
    "BUCKET_TITLES",
    "NO_RECORDS_MESSAGE",
    "TILES",
    "TileSpec",
    "critical_flags",
    "detail_frame",
    "render_detail",
    "render_status",
    "render_tiles",
    "tile_values",
]

NO_RECORDS_MESSAGE = "No records found for this category."

BUCKET_TITLES: dict[MetricBucket, str] = {
    MetricBucket.DROP_PALLETS: "DROP PALLETS",
    MetricBucket.DROP_FLOOR: "DROP FLOOR",
    MetricBucket.PARCELS_DOCK: "PARCELS DOCK",
    MetricBucket.PARCELS_YARD: "PARCELS YARD",
    MetricBucket.TRANSSHIP_YARD: "TRANSSHIP YARD",
    MetricBucket.AZNG_OVER_72: "AZNG OVER 72H",
    MetricBucket.LIVES_HANDED: "LIVES HANDED",
    MetricBucket.EXCLUDED: "EXCLUDED",
}


@dataclass(frozen=True)
class TileSpec:
    """One dashboard tile. ``bucket`` is None for derived/volume tiles."""
    tile_id: str
    label: str
    bucket: MetricBucket | None = None


TILES: tuple[TileSpec, ...] = (
    TileSpec("dropPallets", "Drop (Pallets)", MetricBucket.DROP_PALLETS),
    TileSpec("dropFloor", "Drop (Floor)", MetricBucket.DROP_FLOOR),
    TileSpec("parcelsDock", "Parcels @ Dock", MetricBucket.PARCELS_DOCK),
    TileSpec("parcelsYard", "Parcels @ Yard", MetricBucket.PARCELS_YARD),
    TileSpec("totalParcels", "Total Parcels"),
    TileSpec("transshipYard", "Transship @ Yard", MetricBucket.TRANSSHIP_YARD),
    TileSpec("azngOver72", "AZNG > 72h", MetricBucket.AZNG_OVER_72),
    TileSpec("livesHanded", "Lives Handed", MetricBucket.LIVES_HANDED),
    TileSpec("volumeDoors", "Volume @ Doors"),
    TileSpec("volumeYard", "Volume @ Yard"),
)


def tile_values(report: MetricsReport) -> dict[str, str]:
    """Tile id -> display value."""
    values: dict[str, str] = {}
    for tile in TILES:
        if tile.bucket is not None:
            values[tile.tile_id] = str(report.count(tile.bucket))
        elif tile.tile_id == "totalParcels":
            values[tile.tile_id] = str(report.total_parcels)
        elif tile.tile_id == "volumeDoors":
            values[tile.tile_id] = format_volume(report.volume_doors)
        elif tile.tile_id == "volumeYard":
            values[tile.tile_id] = format_volume(report.volume_yard)
        else:  # pragma: no cover
            raise ValueError(f"tile without value source: {tile.tile_id}")
    return values


def critical_flags(report: MetricsReport) -> dict[str, bool]:
    """Tiles highlighted as critical.

    parcelsDock > 0 is highlighted as well as azngOver72 > 0; this matches the
    dashboard operators are used to even though parcels at a door are not
    obviously abnormal.
    """
    return {
        "azngOver72": len(report.azng_over_72) > 0,
        "parcelsDock": len(report.parcels_dock) > 0,
    }


def render_status(outcome: ReconcileOutcome) -> str:
    """Action-panel message for a reconciliation outcome."""
    if outcome.status is ReconcileStatus.CRITICAL and outcome.report is not None:
        azng = len(outcome.report.azng_over_72)
        return (
            f"RECONCILED CRITICAL: {outcome.excluded_count} excluded, "
            f"but {azng} trailer(s) are still AZNG > 72h!"
        )
    if outcome.status is ReconcileStatus.SUCCESS:
        return (
            f"RECONCILIATION SUCCESS: {outcome.excluded_count} Dock Dash records reconciled. "
            "All critical metrics clear."
        )
    return outcome.message


def render_tiles(report: MetricsReport) -> str:
    """Plain-text tile board, one ``label: value`` line per tile (``!`` marks critical)."""
    values = tile_values(report)
    flags = critical_flags(report)
    width = max(len(t.label) for t in TILES)
    lines = []
    for tile in TILES:
        marker = " !" if flags.get(tile.tile_id) else ""
        lines.append(f"{tile.label.ljust(width)} : {values[tile.tile_id]}{marker}")
    return "\n".join(lines)


def detail_frame(refs: Sequence[RecordRef]) -> pd.DataFrame:
    """Two-column ISA / VRID table for a bucket."""
    return pd.DataFrame(
        [(r.isa, r.vrid) for r in refs],
        columns=["ISA", "VRID"],
    )


def render_detail(bucket: MetricBucket, refs: Sequence[RecordRef]) -> str:
    """Render a bucket's detail view, or the no-records notice when empty."""
    if not refs:
        return NO_RECORDS_MESSAGE
    title = f"{BUCKET_TITLES[bucket]} DETAILS ({len(refs)} Trailers)"
    table = detail_frame(refs).to_string(index=False)
    return f"{title}\n{table}"
