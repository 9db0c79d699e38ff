from __future__ import annotations

from ..models.metrics_report import MetricsReport

"""Summary rendering for clipboard export and the SUMMARY log line.

Clipboard format (13 lines, fixed order, pasted straight into the shift
report sheet):

    dropPallets
    dropFloor
    parcelsDock
    parcelsYard
    parcelsDock + parcelsYard
    transshipYard
    azngOver72
    (blank)
    livesHanded
    (blank)
    (blank)
    volumeDoors   e.g. 1,234
    volumeYard

The blank lines are reserved rows in the sheet and must stay.
"""

__all__ = [
    "format_volume",
    "render_clipboard_summary",
    "render_summary_line",
]


def format_volume(units: int) -> str:
    """Format a unit volume with en-US thousands grouping (``12345`` -> ``12,345``)."""
    return f"{units:,}"


def render_clipboard_summary(report: MetricsReport) -> str:
    lines = [
        len(report.drop_pallets),
        len(report.drop_floor),
        len(report.parcels_dock),
        len(report.parcels_yard),
        report.total_parcels,
        len(report.transship_yard),
        len(report.azng_over_72),
        "",
        len(report.lives_handed),
        "",
        "",
        format_volume(report.volume_doors),
        format_volume(report.volume_yard),
    ]
    return "\n".join(str(v) for v in lines)


def render_summary_line(yms_rows: int, dockdash_rows: int, report: MetricsReport) -> str:
    """Render a single-line SUMMARY for logs.

    Format:
    SUMMARY yms_rows={n} dockdash_rows={n} excluded={n} drop_pallets={n} drop_floor={n}
    parcels_dock={n} parcels_yard={n} transship_yard={n} azng_over_72={n}
    lives_handed={n} volume_doors={n} volume_yard={n}

    Volumes are plain integers here (no grouping) so the line stays grep-able.

    Examples:
        >>> render_summary_line(3, 2, MetricsReport(volume_doors=1200))  # doctest: +ELLIPSIS
        'SUMMARY yms_rows=3 dockdash_rows=2 excluded=0 drop_pallets=0 ... volume_doors=1200 volume_yard=0'
    """
    return (
        f"SUMMARY yms_rows={yms_rows} "
        f"dockdash_rows={dockdash_rows} "
        f"excluded={len(report.excluded)} "
        f"drop_pallets={len(report.drop_pallets)} "
        f"drop_floor={len(report.drop_floor)} "
        f"parcels_dock={len(report.parcels_dock)} "
        f"parcels_yard={len(report.parcels_yard)} "
        f"transship_yard={len(report.transship_yard)} "
        f"azng_over_72={len(report.azng_over_72)} "
        f"lives_handed={len(report.lives_handed)} "
        f"volume_doors={report.volume_doors} "
        f"volume_yard={report.volume_yard}"
    )
