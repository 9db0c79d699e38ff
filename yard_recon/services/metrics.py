from __future__ import annotations

from collections.abc import Sequence

from ..csvio.fields import normalize, parse_dwell_hours, parse_float_field, parse_int_field
from ..errors import MissingHeaderError
from ..models.metrics_report import MetricsReport
from ..models.record import Dataset, RecordRef

"""Metrics engine: classifies YMS records into operational buckets.

Every rule is evaluated independently per record, so one trailer may land in
several buckets (e.g. a DROP at a PS slot that is also AZNG over 72h). The
function is pure: the report depends only on the dataset and excluded list.
"""

__all__ = [
    "REQUIRED_HEADERS",
    "compute_metrics",
    "missing_headers",
]

REQUIRED_HEADERS: tuple[str, ...] = (
    "LOCATION",
    "CARRIER LOAD TYPE",
    "APPOINTMENT TYPE",
    "CARRIER",
    "YARD DWELL",
    "PALLETS",
    "UNITS",
)

DOOR_PREFIX = "DD"  # ドック扉
YARD_PREFIX = "PS"  # ヤード駐車枠
AZNG_OVER_HOURS = 72.0


def missing_headers(dataset: Dataset) -> list[str]:
    """Return required headers absent from the dataset, in canonical order."""
    present = {normalize(h) for h in dataset.columns}
    return [h for h in REQUIRED_HEADERS if h not in present]


def compute_metrics(yms: Dataset, excluded: Sequence[RecordRef]) -> MetricsReport:
    """Compute the metrics report for a YMS dataset.

    Args:
        yms: Parsed YMS export (source of truth)
        excluded: Dock Dash records absent from YMS, attached verbatim

    Returns:
        MetricsReport with buckets in dataset order

    Raises:
        MissingHeaderError: If any of REQUIRED_HEADERS is missing
    """
    missing = missing_headers(yms)
    if missing:
        raise MissingHeaderError(missing)

    drop_pallets: list[RecordRef] = []
    drop_floor: list[RecordRef] = []
    parcels_dock: list[RecordRef] = []
    parcels_yard: list[RecordRef] = []
    transship_yard: list[RecordRef] = []
    azng_over_72: list[RecordRef] = []
    lives_handed: list[RecordRef] = []
    volume_doors = 0
    volume_yard = 0

    for record in yms:
        load_type = normalize(record.get("CARRIER LOAD TYPE"))
        appt = normalize(record.get("APPOINTMENT TYPE"))
        loc = normalize(record.get("LOCATION"))
        carrier = normalize(record.get("CARRIER"))
        dwell = parse_dwell_hours(record.get("YARD DWELL"))
        pallets = parse_float_field(record.get("PALLETS"))
        units = parse_int_field(record.get("UNITS"))

        at_door = loc.startswith(DOOR_PREFIX)
        in_yard = loc.startswith(YARD_PREFIX)
        ref = RecordRef.from_record(record)

        # Drop: パレット有り / 床積み
        if load_type == "DROP" and appt == "CARP" and in_yard:
            if pallets > 0:
                drop_pallets.append(ref)
            else:
                drop_floor.append(ref)

        if appt == "SMALL_PARCEL":
            if at_door:
                parcels_dock.append(ref)
            if in_yard:
                parcels_yard.append(ref)

        if appt == "TRANSSHIP" and in_yard:
            transship_yard.append(ref)

        # AZNG 系キャリアは先頭 "A" で判定 (境界 72h を含む)
        if carrier.startswith("A") and dwell >= AZNG_OVER_HOURS:
            azng_over_72.append(ref)

        if load_type == "LIVE" and at_door:
            lives_handed.append(ref)

        if at_door:
            volume_doors += units
        if in_yard:
            volume_yard += units

    return MetricsReport(
        drop_pallets=tuple(drop_pallets),
        drop_floor=tuple(drop_floor),
        parcels_dock=tuple(parcels_dock),
        parcels_yard=tuple(parcels_yard),
        transship_yard=tuple(transship_yard),
        azng_over_72=tuple(azng_over_72),
        lives_handed=tuple(lives_handed),
        excluded=tuple(excluded),
        volume_doors=volume_doors,
        volume_yard=volume_yard,
    )
