#!/usr/bin/env python3
"""Sample data generator for manual runs.

Writes a synthetic YMS export and a matching Dock Dash export. Most Dock Dash
VRIDs are taken from YMS; ``--extra`` of them are new so the excluded list is
never empty. Yard dwell is written the way YMS exports it (``"81.5 hrs"``).
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

LOCATIONS = ["PS", "DD"]
LOAD_TYPES = ["DROP", "LIVE"]
APPT_TYPES = ["CARP", "SMALL_PARCEL", "TRANSSHIP"]
CARRIERS = ["AZNG", "ACME", "UPSN", "FDEG", "XPOL"]


def generate_yms(rows: int, seed: int = 42) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    locations = [f"{p}{n:03d}" for p, n in zip(rng.choice(LOCATIONS, rows), rng.integers(1, 300, rows))]
    return pd.DataFrame(
        {
            "ISA": [f"ISA{n:08d}" for n in rng.integers(0, 10**8, rows)],
            "VRID": [f"V{n:07X}" for n in rng.choice(16**7, rows, replace=False)],
            "LOCATION": locations,
            "CARRIER LOAD TYPE": rng.choice(LOAD_TYPES, rows),
            "APPOINTMENT TYPE": rng.choice(APPT_TYPES, rows),
            "CARRIER": rng.choice(CARRIERS, rows),
            "YARD DWELL": [f"{h:.1f} hrs" for h in rng.uniform(0, 120, rows)],
            "PALLETS": rng.choice([0, 0, 4, 12, 26], rows),
            "UNITS": rng.integers(0, 2500, rows),
        }
    )


def generate_dockdash(yms: pd.DataFrame, extra: int, seed: int = 42) -> pd.DataFrame:
    rng = np.random.default_rng(seed + 1)
    known = yms.sample(frac=0.8, random_state=seed)[["ISA", "VRID"]]
    new = pd.DataFrame(
        {
            "ISA": [f"ISA{n:08d}" for n in rng.integers(0, 10**8, extra)],
            "VRID": [f"X{n:07X}" for n in rng.integers(0, 16**7, extra)],
        }
    )
    return pd.concat([known, new], ignore_index=True).sample(frac=1.0, random_state=seed)


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate sample YMS / Dock Dash CSV exports")
    parser.add_argument("--out", type=Path, default=Path("data"), help="Output directory")
    parser.add_argument("--rows", type=int, default=500, help="YMS rows")
    parser.add_argument("--extra", type=int, default=5, help="Dock Dash rows missing from YMS")
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args()

    if args.rows <= 0 or args.extra < 0:
        print("rows must be > 0 and extra >= 0", file=sys.stderr)
        return 1

    args.out.mkdir(parents=True, exist_ok=True)
    yms = generate_yms(args.rows, args.seed)
    dockdash = generate_dockdash(yms, args.extra, args.seed)
    # 引用符なし・カンマ区切りのみ (reader は RFC4180 の引用を扱わない)
    yms.to_csv(args.out / "yms.csv", index=False)
    dockdash.to_csv(args.out / "dockdash.csv", index=False)
    print(f"Created {args.out / 'yms.csv'} ({len(yms)} rows)")
    print(f"Created {args.out / 'dockdash.csv'} ({len(dockdash)} rows)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
