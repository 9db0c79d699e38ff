# Shared pytest fixtures
from __future__ import annotations
from collections.abc import Callable
from pathlib import Path
import pytest

from yard_recon.logging.init import reset_logging

YMS_HEADER = "ISA,VRID,LOCATION,CARRIER LOAD TYPE,APPOINTMENT TYPE,CARRIER,YARD DWELL,PALLETS,UNITS"


@pytest.fixture()
def temp_workdir(monkeypatch, tmp_path: Path) -> Path:
    (tmp_path / "config").mkdir()
    (tmp_path / "data").mkdir()
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("YARD_RECON_CONFIG", raising=False)
    reset_logging()
    yield tmp_path
    reset_logging()


@pytest.fixture()
def yms_csv_text() -> str:
    # 各行の分類:
    #  1: dropPallets + azngOver72 + volumeYard(10)
    #  2: dropFloor + volumeYard(0)
    #  3: parcelsDock + livesHanded + volumeDoors(1200)
    #  4: parcelsYard + volumeYard(5)
    #  5: transshipYard + azngOver72 (72h 境界) + volumeYard(300)
    #  6: 何も該当しない (LOCATION が DD/PS 以外)
    return "\n".join(
        [
            YMS_HEADER,
            "ISA1,v1,PS1,DROP,CARP,ACME,80hrs,5,10",
            "ISA2,v2,PS2,DROP,CARP,UPSN,10 hrs,0,0",
            "ISA3,v3,DD7,LIVE,SMALL_PARCEL,FDEG,3hrs,0,1200",
            "ISA4,v4,PS9,LIVE,SMALL_PARCEL,XPOL,1hrs,,5",
            "ISA5,v5,PS3,DROP,TRANSSHIP,AZNG,72hrs,0,300",
            "ISA6,v6,GATE,DROP,CARP,AZNG,10hrs,3,50",
        ]
    ) + "\n"


@pytest.fixture()
def dockdash_csv_text() -> str:
    return "\n".join(
        [
            "ISA,VRID,STATUS",
            "ISA1,V1,ARRIVED",  # 大文字小文字違いでも一致
            "ISA9,x9,ARRIVED",
            "ISA0,,ARRIVED",  # 空 VRID は照合対象外
            "ISA3, v3 ,ARRIVED",
        ]
    ) + "\n"


@pytest.fixture()
def write_csv(tmp_path: Path) -> Callable[[str, str], Path]:
    def _write(name: str, text: str) -> Path:
        p = tmp_path / "data" / name
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8")
        return p
    return _write


@pytest.fixture()
def yms_file(write_csv, yms_csv_text: str) -> Path:
    return write_csv("yms.csv", yms_csv_text)


@pytest.fixture()
def dockdash_file(write_csv, dockdash_csv_text: str) -> Path:
    return write_csv("dockdash.csv", dockdash_csv_text)


@pytest.fixture()
def write_config(temp_workdir: Path) -> Callable[[str], Path]:
    def _write(text: str) -> Path:
        cfg = temp_workdir / "config" / "recon.yml"
        cfg.write_text(text, encoding="utf-8")
        return cfg
    return _write


@pytest.fixture(autouse=True)
def _clean_app_logger():
    yield
    reset_logging()
