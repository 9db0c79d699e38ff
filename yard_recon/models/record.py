from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

"""Record / Dataset / RecordRef models.

A Record is one CSV data row keyed by normalized (trimmed, upper-cased) header
name. A Dataset is the ordered collection of records produced by a single parse.
RecordRef is the ISA/VRID projection shown to operators in detail views.
"""

__all__ = [
    "MISSING_PLACEHOLDER",
    "Dataset",
    "Record",
    "RecordRef",
]

MISSING_PLACEHOLDER = "N/A"


@dataclass(frozen=True, eq=False)
class Record(Mapping[str, str]):
    """Immutable mapping of normalized column name -> raw cell value.

    Equality follows ``Mapping`` semantics, so a record compares equal to a
    plain dict holding the same cells.
    """
    row_number: int  # 1-based source line (header = 1)
    cells: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # 外部 dict の後からの変更を防ぐため read-only proxy に差し替え
        object.__setattr__(self, "cells", MappingProxyType(dict(self.cells)))

    def __getitem__(self, key: str) -> str:
        return self.cells[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __repr__(self) -> str:  # pragma: no cover (debug aid)
        return f"Record(row_number={self.row_number}, cells={dict(self.cells)!r})"


@dataclass(frozen=True)
class RecordRef:
    """Lightweight ISA/VRID projection of a record."""
    isa: str
    vrid: str

    @classmethod
    def from_record(cls, record: Mapping[str, str]) -> RecordRef:
        # 空文字・列欠落はどちらも N/A 表示
        return cls(
            isa=record.get("ISA") or MISSING_PLACEHOLDER,
            vrid=record.get("VRID") or MISSING_PLACEHOLDER,
        )

    def as_dict(self) -> dict[str, str]:
        return {"isa": self.isa, "vrid": self.vrid}


@dataclass(frozen=True)
class Dataset:
    """Ordered sequence of records from one parsed file.

    An empty dataset (no records) means "not loaded". ``problem`` carries the
    user-visible reason when a parse was refused, ``skipped_rows`` the line
    numbers of rows dropped for having the wrong field count.
    """
    headers: tuple[str, ...] = ()
    records: tuple[Record, ...] = ()
    skipped_rows: tuple[int, ...] = ()
    problem: str | None = None
    source: str | None = None

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    @property
    def is_empty(self) -> bool:
        return not self.records

    @property
    def columns(self) -> list[str]:
        """Column names as seen on the first record (empty when no records)."""
        if not self.records:
            return []
        return list(self.records[0])

    def to_frame(self):
        """Return the records as a pandas DataFrame (string dtype, header order)."""
        import pandas as pd

        return pd.DataFrame(
            [dict(r.cells) for r in self.records],
            columns=list(self.headers),
            dtype="string",
        )
