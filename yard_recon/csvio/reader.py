from __future__ import annotations

import logging
import re
from pathlib import Path

from ..errors import CsvParseError, CsvReadError
from ..models.record import Dataset, Record

"""CSV reader for YMS / Dock Dash exports.

Parsing rules:
- 空行 (空白のみ含む) は除外。残りが 2 行未満ならデータ無し扱い
- 1 行目がヘッダ: 引用符を全て除去 / trim / 大文字化。重複があればファイル拒否
- 以降の行: カンマ単純分割、値ごとに先頭・末尾の " を 1 つずつ除去して trim
- ヘッダと列数が合わない行はスキップ (ファイル全体は失敗させない)

Quoted fields containing commas are not supported; exports are expected to be
plain comma-separated text.
"""

__all__ = [
    "EMPTY_FILE_MESSAGE",
    "DUPLICATE_HEADERS_MESSAGE",
    "load_csv",
    "parse_csv",
    "read_csv_text",
]

logger = logging.getLogger(__name__)

EMPTY_FILE_MESSAGE = "File is empty or failed to parse header row."
DUPLICATE_HEADERS_MESSAGE = "CSV headers are not unique."

_LINE_SPLIT_RE = re.compile(r"\r?\n")
_HEADER_QUOTES_RE = re.compile(r"['\"]")
_VALUE_QUOTES_RE = re.compile(r'^"|"$')


def _normalize_header(raw: str) -> str:
    return _HEADER_QUOTES_RE.sub("", raw).strip().upper()


def _clean_value(raw: str) -> str:
    return _VALUE_QUOTES_RE.sub("", raw).strip()


def parse_csv(text: str, *, source: str | None = None) -> Dataset:
    """Parse raw CSV text into a Dataset.

    Returns an empty Dataset when there is no header/data, or when the header
    names are not unique after normalization (``problem`` is set in that case).
    """
    # 行番号は元ファイル基準で保持 (エラーログ用)。BOM と前後の空白は全体で trim
    numbered = [
        (idx, line)
        for idx, line in enumerate(_LINE_SPLIT_RE.split(text.lstrip("\ufeff").strip()), start=1)
        if line.strip() != ""
    ]
    if len(numbered) < 2:
        return Dataset(source=source)

    _, header_line = numbered[0]
    headers = tuple(_normalize_header(h) for h in header_line.split(","))
    if len(set(headers)) != len(headers):
        logger.error(f"{DUPLICATE_HEADERS_MESSAGE} headers={list(headers)}")
        return Dataset(problem=DUPLICATE_HEADERS_MESSAGE, source=source)

    records: list[Record] = []
    skipped: list[int] = []
    for line_number, line in numbered[1:]:
        values = [_clean_value(c) for c in line.split(",")]
        if len(values) != len(headers):
            skipped.append(line_number)
            continue
        records.append(Record(row_number=line_number, cells=dict(zip(headers, values))))

    if skipped:
        logger.debug(f"skipped {len(skipped)} malformed row(s) source={source} lines={skipped}")

    return Dataset(
        headers=headers,
        records=tuple(records),
        skipped_rows=tuple(skipped),
        source=source,
    )


def read_csv_text(path: Path) -> str:
    """Read a CSV file as UTF-8 text (a leading BOM is dropped).

    Raises:
        CsvReadError: If the file cannot be read
        CsvParseError: If the bytes are not valid UTF-8 text
    """
    try:
        return path.read_text(encoding="utf-8-sig")
    except UnicodeDecodeError as e:
        raise CsvParseError(f"File is not readable as UTF-8 text: {e}") from e
    except OSError as e:
        raise CsvReadError(f"Failed to read file: {e}") from e


def load_csv(path: str | Path) -> Dataset:
    """Read and parse one CSV export.

    Raises:
        CsvParseError: Path is not a .csv file, or the parse produced no records
        CsvReadError: Underlying file read failed
    """
    p = Path(path)
    if p.suffix.lower() != ".csv":
        raise CsvParseError(f"The selected file is not a CSV: {p.name}")
    dataset = parse_csv(read_csv_text(p), source=str(p))
    if dataset.is_empty:
        raise CsvParseError(dataset.problem or EMPTY_FILE_MESSAGE)
    return dataset
