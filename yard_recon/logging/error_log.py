from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord

"""Error log buffering module.

- JSON Lines 固定スキーマ (追加キー禁止)
- 起動ごとに `<log_dir>/errors-YYYYMMDD-HHMMSS.log` (UTC) を生成 (記録がある場合のみ)
- バッファリングして flush() 時にまとめて追記
"""

__all__ = [
    "DEFAULT_LOGS_DIR",
    "ErrorLogBuffer",
    "ErrorRecord",
]

DEFAULT_LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """In-memory buffer for error records. Flush writes JSON Lines.

    - ファイルパスは初回 flush で決定
    - スレッド安全性不要 (シリアル実行)
    """
    def __init__(self, log_dir: Path | None = None) -> None:
        self._records: list[ErrorRecord] = []
        self._log_dir = log_dir if log_dir is not None else DEFAULT_LOGS_DIR
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._log_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._log_dir / f"errors-{stamp}.log"
        return self._file_path

    @property
    def records(self) -> list[ErrorRecord]:
        return list(self._records)

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Append buffered records to the log file; None when nothing to write."""
        if not self._records:
            return self._file_path
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
