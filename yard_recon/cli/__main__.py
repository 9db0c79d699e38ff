from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from yard_recon.config.loader import DEFAULT_CONFIG_PATH, ConfigError, ReconConfig, load_config
from yard_recon.logging.error_log import ErrorLogBuffer
from yard_recon.logging.init import log_summary, set_debug, setup_logging
from yard_recon.models.metrics_report import MetricBucket
from yard_recon.models.outcomes import DatasetSlot, LoadStatus, ReconcileStatus
from yard_recon.services.clipboard import ClipboardError, ClipboardSink, FileSink, TkClipboard
from yard_recon.services.presentation import render_detail, render_status, render_tiles
from yard_recon.services.progress import ProgressTracker
from yard_recon.services.session import ReconciliationSession
from yard_recon.services.summary import render_summary_line
from yard_recon.version import get_app_version

"""CLI entrypoint.

Flow:
- .env 読み込み → config 読み込み (任意)
- YMS → Dock Dash の順にロード (Dock Dash は YMS ロード後のみ選択可)
- reconcile → タイル表示 / SUMMARY 行 / 詳細テーブル / クリップボード
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1
EXIT_NOT_RECONCILED = 2

CONFIG_ENV_VAR = "YARD_RECON_CONFIG"


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv (warning only on failure)."""
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=override)
    except OSError as e:  # pragma: no cover
        print(f"WARNING: failed to load .env via python-dotenv: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="yard-recon",
        description="Reconcile a Dock Dash export against the YMS export and report yard metrics",
    )
    p.add_argument("--yms", type=Path, help="YMS export CSV (source of truth)")
    p.add_argument("--dockdash", type=Path, help="Dock Dash export CSV")
    p.add_argument("--config", type=Path, help=f"Config YAML (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument(
        "--detail",
        action="append",
        default=[],
        choices=[b.value for b in MetricBucket],
        help="Print ISA/VRID detail for a metric (repeatable)",
    )
    p.add_argument("--copy", action="store_true", help="Copy the summary to the system clipboard")
    p.add_argument("--summary-out", type=Path, help="Write the summary text to this file")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print dataset headers & first rows then exit")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    return p.parse_args(argv)


def _resolve_config(args: argparse.Namespace) -> ReconConfig:
    explicit = args.config
    if explicit is None and os.getenv(CONFIG_ENV_VAR):
        explicit = Path(os.environ[CONFIG_ENV_VAR])
    if explicit is not None:
        return load_config(explicit, required=True)
    # 既定パスの config は任意
    return load_config(DEFAULT_CONFIG_PATH, required=False)


def _inspect_data(session: ReconciliationSession) -> int:
    for slot in DatasetSlot:
        ds = session.dataset(slot)
        if ds.is_empty:
            print(f"{slot.label}: not loaded")
            continue
        name = Path(ds.source).name if ds.source else "-"
        print(f"FILE: {name} dataset={slot.value} rows={len(ds)} cols={list(ds.headers)}")
        print(ds.to_frame().head(3).to_string(index=False))
        if ds.skipped_rows:
            print(f"  skipped_rows={list(ds.skipped_rows)}")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # NOTE: None のときのみ sys.argv を読む ([] はテストからの明示的な空引数)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.version:
        print(f"Version: {get_app_version()}")
        return EXIT_SUCCESS

    _load_env_file(Path(".env"), override=True)
    try:
        cfg = _resolve_config(args)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    clipboard: ClipboardSink | None = TkClipboard() if (args.copy or cfg.copy_to_clipboard) else None
    error_log = ErrorLogBuffer(Path(cfg.error_log_dir))
    session = ReconciliationSession(clipboard=clipboard, error_log=error_log)

    try:
        return _run(args, cfg, session)
    finally:
        log_path = error_log.flush()
        if log_path is not None:
            logger.info(f"error log: {log_path}")


def _run(args: argparse.Namespace, cfg: ReconConfig, session: ReconciliationSession) -> int:
    logger = setup_logging()
    inputs = {
        DatasetSlot.YMS: args.yms or (Path(cfg.yms_path) if cfg.yms_path else None),
        DatasetSlot.DOCK_DASH: args.dockdash or (Path(cfg.dockdash_path) if cfg.dockdash_path else None),
    }

    with ProgressTracker(len(inputs), enabled=cfg.progress) as progress:
        for slot, path in inputs.items():
            if slot is DatasetSlot.DOCK_DASH and not session.dockdash_selectable:
                logger.info(f"{slot.label}: skipped (load YMS first)")
                continue
            if path is not None:
                progress.start_file(path)
            result = session.load(slot, path)
            if path is not None:
                progress.finish_file(result.ok, records=len(result.dataset) if result.dataset else 0)
            # 失敗内容は session 側でログ済み
            if result.status is LoadStatus.FAILED:
                return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(session)

    outcome = session.reconcile()
    if not outcome.status.reconciled or outcome.report is None:
        return EXIT_NOT_RECONCILED

    report = outcome.report
    print(render_tiles(report))
    status_line = render_status(outcome)
    if outcome.status is ReconcileStatus.CRITICAL:
        logger.warning(status_line)
    else:
        logger.info(status_line)

    summary_line = render_summary_line(len(session.yms), len(session.dockdash), report)
    log_summary(summary_line.removeprefix("SUMMARY "))

    summary_out = args.summary_out or (Path(cfg.summary_output) if cfg.summary_output else None)
    if summary_out is not None and outcome.summary_text is not None:
        try:
            FileSink(summary_out).copy(outcome.summary_text)
            logger.info(f"summary written: {summary_out}")
        except ClipboardError as e:
            logger.warning(f"summary: {e}")

    for bucket_id in args.detail:
        bucket = MetricBucket.from_id(bucket_id)
        print(render_detail(bucket, session.detail(bucket)))

    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
