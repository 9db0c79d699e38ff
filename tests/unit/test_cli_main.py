from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from yard_recon.cli.__main__ import main as cli_main
from yard_recon.logging.init import reset_logging
from yard_recon.services.clipboard import ClipboardError, MemoryClipboard

EXPECTED_CLIPBOARD = "1\n1\n1\n1\n2\n1\n2\n\n1\n\n\n1,200\n315"


def test_cli_copy_uses_clipboard(temp_workdir: Path, yms_file: Path, dockdash_file: Path, capsys):
    reset_logging()
    clip = MemoryClipboard()
    with patch("yard_recon.cli.__main__.TkClipboard", return_value=clip):
        code = cli_main(["--yms", str(yms_file), "--dockdash", str(dockdash_file), "--copy"])
    assert code == 0
    assert clip.history == [EXPECTED_CLIPBOARD]
    assert "INFO summary copied" in capsys.readouterr().out


def test_cli_copy_failure_is_warning_only(temp_workdir: Path, yms_file: Path, dockdash_file: Path, capsys):
    reset_logging()

    class _Broken:
        def copy(self, text: str) -> None:
            raise ClipboardError("no display")

    with patch("yard_recon.cli.__main__.TkClipboard", return_value=_Broken()):
        code = cli_main(["--yms", str(yms_file), "--dockdash", str(dockdash_file), "--copy"])
    assert code == 0
    assert "WARN clipboard: no display" in capsys.readouterr().out


def test_cli_without_copy_never_touches_clipboard(temp_workdir: Path, yms_file: Path, dockdash_file: Path):
    reset_logging()
    with patch("yard_recon.cli.__main__.TkClipboard") as mock_tk:
        assert cli_main(["--yms", str(yms_file), "--dockdash", str(dockdash_file)]) == 0
    mock_tk.assert_not_called()


def test_cli_reads_config_path_from_dotenv(temp_workdir: Path, monkeypatch, yms_file: Path, dockdash_file: Path):
    cfg = temp_workdir / "config" / "from_env.yml"
    cfg.write_text(
        f"yms_path: {yms_file.as_posix()}\n"
        f"dockdash_path: {dockdash_file.as_posix()}\n"
        "summary_output: ./env_summary.txt\n",
        encoding="utf-8",
    )
    (temp_workdir / ".env").write_text(f"YARD_RECON_CONFIG={cfg.as_posix()}\n", encoding="utf-8")
    reset_logging()
    try:
        assert cli_main([]) == 0
    finally:
        # load_dotenv は os.environ を直接書き換える
        monkeypatch.delenv("YARD_RECON_CONFIG", raising=False)
    assert (temp_workdir / "env_summary.txt").exists()


def test_cli_unknown_detail_is_usage_error(temp_workdir: Path):
    reset_logging()
    with pytest.raises(SystemExit) as exc:
        cli_main(["--detail", "nope"])
    assert exc.value.code == 2


def test_cli_is_namespace_package():
    import importlib.util

    spec = importlib.util.find_spec("yard_recon.cli")
    assert spec is not None
    # __main__ を二重ロードしないよう cli はパッケージ初期化を持たない
    assert spec.origin in (None, "namespace")
