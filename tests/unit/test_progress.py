from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock, patch

from yard_recon.services.progress import ProgressTracker, is_tty_enabled


def test_is_tty_enabled_returns_stdout_isatty():
    with patch('sys.stdout.isatty', return_value=True):
        assert is_tty_enabled() is True

    with patch('sys.stdout.isatty', return_value=False):
        assert is_tty_enabled() is False


class TestProgressTracker:
    """Test cases for ProgressTracker class."""

    def test_init_with_tty_enabled(self):
        with patch('yard_recon.services.progress.is_tty_enabled', return_value=True), \
             patch('yard_recon.services.progress.tqdm') as mock_tqdm:

            tracker = ProgressTracker(2)

            assert tracker.total_files == 2
            assert tracker.description == "Loading datasets"
            assert tracker.current_file == 0
            assert tracker.enabled is True
            mock_tqdm.assert_called_once_with(
                total=2,
                desc="Loading datasets",
                unit="file",
                disable=False,
                leave=False,
                position=0,
                ncols=80,
                ascii=True,
            )

    def test_init_with_tty_disabled(self):
        with patch('yard_recon.services.progress.is_tty_enabled', return_value=False):
            tracker = ProgressTracker(2)
            assert tracker.enabled is False
            assert tracker.pbar is None

    def test_disabled_by_config_even_on_tty(self):
        with patch('yard_recon.services.progress.is_tty_enabled', return_value=True), \
             patch('yard_recon.services.progress.tqdm') as mock_tqdm:
            tracker = ProgressTracker(2, enabled=False)
            assert tracker.pbar is None
            mock_tqdm.assert_not_called()

    def test_start_and_finish_file(self):
        mock_pbar = Mock()
        with patch('yard_recon.services.progress.is_tty_enabled', return_value=True), \
             patch('yard_recon.services.progress.tqdm', return_value=mock_pbar):

            tracker = ProgressTracker(2, description="Loading")
            tracker.start_file(Path("data/yms.csv"))
            assert tracker.current_file == 1
            mock_pbar.set_description.assert_called_with("Loading (yms.csv)")

            tracker.finish_file(success=True, records=6)
            mock_pbar.update.assert_called_once_with(1)
            mock_pbar.set_postfix.assert_called_once_with(records=6, ok=True)
            mock_pbar.set_description.assert_called_with("Loading")

    def test_start_file_with_tty_disabled(self):
        with patch('yard_recon.services.progress.is_tty_enabled', return_value=False):
            tracker = ProgressTracker(2)
            tracker.start_file(Path("yms.csv"))
            tracker.finish_file(success=False)
            assert tracker.current_file == 1

    def test_context_manager_closes(self):
        mock_pbar = Mock()
        with patch('yard_recon.services.progress.is_tty_enabled', return_value=True), \
             patch('yard_recon.services.progress.tqdm', return_value=mock_pbar):

            with ProgressTracker(2) as tracker:
                assert isinstance(tracker, ProgressTracker)

            mock_pbar.close.assert_called_once()
            assert tracker.pbar is None
