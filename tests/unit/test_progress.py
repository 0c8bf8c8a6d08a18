from __future__ import annotations

from unittest.mock import Mock, patch

from survey_table.services.progress import ProgressTracker, is_tty_enabled


def test_is_tty_enabled_returns_stdout_isatty():
    """Test that is_tty_enabled returns sys.stdout.isatty()."""
    with patch("sys.stdout.isatty", return_value=True):
        assert is_tty_enabled() is True

    with patch("sys.stdout.isatty", return_value=False):
        assert is_tty_enabled() is False


class TestProgressTracker:
    def test_init_with_tty_enabled(self):
        with patch("survey_table.services.progress.is_tty_enabled", return_value=True), \
             patch("survey_table.services.progress.tqdm") as mock_tqdm:

            tracker = ProgressTracker(4, description="Updating points")

            assert tracker.total == 4
            assert tracker.completed == 0
            assert tracker.enabled is True
            mock_tqdm.assert_called_once_with(
                total=4,
                desc="Updating points",
                unit="point",
                disable=False,
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )

    def test_init_with_tty_disabled(self):
        with patch("survey_table.services.progress.is_tty_enabled", return_value=False):
            tracker = ProgressTracker(4)
            assert tracker.enabled is False
            assert tracker.pbar is None

    def test_advance_updates_bar(self):
        mock_pbar = Mock()
        with patch("survey_table.services.progress.is_tty_enabled", return_value=True), \
             patch("survey_table.services.progress.tqdm", return_value=mock_pbar):
            tracker = ProgressTracker(2)
            tracker.advance("p1")
            tracker.advance()

        assert tracker.completed == 2
        assert mock_pbar.update.call_count == 2
        mock_pbar.set_postfix.assert_called_once_with(point="p1")

    def test_advance_counts_without_tty(self):
        with patch("survey_table.services.progress.is_tty_enabled", return_value=False):
            tracker = ProgressTracker(3)
            tracker.advance("p1")
            assert tracker.completed == 1

    def test_context_manager_closes_bar(self):
        mock_pbar = Mock()
        with patch("survey_table.services.progress.is_tty_enabled", return_value=True), \
             patch("survey_table.services.progress.tqdm", return_value=mock_pbar):
            with ProgressTracker(1) as tracker:
                tracker.advance()

        mock_pbar.close.assert_called_once()
        assert tracker.pbar is None
