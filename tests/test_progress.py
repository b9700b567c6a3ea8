"""Tests for the progress module."""

import io

import pytest
from rich.console import Console

from ytclipper.progress import (
    NullProgressReporter,
    PrintProgressReporter,
    RichProgressReporter,
)


class TestPrintProgressReporter:
    """Tests for the plain-text reporter."""

    def test_counts_units(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test each unit is printed with its position."""
        progress = PrintProgressReporter()
        progress.start("Splitting chapters", total=2)
        progress.update("Processing: Intro")
        progress.advance()
        progress.update("Processing: Outro")
        progress.advance()
        progress.stop("All chapters processed")

        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "Splitting chapters...",
            "[1/2] Processing: Intro",
            "[2/2] Processing: Outro",
            "All chapters processed",
        ]

    def test_indeterminate(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test updates without a total are printed as is."""
        progress = PrintProgressReporter()
        progress.start("Downloading")
        progress.update("still going")
        progress.stop()

        assert capsys.readouterr().out.splitlines() == ["Downloading...", "still going"]


class TestRichProgressReporter:
    """Tests for the rich reporter."""

    def test_determinate_task(self) -> None:
        """Test a bar task is created and advanced."""
        progress = RichProgressReporter(Console(file=io.StringIO()))
        progress.start("Splitting chapters", total=3)
        assert progress.progress is not None
        task_id = progress.task_id
        rich_progress = progress.progress

        progress.update("Processing: Intro")
        progress.advance()
        assert rich_progress.tasks[0].completed == 1
        assert rich_progress.tasks[0].description == "Processing: Intro"
        assert task_id is not None

        progress.stop("Done")
        assert progress.progress is None

    def test_spinner_task(self) -> None:
        """Test an indeterminate task has no total."""
        progress = RichProgressReporter(Console(file=io.StringIO()))
        progress.start("Downloading")
        assert progress.progress is not None
        assert progress.progress.tasks[0].total is None
        progress.stop()

    def test_stop_without_start(self) -> None:
        """Test stopping an idle reporter is harmless."""
        RichProgressReporter(Console(file=io.StringIO())).stop("nothing")

    def test_restart_replaces_display(self) -> None:
        """Test starting again stops the previous display."""
        progress = RichProgressReporter(Console(file=io.StringIO()))
        progress.start("first", total=1)
        first = progress.progress
        progress.start("second", total=2)
        assert progress.progress is not first
        progress.stop()


class TestNullProgressReporter:
    """Tests for the silent reporter."""

    def test_accepts_all_calls(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test every callback is a no-op."""
        progress = NullProgressReporter()
        progress.start("x", total=1)
        progress.update("y")
        progress.advance()
        progress.stop("z")
        assert capsys.readouterr().out == ""


class TestLiveFlag:
    """Tests for which reporters own the terminal."""

    def test_only_rich_is_live(self) -> None:
        """Test child output must be captured only under the rich display."""
        assert RichProgressReporter(Console(file=io.StringIO())).live is True
        assert PrintProgressReporter().live is False
        assert NullProgressReporter().live is False
