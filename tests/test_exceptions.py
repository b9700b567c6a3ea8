"""Tests for the exceptions module."""

import pytest

from ytclipper.exceptions import (
    ChapterSplitError,
    CleanupError,
    DependencyNotFoundError,
    DownloadError,
    FormatVariantError,
    MetadataFetchError,
    NoChaptersError,
    ProcessError,
    YtClipperError,
)
from ytclipper.models import Chapter


class TestExceptionHierarchy:
    """Tests for the exception class hierarchy."""

    @pytest.mark.parametrize(
        "exc_class",
        [
            DependencyNotFoundError,
            ProcessError,
            MetadataFetchError,
            NoChaptersError,
            DownloadError,
            ChapterSplitError,
            FormatVariantError,
            CleanupError,
        ],
    )
    def test_inherits_base(self, exc_class: type) -> None:
        """Test every error derives from YtClipperError."""
        assert issubclass(exc_class, YtClipperError)
        assert issubclass(exc_class, Exception)

    def test_no_chapters_is_metadata_error(self) -> None:
        """Test a missing chapter list is reported as a metadata failure."""
        assert issubclass(NoChaptersError, MetadataFetchError)

    def test_catch_all_with_base_exception(self) -> None:
        """Test that base exception catches all subclasses."""
        exceptions = [
            DependencyNotFoundError("yt-dlp missing"),
            DownloadError("Download failed"),
            CleanupError("Cannot delete"),
        ]

        for exc in exceptions:
            with pytest.raises(YtClipperError):
                raise exc


class TestExceptionAttributes:
    """Tests for the extra data carried by exceptions."""

    def test_process_error_fields(self) -> None:
        """Test ProcessError keeps tool, exit status and stderr."""
        exc = ProcessError("ffmpeg failed", tool="ffmpeg", returncode=1, stderr="bad")
        assert str(exc) == "ffmpeg failed"
        assert exc.tool == "ffmpeg"
        assert exc.returncode == 1
        assert exc.stderr == "bad"

    def test_process_error_defaults(self) -> None:
        """Test ProcessError for a process that never started."""
        exc = ProcessError("spawn failed", tool="yt-dlp")
        assert exc.returncode is None
        assert exc.stderr == ""

    def test_chapter_split_error_keeps_chapter(self) -> None:
        """Test ChapterSplitError names the offending chapter."""
        chapter = Chapter("Intro", 0.0, 10.0)
        exc = ChapterSplitError("Failed to split chapter: Intro", chapter=chapter)
        assert exc.chapter is chapter
        assert "Intro" in str(exc)


class TestExceptionImports:
    """Tests for exception imports from package root."""

    def test_import_from_package_root(self) -> None:
        """Test that exceptions can be imported from package root."""
        from ytclipper import ChapterSplitError as CSE
        from ytclipper import YtClipperError as YCE

        assert CSE is ChapterSplitError
        assert YCE is YtClipperError
