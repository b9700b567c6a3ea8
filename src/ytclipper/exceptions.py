"""Custom exceptions for ytclipper."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ytclipper.models import Chapter


class YtClipperError(Exception):
    """Base exception for all ytclipper errors.

    This can be used to catch any exception raised by the package:

        try:
            pipeline.run(url)
        except YtClipperError as e:
            print(f"Clipping failed: {e}")
    """


class DependencyNotFoundError(YtClipperError):
    """Raised when yt-dlp or ffmpeg cannot be invoked.

    This typically occurs when:
    - The tool is not installed on the system
    - The tool is not in the system PATH
    - A custom path was provided but the executable doesn't exist
    """


class ProcessError(YtClipperError):
    """Raised when a single external invocation fails.

    Attributes:
        tool: The executable that was invoked.
        returncode: Exit status, or None if the process could not be spawned.
        stderr: Captured standard error text (may be empty).
    """

    def __init__(
        self,
        message: str,
        tool: str,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.tool = tool
        self.returncode = returncode
        self.stderr = stderr


class MetadataFetchError(YtClipperError):
    """Raised when video metadata cannot be fetched or parsed.

    This can occur due to:
    - yt-dlp exiting with an error (bad URL, private video, network)
    - Output that is not valid UTF-8 or not valid JSON
    - JSON that does not describe a video with a title
    """


class NoChaptersError(MetadataFetchError):
    """Raised when the video declares no chapter markers."""


class DownloadError(YtClipperError):
    """Raised when the video download fails or leaves no output file."""


class ChapterSplitError(YtClipperError):
    """Raised when cutting a chapter out of the full video fails.

    Aborts the run; clips produced for earlier chapters are left on disk.
    """

    def __init__(self, message: str, chapter: Chapter | None = None) -> None:
        super().__init__(message)
        self.chapter = chapter


class FormatVariantError(YtClipperError):
    """Describes a failed format variant.

    Never raised out of the variant generator; instances are attached to
    failed variant results so the run can continue.
    """


class CleanupError(YtClipperError):
    """Raised when the full video file cannot be removed."""
