"""ytclipper - Split online videos into chapter clips.

A tool for downloading a video with yt-dlp, reading its chapter markers and
cutting it into one file per chapter with ffmpeg, optionally with vertical,
audio-only and no-audio variants of every chapter.
"""

from ytclipper.downloader import VideoDownloader
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
from ytclipper.models import (
    Chapter,
    ClipResult,
    OutputLayout,
    VariantResult,
    VideoMetadata,
)
from ytclipper.pipeline import ClipPipeline
from ytclipper.runner import ProcessRunner
from ytclipper.splitter import ChapterSplitter
from ytclipper.utils import clean_url

__version__ = "0.1.0"
__all__ = [
    # Main classes
    "ClipPipeline",
    "VideoDownloader",
    "ChapterSplitter",
    "ProcessRunner",
    # Models
    "Chapter",
    "VideoMetadata",
    "OutputLayout",
    "VariantResult",
    "ClipResult",
    # Helpers
    "clean_url",
    # Exceptions
    "YtClipperError",
    "DependencyNotFoundError",
    "ProcessError",
    "MetadataFetchError",
    "NoChaptersError",
    "DownloadError",
    "ChapterSplitError",
    "FormatVariantError",
    "CleanupError",
]
