"""End-to-end clipping pipeline.

Runs the stages strictly in sequence: dependency check, URL cleanup,
metadata fetch, download, chapter split, optional format variants and
cleanup of the full video.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ytclipper.downloader import VideoDownloader
from ytclipper.exceptions import CleanupError
from ytclipper.models import ClipResult, OutputLayout, VideoMetadata
from ytclipper.progress import NullProgressReporter, ProgressReporter
from ytclipper.runner import ProcessRunner
from ytclipper.splitter import ChapterSplitter
from ytclipper.utils import clean_url, safe_name

logger = logging.getLogger(__name__)


class ClipPipeline:
    """Download a video and split it into chapter clips.

    Attributes:
        output_root: Directory under which the per-video directory is created.
        keep_full: Keep the merged full video after splitting.
        formats: Also generate the format variants.
        quiet: Ask yt-dlp to print only errors while downloading.
        downloader: yt-dlp wrapper.
        splitter: ffmpeg wrapper.

    Example:
        >>> pipeline = ClipPipeline(keep_full=True, formats=True)
        >>> result = pipeline.run("https://www.youtube.com/watch?v=abc")
        >>> print(result)
        My Video: 5 clip(s), 15/15 format variant(s)
    """

    def __init__(
        self,
        output_root: str | Path = ".",
        keep_full: bool = False,
        formats: bool = False,
        quiet: bool = False,
        ytdlp_path: str | Path = "yt-dlp",
        ffmpeg_path: str | Path = "ffmpeg",
        progress: ProgressReporter | None = None,
        runner: ProcessRunner | None = None,
    ) -> None:
        self.output_root = Path(output_root)
        self.keep_full = keep_full
        self.formats = formats
        self.quiet = quiet
        self.progress = progress or NullProgressReporter()
        self.runner = runner or ProcessRunner()
        self.downloader = VideoDownloader(ytdlp_path, runner=self.runner)
        self.splitter = ChapterSplitter(ffmpeg_path, runner=self.runner)

    def check_dependencies(self) -> None:
        """Verify yt-dlp and ffmpeg can be spawned.

        Raises:
            DependencyNotFoundError: If either tool is missing.
        """
        self.runner.check_dependencies({
            "yt-dlp": self.downloader.ytdlp_path,
            "ffmpeg": self.splitter.ffmpeg_path,
        })

    def layout_for(self, metadata: VideoMetadata) -> OutputLayout:
        return OutputLayout(self.output_root / safe_name(metadata.title))

    def prepare(self, url: str) -> tuple[str, VideoMetadata]:
        """Check dependencies, clean the URL and fetch the video metadata.

        Nothing is downloaded or written.

        Returns:
            The cleaned URL and the video metadata.

        Raises:
            DependencyNotFoundError: If yt-dlp or ffmpeg is missing.
            MetadataFetchError: If metadata cannot be fetched or has no chapters.
        """
        self.check_dependencies()
        cleaned_url = clean_url(url)

        logger.info("Fetching video information...")
        metadata = self.downloader.fetch_metadata(cleaned_url)
        logger.info(f"Video: {metadata.title}")
        logger.info(f"Found {len(metadata.chapters)} chapters")
        return cleaned_url, metadata

    def cleanup(self, video_path: Path) -> None:
        """Remove the merged full video.

        Raises:
            CleanupError: If the file cannot be removed.
        """
        try:
            video_path.unlink()
        except OSError as e:
            raise CleanupError(
                f"Failed to remove full video file '{video_path}': {e}"
            ) from e
        logger.info("Removed full video file")

    def run(self, url: str) -> ClipResult:
        """Run every stage for ``url``.

        Args:
            url: Video URL, possibly containing shell escapes.

        Returns:
            Summary of the clips and variants produced.

        Raises:
            YtClipperError: On any fatal failure. Format variant failures are
                not fatal and are reported in the result instead.
        """
        cleaned_url, metadata = self.prepare(url)

        layout = self.layout_for(metadata)
        layout.create_clips_dir()
        logger.info(f"Output directory: {layout.root}")

        logger.info("Downloading video at highest quality...")
        self.progress.start("Downloading")
        try:
            # a live display owns the terminal, so yt-dlp output is captured
            video_path = self.downloader.download(
                cleaned_url,
                layout,
                quiet=self.quiet,
                capture=self.progress.live,
            )
        finally:
            self.progress.stop()
        logger.info("Download complete")

        logger.info("Splitting video into chapters...")
        result = ClipResult(metadata=metadata, layout=layout)
        result.clips = self.splitter.split_chapters(
            video_path, metadata.chapters, layout, progress=self.progress
        )

        if self.formats:
            logger.info("Generating format variants...")
            result.variants = self.splitter.generate_variants(
                video_path, metadata.chapters, layout, progress=self.progress
            )

        if self.keep_full:
            result.full_video_kept = True
        else:
            self.cleanup(video_path)

        return result
