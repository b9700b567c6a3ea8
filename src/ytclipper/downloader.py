"""Metadata fetching and video download through yt-dlp."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from ytclipper.exceptions import (
    DownloadError,
    MetadataFetchError,
    NoChaptersError,
    ProcessError,
)
from ytclipper.models import OutputLayout, VideoMetadata
from ytclipper.runner import ProcessRunner

logger = logging.getLogger(__name__)

# Best video and audio merged into one file, or the best single file
DOWNLOAD_FORMAT = "bestvideo+bestaudio/best"
MERGE_OUTPUT_FORMAT = "mp4"


class VideoDownloader:
    """Fetch video metadata and media with yt-dlp.

    Attributes:
        ytdlp_path: Path to the yt-dlp executable.
        runner: Process runner used for every invocation.

    Example:
        >>> downloader = VideoDownloader()
        >>> metadata = downloader.fetch_metadata("https://youtu.be/abc")
        >>> layout = OutputLayout(Path(".") / "My Video")
        >>> downloader.download("https://youtu.be/abc", layout)
        PosixPath('My Video/full_video.mp4')
    """

    def __init__(
        self,
        ytdlp_path: str | Path = "yt-dlp",
        runner: ProcessRunner | None = None,
    ) -> None:
        # kept verbatim: Path() would turn "./yt-dlp" into a PATH lookup
        self.ytdlp_path = str(ytdlp_path)
        self.runner = runner or ProcessRunner()

    def fetch_metadata(self, url: str) -> VideoMetadata:
        """Fetch the title and chapter markers of a video without downloading it.

        Args:
            url: Video URL (already cleaned).

        Returns:
            Parsed metadata with at least one chapter.

        Raises:
            MetadataFetchError: If yt-dlp fails or its output cannot be parsed.
            NoChaptersError: If the video declares no chapters.
        """
        try:
            output = self.runner.run(
                self.ytdlp_path, ["--dump-json", "--no-download", url]
            )
        except ProcessError as e:
            raise MetadataFetchError(f"yt-dlp failed: {e.stderr or e}") from e

        try:
            text = output.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MetadataFetchError("Failed to parse yt-dlp output") from e

        try:
            data = json.loads(text)
            if not isinstance(data, dict):
                raise TypeError("expected a JSON object")
            metadata = VideoMetadata.from_info_dict(data)
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            raise MetadataFetchError(
                f"Failed to parse video information: {e}"
            ) from e

        if not metadata.chapters:
            raise NoChaptersError("No chapters found in this video")

        logger.debug(f"Fetched metadata for '{metadata.title}'")
        return metadata

    def download(
        self,
        url: str,
        layout: OutputLayout,
        quiet: bool = False,
        capture: bool = False,
    ) -> Path:
        """Download the video at the best quality, merged into an MP4 file.

        By default the child process writes its own output to the terminal;
        no progress is parsed from it.

        Args:
            url: Video URL (already cleaned).
            layout: Output tree whose root receives ``full_video.mp4``.
            quiet: Pass ``--quiet --no-warnings`` so yt-dlp prints only errors.
            capture: Capture yt-dlp's output instead of letting it reach the
                terminal. Its stderr then ends up in the error message.

        Returns:
            Path to the downloaded file.

        Raises:
            DownloadError: If yt-dlp fails or the expected file is missing.
        """
        layout.root.mkdir(parents=True, exist_ok=True)
        args = [
            "-f",
            DOWNLOAD_FORMAT,
            "--merge-output-format",
            MERGE_OUTPUT_FORMAT,
            "-o",
            str(layout.full_video_template),
        ]
        if quiet:
            args += ["--quiet", "--no-warnings"]
        args.append(url)

        try:
            self.runner.run(self.ytdlp_path, args, capture=capture)
        except ProcessError as e:
            raise DownloadError(f"Failed to download video: {e}") from e

        # yt-dlp may report success yet pick another name or extension
        video_path = layout.full_video
        if not video_path.exists():
            raise DownloadError(f"Downloaded video file not found: {video_path}")

        return video_path
