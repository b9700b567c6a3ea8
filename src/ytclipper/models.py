"""Data models for ytclipper."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ytclipper.exceptions import FormatVariantError

FULL_VIDEO_STEM = "full_video"
FULL_VIDEO_EXTENSION = "mp4"

# Variant name -> output file extension, in generation order
VARIANT_EXTENSIONS: dict[str, str] = {
    "vertical": "mp4",
    "audio_only": "mp3",
    "no_audio": "mp4",
}


@dataclass(frozen=True)
class Chapter:
    """Represents a chapter within a video.

    Attributes:
        title: The title/name of the chapter.
        start_time: Start time in seconds.
        end_time: End time in seconds.
        index: Optional chapter index within the source video.
    """

    title: str
    start_time: float
    end_time: float
    index: int | None = None

    @property
    def duration(self) -> float:
        """Calculate the duration of the chapter in seconds.

        Not validated: a chapter whose end precedes its start yields a
        non-positive duration.
        """
        return self.end_time - self.start_time

    def __str__(self) -> str:
        """Return a human-readable string representation."""
        return f"{self.title} ({self.start_time:.2f}s - {self.end_time:.2f}s)"


@dataclass(frozen=True)
class VideoMetadata:
    """Title and chapter markers of a remote video.

    Attributes:
        title: The video title as reported by the downloader.
        chapters: Chapters in their original order.
    """

    title: str
    chapters: list[Chapter] = field(default_factory=list)

    @classmethod
    def from_info_dict(cls, data: dict[str, Any]) -> VideoMetadata:
        """Build metadata from a yt-dlp ``--dump-json`` document.

        Raises:
            KeyError: If a required field is missing.
            TypeError: If a field has the wrong type.
            ValueError: If a chapter time is not numeric.
        """
        title = data["title"]
        if not isinstance(title, str):
            raise TypeError(f"title must be a string, got {type(title).__name__}")

        raw_chapters = data.get("chapters") or []
        if not isinstance(raw_chapters, list):
            raise TypeError("chapters must be a list")

        chapters = []
        for idx, chapter_data in enumerate(raw_chapters):
            chapter_title = chapter_data["title"]
            if not isinstance(chapter_title, str):
                raise TypeError(f"chapter {idx + 1} title must be a string")
            chapters.append(
                Chapter(
                    title=chapter_title,
                    start_time=float(chapter_data["start_time"]),
                    end_time=float(chapter_data["end_time"]),
                    index=idx,
                )
            )
        return cls(title=title, chapters=chapters)


@dataclass(frozen=True)
class OutputLayout:
    """Directory tree produced for one video.

    ``root`` is named after the sanitized video title and holds the merged
    full video, a ``clips/`` directory and optionally ``formats/``.
    """

    root: Path

    @property
    def full_video(self) -> Path:
        return self.root / f"{FULL_VIDEO_STEM}.{FULL_VIDEO_EXTENSION}"

    @property
    def full_video_template(self) -> Path:
        """Output template in yt-dlp's extension-substitution syntax."""
        return self.root / f"{FULL_VIDEO_STEM}.%(ext)s"

    @property
    def clips_dir(self) -> Path:
        return self.root / "clips"

    @property
    def formats_dir(self) -> Path:
        return self.root / "formats"

    def variant_dir(self, variant: str) -> Path:
        if variant not in VARIANT_EXTENSIONS:
            raise ValueError(f"Unknown format variant: {variant}")
        return self.formats_dir / variant

    def create_clips_dir(self) -> Path:
        self.clips_dir.mkdir(parents=True, exist_ok=True)
        return self.clips_dir

    def create_formats_dirs(self) -> dict[str, Path]:
        """Create ``formats/`` and one child directory per variant."""
        dirs = {}
        for variant in VARIANT_EXTENSIONS:
            path = self.variant_dir(variant)
            path.mkdir(parents=True, exist_ok=True)
            dirs[variant] = path
        return dirs


@dataclass(frozen=True)
class ProcessOutput:
    """Outcome of one finished external invocation."""

    args: list[str]
    returncode: int
    stdout: bytes = b""
    stderr: bytes = b""


@dataclass
class VariantResult:
    """Result of generating one format variant of one chapter.

    Attributes:
        chapter: The chapter the variant was cut from.
        variant: Variant name ('vertical', 'audio_only' or 'no_audio').
        output_file: Path of the file ffmpeg was asked to write.
        error: The failure, if the variant could not be created.
    """

    chapter: Chapter
    variant: str
    output_file: Path
    error: FormatVariantError | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def error_message(self) -> str | None:
        return str(self.error) if self.error else None

    def __str__(self) -> str:
        """Return a human-readable summary of the variant result."""
        status = "Success" if self.success else f"Failed: {self.error_message}"
        return f"{self.variant}: {self.output_file.name} - {status}"


@dataclass
class ClipResult:
    """Summary of a complete clipping run.

    Attributes:
        metadata: Title and chapters of the processed video.
        layout: Output directory tree.
        clips: Chapter clips written, in chapter order.
        variants: Format variants attempted, in generation order.
        full_video_kept: Whether the merged full video was left on disk.
    """

    metadata: VideoMetadata
    layout: OutputLayout
    clips: list[Path] = field(default_factory=list)
    variants: list[VariantResult] = field(default_factory=list)
    full_video_kept: bool = False

    @property
    def failed_variants(self) -> list[VariantResult]:
        return [v for v in self.variants if not v.success]

    def __str__(self) -> str:
        """Return a human-readable summary of the run."""
        summary = f"{self.metadata.title}: {len(self.clips)} clip(s)"
        if self.variants:
            created = len(self.variants) - len(self.failed_variants)
            summary += f", {created}/{len(self.variants)} format variant(s)"
        return summary
