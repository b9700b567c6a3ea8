"""Chapter cutting and format variant generation through ffmpeg.

This module provides the ChapterSplitter class, which cuts a downloaded video
into one lossless clip per chapter and can render cropped-vertical,
audio-only and video-only variants of every chapter.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from ytclipper.exceptions import ChapterSplitError, FormatVariantError, ProcessError
from ytclipper.models import VARIANT_EXTENSIONS, Chapter, OutputLayout, VariantResult
from ytclipper.progress import NullProgressReporter, ProgressReporter
from ytclipper.runner import ProcessRunner
from ytclipper.utils import chapter_stem, format_seconds

logger = logging.getLogger(__name__)

# ffmpeg flags per variant, placed between the time range and the output file
VARIANT_ARGS: dict[str, list[str]] = {
    # 9:16 crop centred by ffmpeg's default, audio untouched
    "vertical": [
        "-vf", "crop=ih*9/16:ih",
        "-c:a", "copy",
        "-avoid_negative_ts", "1",
    ],
    "audio_only": [
        "-vn",
        "-acodec", "libmp3lame",
        "-q:a", "2",
    ],
    "no_audio": [
        "-an",
        "-c:v", "copy",
        "-avoid_negative_ts", "1",
    ],
}

VARIANT_LABELS: dict[str, str] = {
    "vertical": "Vertical",
    "audio_only": "Audio only",
    "no_audio": "No audio",
}


class ChapterSplitter:
    """Cut a video into per-chapter files with ffmpeg.

    Attributes:
        ffmpeg_path: Path to the ffmpeg executable.
        runner: Process runner used for every invocation.

    Example:
        >>> splitter = ChapterSplitter()
        >>> clips = splitter.split_chapters(
        ...     Path("My Video/full_video.mp4"), metadata.chapters, layout
        ... )
    """

    def __init__(
        self,
        ffmpeg_path: str | Path = "ffmpeg",
        runner: ProcessRunner | None = None,
    ) -> None:
        # kept verbatim: Path() would turn "./ffmpeg" into a PATH lookup
        self.ffmpeg_path = str(ffmpeg_path)
        self.runner = runner or ProcessRunner()

    def build_split_args(
        self, video_path: Path, chapter: Chapter, output_file: Path
    ) -> list[str]:
        """Build the ffmpeg arguments for a lossless stream-copy cut."""
        return [
            "-i",
            str(video_path),
            "-ss",
            format_seconds(chapter.start_time),
            "-t",
            format_seconds(chapter.duration),
            "-c",
            "copy",
            "-avoid_negative_ts",
            "1",
            "-y",
            str(output_file),
        ]

    def build_variant_args(
        self,
        video_path: Path,
        chapter: Chapter,
        variant: str,
        output_file: Path,
    ) -> list[str]:
        """Build the ffmpeg arguments for one format variant of a chapter.

        Raises:
            ValueError: If ``variant`` is not a known variant name.
        """
        if variant not in VARIANT_ARGS:
            raise ValueError(f"Unknown format variant: {variant}")
        return [
            "-i",
            str(video_path),
            "-ss",
            format_seconds(chapter.start_time),
            "-t",
            format_seconds(chapter.duration),
            *VARIANT_ARGS[variant],
            "-y",
            str(output_file),
        ]

    def clip_paths(
        self, chapters: Sequence[Chapter], layout: OutputLayout
    ) -> list[Path]:
        """Return the clip path for every chapter, in chapter order."""
        return [
            layout.clips_dir / f"{chapter_stem(position, chapter)}.mp4"
            for position, chapter in enumerate(chapters, 1)
        ]

    def variant_paths(
        self, chapters: Sequence[Chapter], layout: OutputLayout
    ) -> list[tuple[Chapter, str, Path]]:
        """Return ``(chapter, variant, path)`` for every variant to generate."""
        planned = []
        for position, chapter in enumerate(chapters, 1):
            stem = chapter_stem(position, chapter)
            for variant, extension in VARIANT_EXTENSIONS.items():
                path = layout.variant_dir(variant) / f"{stem}.{extension}"
                planned.append((chapter, variant, path))
        return planned

    def split_chapters(
        self,
        video_path: Path,
        chapters: Sequence[Chapter],
        layout: OutputLayout,
        progress: ProgressReporter | None = None,
    ) -> list[Path]:
        """Cut every chapter out of ``video_path`` into ``layout.clips_dir``.

        Chapters are processed in order. The first failure aborts the run;
        clips already written are left on disk.

        Args:
            video_path: The merged full video.
            chapters: Chapters to cut.
            layout: Output tree receiving the clips.
            progress: Reporter advanced once per chapter.

        Returns:
            Paths of the written clips, in chapter order.

        Raises:
            ChapterSplitError: If ffmpeg fails for any chapter.
        """
        progress = progress or NullProgressReporter()
        layout.create_clips_dir()

        clips: list[Path] = []
        progress.start("Splitting chapters", total=len(chapters))
        for chapter, output_file in zip(chapters, self.clip_paths(chapters, layout)):
            progress.update(f"Processing: {chapter.title}")
            args = self.build_split_args(video_path, chapter, output_file)
            try:
                self.runner.run(self.ffmpeg_path, args)
            except ProcessError as e:
                progress.stop()
                raise ChapterSplitError(
                    f"Failed to split chapter: {chapter.title}", chapter=chapter
                ) from e
            clips.append(output_file)
            progress.advance()
        progress.stop("All chapters processed")

        return clips

    def generate_variants(
        self,
        video_path: Path,
        chapters: Sequence[Chapter],
        layout: OutputLayout,
        progress: ProgressReporter | None = None,
    ) -> list[VariantResult]:
        """Render the vertical, audio-only and no-audio variant of every chapter.

        Each variant is cut from the original full video, not from the chapter
        clip. A failing variant is logged and recorded, and generation
        continues with the next variant and chapter.

        Args:
            video_path: The merged full video.
            chapters: Chapters to render.
            layout: Output tree receiving ``formats/``.
            progress: Reporter advanced once per variant.

        Returns:
            One result per attempted variant, failures included.
        """
        progress = progress or NullProgressReporter()
        layout.create_formats_dirs()

        results: list[VariantResult] = []
        planned = self.variant_paths(chapters, layout)
        progress.start("Generating format variants", total=len(planned))
        for chapter, variant, output_file in planned:
            progress.update(f"{VARIANT_LABELS[variant]}: {chapter.title}")
            args = self.build_variant_args(video_path, chapter, variant, output_file)
            result = VariantResult(
                chapter=chapter, variant=variant, output_file=output_file
            )
            try:
                self.runner.run(self.ffmpeg_path, args)
            except ProcessError as e:
                label = VARIANT_LABELS[variant].lower()
                result.error = FormatVariantError(
                    f"Failed to create {label} format for '{chapter.title}': {e}"
                )
                logger.error(result.error_message)
            results.append(result)
            progress.advance()
        progress.stop("All format variants generated")

        return results
