"""Command-line interface for ytclipper.

This module provides a CLI for splitting videos into chapter clips
using argparse.
"""

import argparse
import logging
import sys

from rich.console import Console
from rich.table import Table

from ytclipper import __version__
from ytclipper.exceptions import YtClipperError
from ytclipper.models import VideoMetadata
from ytclipper.pipeline import ClipPipeline
from ytclipper.progress import (
    NullProgressReporter,
    PrintProgressReporter,
    ProgressReporter,
    RichProgressReporter,
)


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging based on verbosity settings."""
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(message)s",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="ytclipper",
        description=(
            "Split online videos into chapters with multiple format variants."
        ),
        epilog=(
            "Examples:\n"
            "  %(prog)s 'https://www.youtube.com/watch?v=VIDEO_ID'\n"
            "  %(prog)s -k -f 'https://www.youtube.com/watch?v=VIDEO_ID'\n"
            "  %(prog)s -o clips/ 'https://youtu.be/VIDEO_ID'\n"
            "  %(prog)s --list-chapters 'https://youtu.be/VIDEO_ID'\n"
            "  %(prog)s -n -f 'https://youtu.be/VIDEO_ID'\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "url",
        metavar="URL",
        help=(
            "URL of the video to split. Shell escapes such as \\? \\= \\& "
            "are removed."
        ),
    )

    # Output options
    output_group = parser.add_argument_group("Output options")
    output_group.add_argument(
        "-k",
        "--keep-full",
        action="store_true",
        help="Keep the full downloaded video after splitting.",
    )
    output_group.add_argument(
        "-f",
        "--formats",
        action="store_true",
        help=(
            "Also generate vertical (9:16), audio-only (MP3) and no-audio "
            "variants of every chapter."
        ),
    )
    output_group.add_argument(
        "-o",
        "--output-dir",
        default=".",
        metavar="DIR",
        help=(
            "Directory in which the per-video folder is created "
            "(default: current directory)."
        ),
    )

    # Mode options
    mode_group = parser.add_argument_group("Mode options")
    mode = mode_group.add_mutually_exclusive_group()
    mode.add_argument(
        "-l",
        "--list-chapters",
        action="store_true",
        help="List the chapters of the video without downloading it.",
    )
    mode.add_argument(
        "-n",
        "--dry-run",
        action="store_true",
        help="Show the files that would be created without downloading.",
    )

    # Tool options
    tool_group = parser.add_argument_group("Tool options")
    tool_group.add_argument(
        "--yt-dlp",
        dest="ytdlp_path",
        default="yt-dlp",
        metavar="PATH",
        help="Path to the yt-dlp executable (default: yt-dlp in PATH).",
    )
    tool_group.add_argument(
        "--ffmpeg",
        dest="ffmpeg_path",
        default="ffmpeg",
        metavar="PATH",
        help="Path to the ffmpeg executable (default: ffmpeg in PATH).",
    )

    # Behavior options
    behavior_group = parser.add_argument_group("Behavior options")
    verbosity = behavior_group.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output, including every external command.",
    )
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress all output except errors.",
    )
    behavior_group.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable progress bars (uses simple text output).",
    )

    return parser


def list_chapters(metadata: VideoMetadata, use_rich: bool = True) -> None:
    """List all chapters of a video."""
    if use_rich:
        console = Console()

        table = Table(title=f"Chapters in {metadata.title}")
        table.add_column("#", style="cyan", justify="right")
        table.add_column("Title", style="green")
        table.add_column("Start", style="yellow", justify="right")
        table.add_column("End", style="yellow", justify="right")
        table.add_column("Duration", style="magenta", justify="right")

        for idx, ch in enumerate(metadata.chapters, 1):
            table.add_row(
                str(idx),
                ch.title,
                f"{ch.start_time:.2f}s",
                f"{ch.end_time:.2f}s",
                f"{ch.duration:.2f}s",
            )

        console.print(table)
    else:
        print(f"\nChapters in {metadata.title}:")
        print("-" * 60)

        for idx, ch in enumerate(metadata.chapters, 1):
            print(
                f"  {idx:3d}. {ch.title:<30} "
                f"[{ch.start_time:.2f}s - {ch.end_time:.2f}s] "
                f"({ch.duration:.2f}s)"
            )


def run_dry_run(pipeline: ClipPipeline, metadata: VideoMetadata) -> None:
    """Print every file a real run would create."""
    print("\n=== DRY RUN ===\n")

    layout = pipeline.layout_for(metadata)
    print(f"Output directory: {layout.root}")
    if pipeline.keep_full:
        print(f"Full video: {layout.full_video}")
    else:
        print(f"Full video: {layout.full_video} (removed after splitting)")

    clips = pipeline.splitter.clip_paths(metadata.chapters, layout)
    print(f"\nClips ({len(clips)}):")
    for chapter, clip in zip(metadata.chapters, clips):
        print(f"  - {clip}  [{chapter}]")

    if pipeline.formats:
        planned = pipeline.splitter.variant_paths(metadata.chapters, layout)
        print(f"\nFormat variants ({len(planned)}):")
        for _, variant, path in planned:
            print(f"  - {variant}: {path}")


def create_progress(quiet: bool, no_progress: bool) -> ProgressReporter:
    """Pick the progress reporter matching the output flags."""
    if quiet:
        return NullProgressReporter()
    if no_progress:
        return PrintProgressReporter()
    return RichProgressReporter()


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(verbose=args.verbose, quiet=args.quiet)
    logger = logging.getLogger(__name__)

    if not args.quiet:
        print(f"ytclipper {__version__}\n")

    pipeline = ClipPipeline(
        output_root=args.output_dir,
        keep_full=args.keep_full,
        formats=args.formats,
        quiet=args.quiet,
        ytdlp_path=args.ytdlp_path,
        ffmpeg_path=args.ffmpeg_path,
        progress=create_progress(args.quiet, args.no_progress),
    )

    try:
        if args.list_chapters or args.dry_run:
            _, metadata = pipeline.prepare(args.url)
            if args.list_chapters:
                list_chapters(metadata, use_rich=not (args.no_progress or args.quiet))
            else:
                run_dry_run(pipeline, metadata)
            return 0

        result = pipeline.run(args.url)

    except YtClipperError as e:
        logger.error(f"Error: {e}")
        return 1
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        return 1

    # Print summary
    if not args.quiet:
        layout = result.layout
        print(f"\nDone! All clips saved to: {layout.root}")
        print(f"  - Original clips: {layout.clips_dir}")
        if args.formats:
            print(f"  - Format variants: {layout.formats_dir}")
        if result.full_video_kept:
            print(f"  - Full video: {layout.full_video}")

    failed = result.failed_variants
    if failed:
        logger.warning(f"{len(failed)} format variant(s) could not be created:")
        for variant in failed:
            logger.warning(f"  FAILED: {variant.output_file} - {variant.error_message}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
