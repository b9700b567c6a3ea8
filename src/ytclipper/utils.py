"""Naming and formatting helpers shared by the pipeline stages."""

from __future__ import annotations

from pathvalidate import sanitize_filename as pv_sanitize_filename

from ytclipper.models import Chapter

# Escapes left behind when a URL is pasted from a shell that quoted it
SHELL_ESCAPES: tuple[tuple[str, str], ...] = (
    ("\\?", "?"),
    ("\\=", "="),
    ("\\&", "&"),
)


def clean_url(url: str) -> str:
    r"""Remove shell-escaping artifacts from a pasted URL.

    Only ``\?``, ``\=`` and ``\&`` are unescaped; everything else is left
    untouched. Each sequence is replaced in a single pass, so a doubled
    escape such as ``\\?`` keeps one backslash and a second call
    removes it.

    Example:
        >>> clean_url("https://www.youtube.com/watch\\?v\\=abc")
        'https://www.youtube.com/watch?v=abc'
    """
    for escaped, plain in SHELL_ESCAPES:
        url = url.replace(escaped, plain)
    return url


def safe_name(raw: str) -> str:
    """Make a title usable as a single path component on any platform.

    Invalid characters are dropped and reserved names (CON, NUL, ...) are
    fixed by pathvalidate.
    """
    return str(pv_sanitize_filename(raw, platform="universal"))


def format_seconds(seconds: float) -> str:
    """Format a time offset the way it is passed to ffmpeg (3 decimals)."""
    return f"{seconds:.3f}"


def chapter_stem(position: int, chapter: Chapter) -> str:
    """Build the output filename stem for the chapter at 1-based ``position``.

    Example:
        >>> chapter_stem(3, Chapter("Intro / Setup", 0.0, 12.0))
        '03_Intro  Setup'
    """
    return f"{position:02d}_{safe_name(chapter.title)}"
