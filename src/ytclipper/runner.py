"""External process invocation for ytclipper.

Every call to yt-dlp or ffmpeg goes through :class:`ProcessRunner`, so each
stage sees the same result type and chooses its own failure policy.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Sequence
from pathlib import Path

from ytclipper.exceptions import DependencyNotFoundError, ProcessError
from ytclipper.models import ProcessOutput

logger = logging.getLogger(__name__)

INSTALL_HINTS: dict[str, str] = {
    "yt-dlp": "https://github.com/yt-dlp/yt-dlp#installation",
    "ffmpeg": "https://ffmpeg.org/download.html",
}

# ffmpeg only understands the single-dash form
VERSION_FLAGS: dict[str, str] = {
    "ffmpeg": "-version",
}


class ProcessRunner:
    """Run external tools one at a time and report failures uniformly.

    Example:
        >>> runner = ProcessRunner()
        >>> output = runner.run("ffmpeg", ["-version"])
        >>> output.returncode
        0
    """

    def run(
        self,
        tool: str | Path,
        args: Sequence[str],
        capture: bool = True,
    ) -> ProcessOutput:
        """Run ``tool`` with ``args`` and wait for it to finish.

        Args:
            tool: Executable name or path.
            args: Command-line arguments, without the executable.
            capture: If True, capture stdout/stderr. If False, the child
                writes straight to the terminal.

        Returns:
            The finished process output.

        Raises:
            ProcessError: If the process cannot be spawned or exits non-zero.
        """
        cmd = [str(tool), *args]
        logger.debug(f"Running: {shlex.join(cmd)}")

        try:
            result = subprocess.run(cmd, capture_output=capture, check=True)
        except subprocess.CalledProcessError as e:
            stderr = _decode(e.stderr)
            raise ProcessError(
                f"{tool} exited with status {e.returncode}"
                + (f": {stderr.strip()}" if stderr.strip() else ""),
                tool=str(tool),
                returncode=e.returncode,
                stderr=stderr,
            ) from e
        except OSError as e:
            raise ProcessError(
                f"Failed to execute {tool}: {e}", tool=str(tool)
            ) from e

        return ProcessOutput(
            args=cmd,
            returncode=result.returncode,
            stdout=result.stdout or b"",
            stderr=result.stderr or b"",
        )

    def check_dependency(self, name: str, path: str | Path | None = None) -> None:
        """Verify that a tool can be spawned.

        Only a spawn failure counts; the tool's exit status is ignored.

        Args:
            name: Tool name ('yt-dlp' or 'ffmpeg'), used for the message.
            path: Executable path. Defaults to ``name`` looked up in PATH.

        Raises:
            DependencyNotFoundError: If the tool cannot be executed.
        """
        executable = str(path) if path is not None else name
        flag = VERSION_FLAGS.get(name, "--version")
        try:
            subprocess.run([executable, flag], capture_output=True)
        except OSError as e:
            hints = "\n".join(
                f"For {tool}: {url}" for tool, url in INSTALL_HINTS.items()
            )
            raise DependencyNotFoundError(
                f"{name} is not installed or not in PATH ('{executable}'). "
                f"Please install it first.\n{hints}"
            ) from e
        logger.debug(f"Found {name} at '{executable}'")

    def check_dependencies(self, tools: dict[str, str | Path]) -> None:
        """Check each ``name -> path`` pair in order, stopping at the first miss."""
        for name, path in tools.items():
            self.check_dependency(name, path)


def _decode(data: bytes | str | None) -> str:
    if data is None:
        return ""
    if isinstance(data, str):
        return data
    return data.decode("utf-8", errors="replace")
