"""Shared fixtures: a fake yt-dlp/ffmpeg pair behind ``subprocess.run``."""

import json
import subprocess
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest


class FakeTools:
    """Stand-in for ``subprocess.run`` that emulates yt-dlp and ffmpeg.

    yt-dlp answers ``--dump-json`` with ``info`` and writes the merged video
    to its ``-o`` template; ffmpeg writes its last argument. Commands for
    which ``fail_on`` returns True exit with status 1.
    """

    def __init__(
        self,
        info: dict[str, Any],
        fail_on: Callable[[list[str]], bool] | None = None,
    ) -> None:
        self.info = info
        self.fail_on = fail_on or (lambda cmd: False)
        self.download_creates_file = True
        self.calls: list[list[str]] = []

    def __call__(
        self, cmd: list[str], capture_output: bool = False, check: bool = False,
        **kwargs: Any,
    ) -> subprocess.CompletedProcess:
        cmd = list(cmd)
        self.calls.append(cmd)
        tool = Path(cmd[0]).name

        if cmd[1:] in (["--version"], ["-version"]):
            return subprocess.CompletedProcess(cmd, 0, b"1.0", b"")

        if self.fail_on(cmd):
            if check:
                raise subprocess.CalledProcessError(1, cmd, b"", b"simulated failure")
            return subprocess.CompletedProcess(cmd, 1, b"", b"simulated failure")

        if tool == "yt-dlp" and "--dump-json" in cmd:
            stdout = json.dumps(self.info).encode("utf-8")
            return subprocess.CompletedProcess(cmd, 0, stdout, b"")

        if tool == "yt-dlp":
            template = cmd[cmd.index("-o") + 1]
            if self.download_creates_file:
                Path(template.replace("%(ext)s", "mp4")).write_bytes(b"video")
            return subprocess.CompletedProcess(cmd, 0, None, None)

        if tool == "ffmpeg":
            Path(cmd[-1]).write_bytes(b"media")

        return subprocess.CompletedProcess(cmd, 0, b"", b"")

    def commands(self, tool: str) -> list[list[str]]:
        """Return recorded calls to ``tool``, excluding version checks."""
        return [
            c for c in self.calls
            if Path(c[0]).name == tool and c[1:] not in (["--version"], ["-version"])
        ]


@pytest.fixture
def video_info() -> dict[str, Any]:
    """Sample yt-dlp ``--dump-json`` document."""
    return {
        "id": "abc123",
        "title": "Cooking: The Basics",
        "duration": 60.0,
        "chapters": [
            {"title": "Intro", "start_time": 0.0, "end_time": 10.0},
            {"title": "Knife Skills", "start_time": 10.0, "end_time": 25.0},
            {"title": "Outro", "start_time": 25.0, "end_time": 60.0},
        ],
    }


@pytest.fixture
def fake_tools(video_info: dict[str, Any]) -> Iterator[FakeTools]:
    """Patch ``subprocess.run`` with a working yt-dlp/ffmpeg fake."""
    tools = FakeTools(video_info)
    with patch("subprocess.run", side_effect=tools):
        yield tools


@pytest.fixture
def make_tools() -> type[FakeTools]:
    """Factory for fakes with custom failures, patched in by the test."""
    return FakeTools
