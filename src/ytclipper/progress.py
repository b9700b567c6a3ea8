"""Progress reporters injected into the pipeline stages.

A stage calls ``start`` once, ``update`` before each unit of work,
``advance`` after it and ``stop`` when done. A ``total`` of None means the
work cannot be counted and a spinner is shown instead of a bar.
"""

from __future__ import annotations

from typing import Protocol

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)


class ProgressReporter(Protocol):
    """Callbacks a stage invokes while it works.

    ``live`` is True when the reporter redraws the terminal, so child
    processes must not write to it directly.
    """

    live: bool

    def start(self, description: str, total: int | None = None) -> None: ...

    def update(self, message: str) -> None: ...

    def advance(self) -> None: ...

    def stop(self, message: str | None = None) -> None: ...


class NullProgressReporter:
    """Reporter that discards every update."""

    live = False

    def start(self, description: str, total: int | None = None) -> None:
        pass

    def update(self, message: str) -> None:
        pass

    def advance(self) -> None:
        pass

    def stop(self, message: str | None = None) -> None:
        pass


class PrintProgressReporter:
    """Plain-text reporter printing one ``[current/total]`` line per unit."""

    live = False

    def __init__(self) -> None:
        self.total: int | None = None
        self.completed = 0

    def start(self, description: str, total: int | None = None) -> None:
        self.total = total
        self.completed = 0
        print(f"{description}...")

    def update(self, message: str) -> None:
        if self.total is None:
            print(message)
        else:
            print(f"[{self.completed + 1}/{self.total}] {message}")

    def advance(self) -> None:
        self.completed += 1

    def stop(self, message: str | None = None) -> None:
        if message:
            print(message)


class RichProgressReporter:
    """Progress reporter using the rich library.

    Each ``start`` opens a fresh progress display: a spinner for
    indeterminate work, a bar with a ``n/total`` counter otherwise.
    """

    live = True

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()
        self.progress: Progress | None = None
        self.task_id: TaskID | None = None

    def start(self, description: str, total: int | None = None) -> None:
        self.stop()
        if total is None:
            self.progress = Progress(
                SpinnerColumn(style="green"),
                TextColumn("{task.description}"),
                console=self.console,
                transient=True,
            )
        else:
            self.progress = Progress(
                TimeElapsedColumn(),
                BarColumn(),
                MofNCompleteColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=self.console,
            )
        self.task_id = self.progress.add_task(description, total=total)
        self.progress.start()

    def update(self, message: str) -> None:
        if self.progress is not None and self.task_id is not None:
            self.progress.update(self.task_id, description=message[:60])

    def advance(self) -> None:
        if self.progress is not None and self.task_id is not None:
            self.progress.advance(self.task_id)

    def stop(self, message: str | None = None) -> None:
        if self.progress is None:
            return
        if message and self.task_id is not None:
            self.progress.update(self.task_id, description=message)
        self.progress.stop()
        self.progress = None
        self.task_id = None
