"""Rich-based output formatting utilities for partialsum CLI commands."""

import os
import sys
from typing import Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)


class RichOutputFormatter:
    """Terminal output for the CLI.

    Result lines go to stdout untouched so they can be redirected into a
    checksum file; everything else goes to stderr.
    """

    def __init__(
        self,
        show_progress: Optional[bool] = None,
        console: Optional[Console] = None,
    ):
        """Initialize Rich output formatter.

        Args:
            show_progress: Force the progress bar on/off; by default it is
                shown only when stderr is a terminal
            console: Console for diagnostics (default: a plain stderr console)
        """
        self.console = console or Console(
            stderr=True, highlight=False, emoji=False, soft_wrap=True
        )
        if show_progress is None:
            show_progress = self.console.is_terminal
        self.show_progress = show_progress

    def out(self, line: str) -> None:
        """Write a result line to stdout.

        Paths that are not valid UTF-8 carry surrogate escapes; they are
        written back as the original filesystem bytes.
        """
        buffer = getattr(sys.stdout, "buffer", None)
        if buffer is None:
            sys.stdout.write(line + "\n")
            return
        sys.stdout.flush()
        buffer.write(os.fsencode(line) + b"\n")
        buffer.flush()

    def err(self, line: str) -> None:
        """Write a plain diagnostic line to stderr."""
        self.console.print(line, markup=False)

    def create_progress(self, unit: str, total: int) -> "ProgressManager | None":
        """Create a progress display, or None when progress is disabled."""
        if not self.show_progress:
            return None

        # stdout carries the records and must never be captured by the live display
        progress = Progress(
            SpinnerColumn(),
            TimeElapsedColumn(),
            BarColumn(bar_width=40),
            MofNCompleteColumn(),
            TextColumn(unit),
            TimeRemainingColumn(),
            console=self.console,
            expand=False,
            transient=True,
            redirect_stdout=False,
            redirect_stderr=False,
        )
        return ProgressManager(progress, total)


class ProgressManager:
    """Wraps a Rich progress bar as a progress observer.

    ``advance`` may be called from worker threads; Rich serializes task
    updates internally.
    """

    def __init__(self, progress: Progress, total: int):
        self.progress = progress
        self.total = total
        self._task: Optional[TaskID] = None

    def __enter__(self) -> "ProgressManager":
        self.progress.start()
        self._task = self.progress.add_task("", total=self.total)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.progress.stop()

    def advance(self, amount: int = 1) -> None:
        if self._task is not None:
            self.progress.advance(self._task, amount)
