# src/ktop/reporters/progress.py
"""
Progress indication while pods are being sampled.

The notifier is a side channel: collectors call start/advance/stop on it,
but nothing they return depends on it.
"""

import threading
from typing import Optional

from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, SpinnerColumn, TextColumn


class ProgressNotifier:
    """Does nothing. Used when progress output is not wanted (tests, pipes)."""

    def start(self, total: int, description: str = "") -> None:
        pass

    def advance(self, step: int = 1) -> None:
        pass

    def stop(self) -> None:
        pass


class RichProgress(ProgressNotifier):
    """A transient spinner and bar drawn on stderr with rich."""

    def __init__(self, console: Optional[Console] = None, lock: Optional[threading.Lock] = None):
        self.console = console or Console(stderr=True)
        self._lock = lock or threading.Lock()
        self._progress: Optional[Progress] = None
        self._task = None

    def start(self, total: int, description: str = "") -> None:
        self.stop()
        with self._lock:
            self._progress = Progress(
                SpinnerColumn(),
                TextColumn("{task.description}"),
                BarColumn(),
                MofNCompleteColumn(),
                console=self.console,
                transient=True,
            )
            self._task = self._progress.add_task(description, total=total)
            self._progress.start()

    def advance(self, step: int = 1) -> None:
        if self._progress is not None:
            self._progress.advance(self._task, step)

    def stop(self) -> None:
        if self._progress is None:
            return
        with self._lock:
            self._progress.stop()
            self._progress = None
            self._task = None
