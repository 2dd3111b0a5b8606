# src/ktop/core/errors.py
"""
Accumulates the recoverable, per-unit errors of one report run.
"""

import threading
from typing import Iterator, List


class ReportErrors:
    """Thread-safe list of error messages, printed once after all tables."""

    def __init__(self):
        self._lock = threading.Lock()
        self._entries: List[str] = []

    def add(self, error) -> None:
        with self._lock:
            self._entries.append(str(error))

    @property
    def entries(self) -> List[str]:
        with self._lock:
            return list(self._entries)

    def numbered(self) -> List[str]:
        """Returns the messages as '1. msg', '2. msg', ..."""
        return [f"{i}. {msg}" for i, msg in enumerate(self.entries, start=1)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __bool__(self) -> bool:
        return len(self) > 0

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)
