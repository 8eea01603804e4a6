"""Fixed-window debounce buffer for created paths."""

from __future__ import annotations

from typing import Optional


class DebounceBuffer:
    """
    Collect paths and release them as one batch per fixed window.

    The window opens when the first path enters an empty buffer; the batch is
    due ``window_sec`` later no matter how many paths arrive meanwhile, so a
    steady stream of creates is still released once per window.
    Paths keep arrival order; a path seen twice in one batch is kept once.
    Not thread-safe: owned by the single consumer.
    """

    def __init__(self, window_sec: float) -> None:
        if window_sec < 0:
            raise ValueError("window_sec must be >= 0")
        self.window_sec = window_sec
        self._paths: list[str] = []
        self._seen: set[str] = set()
        self._first_added: Optional[float] = None

    def __len__(self) -> int:
        return len(self._paths)

    def add(self, path: str, now: float) -> None:
        if self._first_added is None:
            self._first_added = now
        if path not in self._seen:
            self._seen.add(path)
            self._paths.append(path)

    def time_until_due(self, now: float) -> Optional[float]:
        """Seconds until the pending batch is due, or None when empty."""
        if self._first_added is None:
            return None
        return max(0.0, self._first_added + self.window_sec - now)

    def drain_due(self, now: float) -> list[str]:
        """Return and clear the pending batch if due, else an empty list."""
        wait = self.time_until_due(now)
        if wait is None or wait > 0:
            return []
        batch = self._paths
        self._paths = []
        self._seen = set()
        self._first_added = None
        return batch
