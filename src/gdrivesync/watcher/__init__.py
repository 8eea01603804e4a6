"""Public watcher exports for gdrivesync."""

from __future__ import annotations

from .debounce import DebounceBuffer
from .directory_watcher import DirectoryWatcher

__all__ = ["DebounceBuffer", "DirectoryWatcher"]
