"""Public model exports for gdrivesync."""

from __future__ import annotations

from .events import EventKind, FileEvent
from .file_info import FileInfo
from .results import UploadResult, UploadStatus

__all__ = [
    "EventKind",
    "FileEvent",
    "FileInfo",
    "UploadResult",
    "UploadStatus",
]
