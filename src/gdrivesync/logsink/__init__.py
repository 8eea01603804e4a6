"""Public log sink exports for gdrivesync."""

from __future__ import annotations

from .rotating_sink import (
    LogLineFormatter,
    RotatingLogSink,
    attach_log_sink,
    detach_log_sink,
)

__all__ = [
    "LogLineFormatter",
    "RotatingLogSink",
    "attach_log_sink",
    "detach_log_sink",
]
