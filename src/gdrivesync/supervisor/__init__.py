"""Public supervisor exports for gdrivesync."""

from __future__ import annotations

from .control import (
    ControlResult,
    ServiceControl,
    ServiceState,
    StatusCallback,
    install_signal_handlers,
)
from .supervisor import SyncSupervisor

__all__ = [
    "SyncSupervisor",
    "ServiceControl",
    "ControlResult",
    "ServiceState",
    "StatusCallback",
    "install_signal_handlers",
]
