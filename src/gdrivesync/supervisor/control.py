"""Service control surface: control requests in, status out."""

from __future__ import annotations

import enum
import signal
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from .supervisor import SyncSupervisor


class ServiceControl(str, enum.Enum):
    STOP = "stop"
    INTERROGATE = "interrogate"
    PAUSE = "pause"
    CONTINUE = "continue"
    SHUTDOWN = "shutdown"


class ControlResult(str, enum.Enum):
    NO_ERROR = "no_error"
    NOT_IMPLEMENTED = "not_implemented"


class ServiceState(str, enum.Enum):
    RUNNING = "running"
    STOPPED = "stopped"


StatusCallback = Callable[[ServiceState, int], None]


def install_signal_handlers(
    supervisor: "SyncSupervisor",
    signals: tuple[int, ...] = (signal.SIGTERM, signal.SIGINT),
) -> dict[int, Any]:
    """
    Route OS termination signals to supervisor.handle_control(STOP).

    Must be called from the main thread. Returns the previous handlers.
    """
    previous: dict[int, Any] = {}

    # No logging here: the interrupted frame may already hold the log sink lock.
    def _handler(signum, frame) -> None:
        supervisor.handle_control(ServiceControl.STOP)

    for signum in signals:
        previous[signum] = signal.signal(signum, _handler)
    return previous
