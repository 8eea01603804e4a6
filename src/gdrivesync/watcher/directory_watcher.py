"""DirectoryWatcher: debounced create notifications for one directory."""

from __future__ import annotations

import logging
import os
import queue
import threading
import time
from dataclasses import dataclass
from typing import Callable, Iterator, Optional, Union

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from gdrivesync.config import defaults
from gdrivesync.errors import InvalidStateError, WatchError
from gdrivesync.models import FileEvent

from .debounce import DebounceBuffer

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Created:
    path: str


@dataclass(frozen=True)
class _WatchFailure:
    error: BaseException


_Item = Union[_Created, _WatchFailure]


class _CreatedEventHandler(FileSystemEventHandler):
    """Forward create events into the hand-off queue; drop everything else."""

    def __init__(self, put: Callable[[_Item], None]) -> None:
        super().__init__()
        self._put = put

    def dispatch(self, event: FileSystemEvent) -> None:
        try:
            super().dispatch(event)
        except Exception as exc:
            self._put(_WatchFailure(exc))

    def on_created(self, event: FileSystemEvent) -> None:
        path = os.path.abspath(os.fsdecode(event.src_path))
        self._put(_Created(path))


class DirectoryWatcher:
    """
    Watch a single directory (non-recursive) and yield debounced FileEvents.

    The watchdog observer thread is the only producer of the bounded
    hand-off queue; ``events()`` is its only consumer.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        debounce_sec: float = defaults.DEBOUNCE_SEC,
        queue_size: int = defaults.EVENT_QUEUE_SIZE,
        poll_sec: float = 0.5,
        logger: Optional[logging.Logger] = None,
        observer_factory: Callable[[], object] = Observer,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if queue_size <= 0:
            raise ValueError("queue_size must be positive")
        if poll_sec <= 0:
            raise ValueError("poll_sec must be positive")

        self.path = os.path.abspath(os.fspath(path))
        self._logger = logger or log
        self._observer_factory = observer_factory
        self._clock = clock
        self._poll_sec = poll_sec
        self._queue: "queue.Queue[_Item]" = queue.Queue(maxsize=queue_size)
        self._buffer = DebounceBuffer(debounce_sec)
        self._stop_evt = threading.Event()
        self._observer = None

    @property
    def running(self) -> bool:
        return self._observer is not None and not self._stop_evt.is_set()

    def start(self) -> None:
        """
        Establish the OS watch.

        Raises:
            WatchError: if the path is not a directory or the watch fails.
            InvalidStateError: if already started.
        """
        if self._observer is not None:
            raise InvalidStateError("Watcher already started")
        if not os.path.isdir(self.path):
            raise WatchError(
                "Watch path does not exist or is not a directory",
                details={"path": self.path},
            )

        handler = _CreatedEventHandler(self._put)
        observer = self._observer_factory()
        try:
            observer.schedule(handler, self.path, recursive=False)
            observer.start()
        except Exception as exc:
            raise WatchError(
                "Failed to watch directory",
                details={"path": self.path},
                cause=exc,
            ) from exc

        self._observer = observer
        self._logger.info("Now watching for new files in: %s", self.path)

    def stop(self, timeout: float = defaults.SHUTDOWN_JOIN_SEC) -> None:
        """Stop the OS watch and end the events() sequence."""
        self._stop_evt.set()
        observer = self._observer
        if observer is None:
            return
        observer.stop()
        observer.join(timeout)

    def events(self) -> Iterator[FileEvent]:
        """Yield debounced batches of created paths until stop() is called."""
        if self._observer is None:
            raise InvalidStateError("Watcher is not started. Call start() first.")

        while not self._stop_evt.is_set():
            wait = self._buffer.time_until_due(self._clock())
            timeout = self._poll_sec if wait is None else min(wait, self._poll_sec)
            try:
                item = self._queue.get(timeout=timeout)
            except queue.Empty:
                item = None

            if isinstance(item, _WatchFailure):
                self._logger.error("File watch error: %s", item.error)
            elif isinstance(item, _Created):
                self._logger.debug("Create event: %s", item.path)
                self._buffer.add(item.path, self._clock())

            batch = self._buffer.drain_due(self._clock())
            if batch:
                yield FileEvent.created(batch)

    def __enter__(self) -> "DirectoryWatcher":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()

    def _put(self, item: _Item) -> None:
        # Block while the consumer is busy, but give up once stopped.
        while not self._stop_evt.is_set():
            try:
                self._queue.put(item, timeout=self._poll_sec)
                return
            except queue.Full:
                continue
