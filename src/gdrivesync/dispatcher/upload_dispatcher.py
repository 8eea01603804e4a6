"""UploadDispatcher: turns FileEvents into Drive create calls."""

from __future__ import annotations

import logging
import os
import threading
import time
from typing import BinaryIO, Callable, Iterable, Optional, Protocol

from gdrivesync.config import defaults
from gdrivesync.controller.fields import OCTET_STREAM
from gdrivesync.errors import GDriveSyncError, InvalidArgumentError
from gdrivesync.models import FileEvent, FileInfo, UploadResult

log = logging.getLogger(__name__)


class Uploader(Protocol):
    """The remote store: GoogleDriveController or a test double."""

    def upload_stream(
        self,
        stream: BinaryIO,
        name: str,
        parent_id: str,
        *,
        mime_type: str = OCTET_STREAM,
    ) -> FileInfo: ...


class UploadDispatcher:
    """
    Upload every regular file named by incoming FileEvents.

    Policy:
        - Directories and vanished paths are skipped silently.
        - Each file waits the settle delay before it is opened.
        - Failures are logged and dropped: no retry, no backoff, no re-queue.
    """

    def __init__(
        self,
        uploader: Uploader,
        parent_id: str,
        *,
        settle_delay_sec: float = defaults.SETTLE_DELAY_SEC,
        logger: Optional[logging.Logger] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if not parent_id or not isinstance(parent_id, str):
            raise InvalidArgumentError("parent_id must be a non-empty string")
        if settle_delay_sec < 0:
            raise InvalidArgumentError("settle_delay_sec must be >= 0")

        self._uploader = uploader
        self.parent_id = parent_id
        self.settle_delay_sec = settle_delay_sec
        self._logger = logger or log
        self._sleep = sleep

    def run(
        self,
        events: Iterable[FileEvent],
        stop_event: Optional[threading.Event] = None,
    ) -> None:
        """Consume events one batch at a time until the sequence ends or stop is set."""
        for event in events:
            if stop_event is not None and stop_event.is_set():
                break
            self.handle_event(event, stop_event=stop_event)

    def handle_event(
        self,
        event: FileEvent,
        *,
        stop_event: Optional[threading.Event] = None,
    ) -> list[UploadResult]:
        results: list[UploadResult] = []
        for path in event.paths:
            if stop_event is not None and stop_event.is_set():
                break
            try:
                result = self.upload_path(path)
            except Exception:
                self._logger.exception("Unexpected error while handling %s", path)
                continue
            if result is not None:
                results.append(result)
        return results

    def upload_path(self, path: str) -> Optional[UploadResult]:
        """
        Upload one path.

        Returns:
            None when the path is skipped, otherwise the UploadResult.
        """
        self._logger.info("New file detected: %s", path)
        if not os.path.isfile(path):
            self._logger.debug("Skipping non-regular file: %s", path)
            return None

        if self.settle_delay_sec > 0:
            self._sleep(self.settle_delay_sec)

        file_name = os.path.basename(path)
        try:
            stream = open(path, "rb")
        except OSError as exc:
            self._logger.error("Failed to open file %s: %s", path, exc)
            return UploadResult.failure(file_name, exc)

        self._logger.info("Uploading '%s' to Google Drive", file_name)
        with stream:
            try:
                info = self._uploader.upload_stream(
                    stream,
                    file_name,
                    self.parent_id,
                    mime_type=OCTET_STREAM,
                )
            except GDriveSyncError as exc:
                self._logger.error("Failed to upload '%s'. Error: %s", file_name, exc)
                return UploadResult.failure(file_name, exc)

        self._logger.info("Successfully uploaded '%s' with ID: %s", file_name, info.file_id)
        return UploadResult.success(file_name, info.file_id)
