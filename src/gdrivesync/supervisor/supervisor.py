"""SyncSupervisor: owns the process lifecycle and the watch/upload pipeline."""

from __future__ import annotations

import logging
import os
import queue
import sys
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from gdrivesync.auth import AuthInfo
from gdrivesync.config import defaults, load_config
from gdrivesync.controller import GoogleDriveController
from gdrivesync.dispatcher import UploadDispatcher, Uploader
from gdrivesync.errors import GDriveSyncError, InvalidStateError, LogSinkError
from gdrivesync.logsink import RotatingLogSink, attach_log_sink, detach_log_sink
from gdrivesync.watcher import DirectoryWatcher

from .control import ControlResult, ServiceControl, ServiceState, StatusCallback


@dataclass(frozen=True)
class _StopRequest:
    exit_code: int = 0
    reason: str = "Received stop control event."


class SyncSupervisor:
    """
    Run the sync agent until an external stop arrives.

    Lifecycle:
        - run() opens the log sink, loads config/credentials and starts the
          watcher. Any failure there is fatal: STOPPED is reported with exit
          code 1 and the pipeline never starts.
        - The pipeline runs on a daemon thread; run() blocks on the control
          channel until a stop request arrives.
        - Stop does not drain an in-flight upload.

    handle_control() may be called from any thread or from a signal handler;
    it only posts to the control channel.
    """

    def __init__(
        self,
        base_dir: str | os.PathLike[str],
        *,
        status_callback: Optional[StatusCallback] = None,
        controller_factory: Callable[[AuthInfo], Uploader] = GoogleDriveController,
        watcher_factory: Callable[..., DirectoryWatcher] = DirectoryWatcher,
        debounce_sec: float = defaults.DEBOUNCE_SEC,
        settle_delay_sec: float = defaults.SETTLE_DELAY_SEC,
        log_max_bytes: int = defaults.MAX_LOG_SIZE,
        log_max_files: int = defaults.MAX_LOG_FILES,
        shutdown_join_sec: float = defaults.SHUTDOWN_JOIN_SEC,
    ) -> None:
        self.base_dir = Path(base_dir)
        self._status_callback = status_callback
        self._controller_factory = controller_factory
        self._watcher_factory = watcher_factory
        self._debounce_sec = debounce_sec
        self._settle_delay_sec = settle_delay_sec
        self._log_max_bytes = log_max_bytes
        self._log_max_files = log_max_files
        self._shutdown_join_sec = shutdown_join_sec

        # SimpleQueue.put is reentrant, so signal handlers may post while run() waits in get().
        self._control: "queue.SimpleQueue[_StopRequest]" = queue.SimpleQueue()
        self._stop_evt = threading.Event()
        self._started = False
        self._package_logger = logging.getLogger("gdrivesync")
        self._logger = logging.getLogger(__name__)

    @property
    def config_path(self) -> Path:
        return self.base_dir / defaults.CONFIG_FILE_NAME

    @property
    def credentials_path(self) -> Path:
        return self.base_dir / defaults.CREDENTIALS_FILE_NAME

    @property
    def logs_dir(self) -> Path:
        return self.base_dir / defaults.LOGS_DIR_NAME

    # ----------------------------
    # Control surface
    # ----------------------------
    def handle_control(self, control: ServiceControl) -> ControlResult:
        """Service control callback. Only STOP and INTERROGATE are accepted."""
        if control is ServiceControl.STOP:
            self.request_stop()
            return ControlResult.NO_ERROR
        if control is ServiceControl.INTERROGATE:
            return ControlResult.NO_ERROR
        return ControlResult.NOT_IMPLEMENTED

    def request_stop(self, *, exit_code: int = 0, reason: Optional[str] = None) -> None:
        if reason is None:
            self._control.put(_StopRequest(exit_code=exit_code))
        else:
            self._control.put(_StopRequest(exit_code=exit_code, reason=reason))

    # ----------------------------
    # Lifecycle
    # ----------------------------
    def run(self) -> int:
        """Run until stopped. Returns the process exit code."""
        if self._started:
            raise InvalidStateError("Supervisor can only be run once")
        self._started = True

        try:
            sink = RotatingLogSink(
                self.logs_dir,
                max_bytes=self._log_max_bytes,
                max_files=self._log_max_files,
            )
        except LogSinkError as exc:
            print(
                f"Failed to initialize log sink in {self.logs_dir}: {exc}",
                file=sys.stderr,
            )
            self._report(ServiceState.STOPPED, 1)
            return 1

        self._package_logger = attach_log_sink(sink)
        self._logger = self._package_logger.getChild("supervisor")
        try:
            return self._run_logged()
        finally:
            detach_log_sink(sink)
            sink.close()

    def _run_logged(self) -> int:
        self._logger.info("%s service is initializing...", defaults.SERVICE_NAME)
        try:
            watcher, dispatcher = self._build_pipeline()
        except GDriveSyncError as exc:
            self._logger.error("Startup failed: %s", exc)
            self._report(ServiceState.STOPPED, 1)
            return 1

        thread = threading.Thread(
            target=self._pipeline_main,
            args=(watcher, dispatcher),
            name="gdrivesync-pipeline",
            daemon=True,
        )
        self._report(ServiceState.RUNNING, 0)
        thread.start()
        self._logger.info("Service started successfully.")

        request = self._wait_for_stop()
        if request.exit_code:
            self._logger.error("%s Shutting down.", request.reason)
        else:
            self._logger.info("%s Shutting down.", request.reason)

        self._stop_evt.set()
        watcher.stop(self._shutdown_join_sec)
        thread.join(self._shutdown_join_sec)
        if thread.is_alive():
            self._logger.warning("Pipeline still busy at shutdown; in-flight upload abandoned")

        self._report(ServiceState.STOPPED, request.exit_code)
        self._logger.info("Service stopped.")
        return request.exit_code

    def _build_pipeline(self) -> tuple[DirectoryWatcher, UploadDispatcher]:
        config = load_config(self.config_path)
        config.ensure_watchable()
        controller = self._controller_factory(
            AuthInfo.service_account(str(self.credentials_path))
        )
        self._logger.info("Google Drive connection established successfully")
        self._logger.info("Target Google Drive folder ID: %s", config.gdrive_folder_id)

        dispatcher = UploadDispatcher(
            controller,
            config.gdrive_folder_id,
            settle_delay_sec=self._settle_delay_sec,
            logger=self._package_logger.getChild("dispatcher"),
        )
        watcher = self._watcher_factory(
            config.local_folder_path,
            debounce_sec=self._debounce_sec,
            logger=self._package_logger.getChild("watcher"),
        )
        watcher.start()
        return watcher, dispatcher

    def _wait_for_stop(self) -> _StopRequest:
        # Poll so signal handlers on the main thread get a chance to run.
        while True:
            try:
                return self._control.get(timeout=0.5)
            except queue.Empty:
                continue

    def _pipeline_main(self, watcher: DirectoryWatcher, dispatcher: UploadDispatcher) -> None:
        try:
            dispatcher.run(watcher.events(), stop_event=self._stop_evt)
        except Exception:
            self._logger.exception("Sync pipeline crashed")
            self.request_stop(exit_code=1, reason="Sync pipeline crashed.")

    def _report(self, state: ServiceState, exit_code: int) -> None:
        self._logger.info("Service status: %s (exit code %d)", state.value, exit_code)
        if self._status_callback is not None:
            self._status_callback(state, exit_code)
