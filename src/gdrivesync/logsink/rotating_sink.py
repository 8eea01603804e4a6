"""Rotating log sink: size-bounded, count-bounded, timestamp-named log files."""

from __future__ import annotations

import logging
import os
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO, Callable, Optional

from gdrivesync.config import defaults
from gdrivesync.errors import LogSinkError
from gdrivesync.util.time import format_file_stamp, format_log_timestamp, now_utc


class LogLineFormatter(logging.Formatter):
    """
    Format records as ``<timestamp> [<LEVEL>] <message>``.

    Timestamps are UTC with millisecond precision. WARNING is written as WARN
    and CRITICAL as ERROR so the level set stays {INFO, WARN, ERROR}.
    """

    LEVEL_NAMES: dict[str, str] = {"WARNING": "WARN", "CRITICAL": "ERROR"}

    def format(self, record: logging.LogRecord) -> str:
        stamp = format_log_timestamp(datetime.fromtimestamp(record.created, tz=timezone.utc))
        level = self.LEVEL_NAMES.get(record.levelname, record.levelname)
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        return f"{stamp} [{level}] {message}"


class RotatingLogSink(logging.Handler):
    """
    Append-only log writer bounded by file size and file count.

    Notes:
        - Only the newest file is ever appended to.
        - Every write is flushed before returning.
        - All file operations run under the handler lock, so concurrent
          writers from different threads never interleave within a line.
    """

    def __init__(
        self,
        log_dir: str | os.PathLike[str],
        *,
        max_bytes: int = defaults.MAX_LOG_SIZE,
        max_files: int = defaults.MAX_LOG_FILES,
        prefix: str = defaults.LOG_FILE_PREFIX,
        clock: Callable[[], datetime] = now_utc,
    ) -> None:
        if max_bytes <= 0:
            raise ValueError("max_bytes must be positive")
        if max_files <= 0:
            raise ValueError("max_files must be positive")
        if not prefix or not re.fullmatch(r"[A-Za-z0-9_.-]+", prefix):
            raise ValueError("prefix must be a non-empty file-name-safe string")

        super().__init__(level=logging.NOTSET)
        self.setFormatter(LogLineFormatter())

        self.log_dir = Path(log_dir)
        self.max_bytes = max_bytes
        self.max_files = max_files
        self.prefix = prefix
        self._clock = clock
        self._pattern = re.compile(
            rf"^{re.escape(prefix)}_\d{{8}}_\d{{6}}_\d{{6}}(?:_\d+)?\.log$"
        )
        self._stream: Optional[BinaryIO] = None
        self._closed = False
        self._active_path: Optional[Path] = None
        self._active_size = 0

        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise LogSinkError(
                "Failed to create log directory",
                details={"log_dir": str(self.log_dir)},
                cause=exc,
            ) from exc

        with self.lock:
            self._enforce_retention()
            self._open_new_file()

    # ----------------------------
    # Public API
    # ----------------------------
    @property
    def active_path(self) -> Optional[Path]:
        return self._active_path

    @property
    def active_size(self) -> int:
        return self._active_size

    def list_log_files(self) -> list[Path]:
        """Return the sink's log files, oldest first."""
        files = []
        for entry in self.log_dir.iterdir():
            if self._pattern.match(entry.name) and entry.is_file():
                files.append(entry)
        return sorted(files, key=_age_key)

    def write(self, message: str) -> None:
        """
        Append one line, rotating first if it would overflow the active file.

        Raises:
            LogSinkError: if the line cannot be written or flushed.
        """
        data = (message + "\n").encode("utf-8")
        with self.lock:
            if self._closed:
                raise LogSinkError("Log sink is closed")

            # A failed rotation leaves no active file; the next write retries it.
            overflow = self._active_size > 0 and self._active_size + len(data) > self.max_bytes
            if self._stream is None or overflow:
                self._rotate()

            try:
                self._stream.write(data)
                self._stream.flush()
            except (OSError, ValueError) as exc:
                raise LogSinkError(
                    "Failed to write log record",
                    details={"path": str(self._active_path)},
                    cause=exc,
                ) from exc
            self._active_size += len(data)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.write(self.format(record))
        except Exception:
            self.handleError(record)

    def flush(self) -> None:
        with self.lock:
            if self._stream is not None:
                self._stream.flush()

    def close(self) -> None:
        with self.lock:
            try:
                if self._stream is not None:
                    self._stream.close()
            finally:
                self._stream = None
                self._closed = True
                super().close()

    # ----------------------------
    # Internals
    # ----------------------------
    def _rotate(self) -> None:
        stream, self._stream = self._stream, None
        if stream is not None:
            try:
                stream.close()
            except OSError as exc:
                raise LogSinkError(
                    "Failed to close log file",
                    details={"path": str(self._active_path)},
                    cause=exc,
                ) from exc
        self._enforce_retention()
        self._open_new_file()

    def _enforce_retention(self) -> None:
        """Delete oldest files until one more file fits under max_files."""
        try:
            files = self.list_log_files()
        except OSError as exc:
            raise LogSinkError(
                "Failed to list log directory",
                details={"log_dir": str(self.log_dir)},
                cause=exc,
            ) from exc

        while len(files) >= self.max_files:
            oldest = files.pop(0)
            try:
                oldest.unlink()
            except FileNotFoundError:
                continue
            except OSError as exc:
                raise LogSinkError(
                    "Failed to delete old log file",
                    details={"path": str(oldest)},
                    cause=exc,
                ) from exc

    def _open_new_file(self) -> None:
        path = self._next_path()
        try:
            # "xb" refuses to reuse a name that appeared concurrently.
            self._stream = open(path, "xb")
        except OSError as exc:
            raise LogSinkError(
                "Failed to open log file",
                details={"path": str(path)},
                cause=exc,
            ) from exc
        self._active_path = path
        self._active_size = 0

    def _next_path(self) -> Path:
        stem = f"{self.prefix}_{format_file_stamp(self._clock())}"
        path = self.log_dir / f"{stem}.log"
        n = 1
        while path.exists():
            path = self.log_dir / f"{stem}_{n}.log"
            n += 1
        return path


def _age_key(path: Path) -> tuple[int, str]:
    # Names embed the creation stamp, which breaks mtime ties.
    return (path.stat().st_mtime_ns, path.name)


def attach_log_sink(
    sink: logging.Handler,
    *,
    logger_name: str = "gdrivesync",
    level: int = logging.INFO,
) -> logging.Logger:
    """Route a package logger (and its children) into sink."""
    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    if sink not in logger.handlers:
        logger.addHandler(sink)
    return logger


def detach_log_sink(sink: logging.Handler, *, logger_name: str = "gdrivesync") -> None:
    logging.getLogger(logger_name).removeHandler(sink)
