"""gdrivesync public API."""

from __future__ import annotations

from gdrivesync.auth import AuthInfo, ServiceAccountClient
from gdrivesync.config import SyncConfig, load_config, save_config
from gdrivesync.controller import GoogleDriveController
from gdrivesync.dispatcher import UploadDispatcher
from gdrivesync.errors import (
    ApiError,
    AuthError,
    ConfigError,
    ConflictError,
    GDriveSyncError,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidStateError,
    LogSinkError,
    NetworkError,
    NotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
    WatchError,
    map_http_error,
)
from gdrivesync.logsink import RotatingLogSink
from gdrivesync.models import EventKind, FileEvent, FileInfo, UploadResult
from gdrivesync.supervisor import (
    ControlResult,
    ServiceControl,
    ServiceState,
    SyncSupervisor,
    install_signal_handlers,
)
from gdrivesync.watcher import DirectoryWatcher

__all__ = [
    # High-level
    "SyncSupervisor",
    "ServiceControl",
    "ControlResult",
    "ServiceState",
    "install_signal_handlers",
    # Pipeline
    "RotatingLogSink",
    "DirectoryWatcher",
    "UploadDispatcher",
    "GoogleDriveController",
    # Auth / Config
    "AuthInfo",
    "ServiceAccountClient",
    "SyncConfig",
    "load_config",
    "save_config",
    # Models
    "EventKind",
    "FileEvent",
    "FileInfo",
    "UploadResult",
    # Errors
    "GDriveSyncError",
    "ConfigError",
    "LogSinkError",
    "WatchError",
    "InvalidStateError",
    "AuthError",
    "PermissionError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "NetworkError",
    "ApiError",
    "HttpErrorInfo",
    "map_http_error",
]
