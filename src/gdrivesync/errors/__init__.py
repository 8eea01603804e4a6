"""Public error exports for gdrivesync."""

from __future__ import annotations

from .exceptions import (
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

__all__ = [
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
