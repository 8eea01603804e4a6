"""Exception hierarchy and HTTP error mapping for gdrivesync."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class GDriveSyncError(Exception):
    """
    Base exception for gdrivesync.

    Attributes:
        details: Optional structured information (e.g., HTTP status, path).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class ConfigError(GDriveSyncError):
    """Raised when config.json is missing, unreadable or invalid."""


class LogSinkError(GDriveSyncError):
    """Raised when the log directory or a log file cannot be created or written."""


class WatchError(GDriveSyncError):
    """Raised when the directory watch cannot be established."""


class InvalidStateError(GDriveSyncError):
    """Raised when a component is used in an invalid state (e.g., started twice)."""


class AuthError(GDriveSyncError):
    """Raised when credentials cannot be loaded or are rejected (HTTP 401)."""


class PermissionError(GDriveSyncError):
    """Raised when access is denied (HTTP 403 non-quota)."""


class InvalidArgumentError(GDriveSyncError):
    """Raised when request arguments are invalid (HTTP 400, etc.)."""


class NotFoundError(GDriveSyncError):
    """Raised when a Drive resource is not found (HTTP 404)."""


class ConflictError(GDriveSyncError):
    """Raised when a conflict occurs (HTTP 409/412)."""


class RateLimitError(GDriveSyncError):
    """Raised when rate-limited (HTTP 429)."""


class QuotaExceededError(GDriveSyncError):
    """Raised when quota is exceeded (HTTP 403 with quota-related reason)."""


class NetworkError(GDriveSyncError):
    """Raised when network/timeout issues prevent the request."""


class ApiError(GDriveSyncError):
    """Raised for unclassified API errors (5xx, unknown 4xx, etc.)."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to gdrivesync exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_QUOTA_REASON_KEYWORDS: tuple[str, ...] = (
    "quota",
    "dailyLimitExceeded",
    "usageLimits",
    "storageQuotaExceeded",
)

_RATE_LIMIT_REASON_KEYWORDS: tuple[str, ...] = (
    "rateLimitExceeded",
    "userRateLimitExceeded",
)


def _matches(reason: str | None, keywords: tuple[str, ...]) -> bool:
    if not reason:
        return False
    return any(key.lower() in reason.lower() for key in keywords)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> GDriveSyncError:
    """
    Map an HTTP error to a gdrivesync exception.

    Policy:
        - 400 -> InvalidArgumentError
        - 401 -> AuthError
        - 403 -> PermissionError (default), RateLimitError for rate-limit
          reasons, QuotaExceededError for quota reasons
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 429 -> RateLimitError
        - 5xx and anything else -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 400:
        return InvalidArgumentError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        # Drive reports user rate limits as 403 as well as 429.
        if _matches(info.reason, _RATE_LIMIT_REASON_KEYWORDS):
            return RateLimitError(message, details=details, cause=cause)
        if _matches(info.reason, _QUOTA_REASON_KEYWORDS):
            return QuotaExceededError(message, details=details, cause=cause)
        return PermissionError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412):
        return ConflictError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)
