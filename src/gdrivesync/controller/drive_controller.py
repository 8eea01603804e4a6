"""Google Drive API controller (internal use only)."""

from __future__ import annotations

import json
from typing import Any, BinaryIO, Callable, Optional, Sequence, TypeVar

from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseUpload

from gdrivesync.auth import AuthInfo, ServiceAccountClient
from gdrivesync.errors import (
    ApiError,
    HttpErrorInfo,
    InvalidArgumentError,
    NetworkError,
    map_http_error,
)
from gdrivesync.models import FileInfo
from gdrivesync.util.time import parse_rfc3339

from .fields import FILE_FIELDS, OCTET_STREAM

T = TypeVar("T")


class GoogleDriveController:
    """
    Drive API controller (internal only).

    Notes:
        - The Drive `service` object is NOT exposed.
        - Every request is issued once; failures are mapped and raised.
        - `supports_all_drives` is applied to all requests consistently.
    """

    DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive",)

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        scopes: Optional[Sequence[str]] = None,
        supports_all_drives: bool = True,
    ) -> None:
        self._supports_all_drives = supports_all_drives

        use_scopes = list(scopes) if scopes is not None else list(self.DEFAULT_SCOPES)
        client = ServiceAccountClient(auth_info)
        self._service = client.build_drive_service(use_scopes)

    @classmethod
    def from_service(
        cls,
        service: Any,
        *,
        supports_all_drives: bool = True,
    ) -> "GoogleDriveController":
        """Create controller from a pre-built Drive service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._supports_all_drives = supports_all_drives
        obj._service = service
        return obj

    # ----------------------------
    # Public API
    # ----------------------------
    def upload_stream(
        self,
        stream: BinaryIO,
        name: str,
        parent_id: str,
        *,
        mime_type: str = OCTET_STREAM,
    ) -> FileInfo:
        """
        Create a new Drive file under parent_id with the bytes read from stream.

        Raises:
            InvalidArgumentError: if name or parent_id is empty.
            GDriveSyncError subclasses mapped from the API/transport failure.
        """
        if not name or not isinstance(name, str):
            raise InvalidArgumentError("name must be a non-empty string")
        if not parent_id or not isinstance(parent_id, str):
            raise InvalidArgumentError("parent_id must be a non-empty string")

        media = MediaIoBaseUpload(stream, mimetype=mime_type, resumable=True)
        body = {"name": name, "parents": [parent_id]}

        req = self._service.files().create(
            body=body,
            media_body=media,
            fields=FILE_FIELDS,
            **self._common_write_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_file_info(data)

    # ----------------------------
    # Internals
    # ----------------------------
    def _common_write_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _execute(self, func: Callable[[], T]) -> T:
        try:
            return func()
        except Exception as exc:
            raise self._map_exception(exc) from exc

    def _map_exception(self, exc: Exception) -> Exception:
        if isinstance(exc, HttpError):
            return map_http_error(_http_error_to_info(exc), cause=exc)

        if isinstance(exc, (OSError, TimeoutError)):
            return NetworkError(f"Network error: {exc}", cause=exc)

        return ApiError(f"Drive API error: {exc}", cause=exc)


def _file_dict_to_file_info(data: dict[str, Any]) -> FileInfo:
    file_id = data.get("id")
    if not isinstance(file_id, str) or not file_id:
        raise ApiError("Drive did not return an id for the created file")

    created_time = None
    if isinstance(data.get("createdTime"), str):
        try:
            created_time = parse_rfc3339(data["createdTime"])
        except ValueError:
            pass

    # Drive reports size as a decimal string.
    raw_size = data.get("size")
    size = int(raw_size) if isinstance(raw_size, str) and raw_size.isdigit() else None

    parents = data.get("parents")
    return FileInfo(
        file_id=file_id,
        name=str(data.get("name") or ""),
        mime_type=str(data.get("mimeType") or ""),
        parents=list(parents) if isinstance(parents, list) else [],
        size=size,
        created_time=created_time,
    )


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            payload = None
        err = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(err, dict):
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                details["reason_detail"] = errors[0].get("reason")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )
