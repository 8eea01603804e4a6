"""Result model for single-file uploads."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional


UploadStatus = Literal["success", "failed"]


@dataclass(slots=True, frozen=True)
class UploadResult:
    """
    Outcome of one upload attempt. Only logged/returned, never persisted.

    Exactly one of ``remote_id`` and ``error_kind`` is set.
    """

    file_name: str
    remote_id: Optional[str] = None
    error_kind: Optional[str] = None
    error_message: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.remote_id is None) == (self.error_kind is None):
            raise ValueError("UploadResult needs exactly one of remote_id / error_kind")

    @property
    def status(self) -> UploadStatus:
        return "success" if self.remote_id is not None else "failed"

    @classmethod
    def success(cls, file_name: str, remote_id: str) -> "UploadResult":
        return cls(file_name=file_name, remote_id=remote_id)

    @classmethod
    def failure(cls, file_name: str, exc: BaseException) -> "UploadResult":
        return cls(
            file_name=file_name,
            error_kind=exc.__class__.__name__,
            error_message=str(exc),
        )
