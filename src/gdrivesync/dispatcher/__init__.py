"""Public dispatcher exports for gdrivesync."""

from __future__ import annotations

from .upload_dispatcher import UploadDispatcher, Uploader

__all__ = ["UploadDispatcher", "Uploader"]
