"""Field definitions for Google Drive API requests and responses."""

from __future__ import annotations

FILE_FIELDS: str = (
    "id,"
    "name,"
    "mimeType,"
    "parents,"
    "size,"
    "createdTime"
)

OCTET_STREAM: str = "application/octet-stream"
