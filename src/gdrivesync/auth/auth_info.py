"""Authentication information for gdrivesync (service account only)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class AuthInfo:
    """
    Authentication information.

    Supported:
        kind = "service_account"
        data must include:
            - credentials_file
    """

    kind: str
    data: dict[str, Any]

    def __post_init__(self) -> None:
        if self.kind != "service_account":
            raise ValueError("AuthInfo.kind must be 'service_account'")

        if not isinstance(self.data, dict):
            raise TypeError("AuthInfo.data must be a dict")

        value = self.data.get("credentials_file")
        if not isinstance(value, str) or not value.strip():
            raise ValueError("AuthInfo.data['credentials_file'] must be a non-empty string")

    @classmethod
    def service_account(cls, credentials_file: str) -> "AuthInfo":
        return cls(kind="service_account", data={"credentials_file": credentials_file})

    @property
    def credentials_file(self) -> str:
        """Path to the service-account key JSON."""
        return str(self.data["credentials_file"])
