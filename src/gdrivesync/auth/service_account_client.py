"""Service-account credential utilities for gdrivesync."""

from __future__ import annotations

import os
from typing import Sequence

from google.oauth2 import service_account
from googleapiclient import discovery

from gdrivesync.errors import AuthError, InvalidArgumentError

from .auth_info import AuthInfo


class ServiceAccountClient:
    """Load service-account credentials and build Drive API service objects."""

    def __init__(self, auth_info: AuthInfo) -> None:
        if auth_info.kind != "service_account":
            raise InvalidArgumentError(
                "ServiceAccountClient requires AuthInfo(kind='service_account')"
            )
        self._auth_info = auth_info

    def get_credentials(self, scopes: Sequence[str]):
        """
        Return service-account credentials for the given scopes.

        Returns:
            google.oauth2.service_account.Credentials

        Raises:
            AuthError: if the key file is missing or cannot be parsed.
            InvalidArgumentError: if scopes is invalid.
        """
        if not scopes or not all(isinstance(s, str) and s.strip() for s in scopes):
            raise InvalidArgumentError("scopes must be a non-empty sequence of strings")

        credentials_file = self._auth_info.credentials_file
        if not os.path.isfile(credentials_file):
            raise AuthError(
                "Failed to read credentials file",
                details={"credentials_file": credentials_file},
            )

        try:
            return service_account.Credentials.from_service_account_file(
                credentials_file,
                scopes=list(scopes),
            )
        except Exception as exc:
            raise AuthError(
                "Failed to parse service account key",
                details={"credentials_file": credentials_file},
                cause=exc,
            ) from exc

    def build_drive_service(self, scopes: Sequence[str]):
        """
        Build a Drive API service resource.

        Returns:
            googleapiclient.discovery.Resource
        """
        creds = self.get_credentials(scopes=scopes)
        try:
            return discovery.build("drive", "v3", credentials=creds, cache_discovery=False)
        except Exception as exc:
            raise AuthError("Failed to build Drive service", cause=exc) from exc
