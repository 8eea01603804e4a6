"""Public auth exports for gdrivesync."""

from __future__ import annotations

from .auth_info import AuthInfo
from .service_account_client import ServiceAccountClient

__all__ = ["AuthInfo", "ServiceAccountClient"]
