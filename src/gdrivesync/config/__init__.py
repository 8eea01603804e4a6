"""Public config exports for gdrivesync."""

from __future__ import annotations

from . import defaults
from .sync_config import SyncConfig, default_base_dir, load_config, save_config

__all__ = [
    "defaults",
    "SyncConfig",
    "load_config",
    "save_config",
    "default_base_dir",
]
