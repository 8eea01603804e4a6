"""SyncConfig: the agent's config.json document."""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from gdrivesync.errors import ConfigError


@dataclass(slots=True, frozen=True)
class SyncConfig:
    """
    Immutable agent configuration, loaded once at startup.

    Fields:
        local_folder_path: absolute path of the watched directory.
        gdrive_folder_id: Drive folder ID that receives the uploads.
    """

    local_folder_path: str
    gdrive_folder_id: str

    def __post_init__(self) -> None:
        for key in ("local_folder_path", "gdrive_folder_id"):
            value = getattr(self, key)
            if not isinstance(value, str) or not value.strip():
                raise ConfigError(f"'{key}' must be a non-empty string")
        if not os.path.isabs(self.local_folder_path):
            raise ConfigError(
                "'local_folder_path' must be an absolute path",
                details={"local_folder_path": self.local_folder_path},
            )

    def ensure_watchable(self) -> None:
        """Raise ConfigError unless local_folder_path is an existing directory."""
        if not os.path.isdir(self.local_folder_path):
            raise ConfigError(
                "local_folder_path does not exist or is not a directory",
                details={"local_folder_path": self.local_folder_path},
            )

    def to_dict(self) -> dict[str, str]:
        return {
            "local_folder_path": self.local_folder_path,
            "gdrive_folder_id": self.gdrive_folder_id,
        }


def load_config(path: str | os.PathLike[str]) -> SyncConfig:
    """
    Read and validate config.json.

    Raises:
        ConfigError: file missing/unreadable, invalid JSON, or invalid fields.
    """
    config_path = Path(path)
    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(
            f"Failed to read {config_path.name}",
            details={"path": str(config_path)},
            cause=exc,
        ) from exc

    try:
        data: Any = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigError(
            f"Failed to parse {config_path.name}",
            details={"path": str(config_path), "line": exc.lineno},
            cause=exc,
        ) from exc

    if not isinstance(data, dict):
        raise ConfigError(
            f"{config_path.name} must contain a JSON object",
            details={"path": str(config_path)},
        )

    return SyncConfig(
        local_folder_path=data.get("local_folder_path"),  # type: ignore[arg-type]
        gdrive_folder_id=data.get("gdrive_folder_id"),  # type: ignore[arg-type]
    )


def save_config(config: SyncConfig, path: str | os.PathLike[str]) -> None:
    """Write config.json (the document the companion configurator produces)."""
    config_path = Path(path)
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(
            json.dumps(config.to_dict(), indent=2) + "\n",
            encoding="utf-8",
        )
    except OSError as exc:
        raise ConfigError(
            f"Failed to write {config_path.name}",
            details={"path": str(config_path)},
            cause=exc,
        ) from exc


def default_base_dir() -> Path:
    """
    Directory holding config.json, credentials.json and logs/.

    Frozen builds keep them next to the executable; otherwise the current
    working directory is used.
    """
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path.cwd()
