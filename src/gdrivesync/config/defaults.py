"""Fixed tunables of the sync agent."""

from __future__ import annotations

SERVICE_NAME = "GdriveStealthSync"

CONFIG_FILE_NAME = "config.json"
CREDENTIALS_FILE_NAME = "credentials.json"
LOGS_DIR_NAME = "logs"
LOG_FILE_PREFIX = "gdrivesync"

MAX_LOG_SIZE = 2 * 1024 * 1024  # 2 MiB
MAX_LOG_FILES = 5

DEBOUNCE_SEC = 5.0
SETTLE_DELAY_SEC = 2.0
EVENT_QUEUE_SIZE = 1024

SHUTDOWN_JOIN_SEC = 2.0
