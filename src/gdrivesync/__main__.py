"""Process entry point: ``python -m gdrivesync``."""

from __future__ import annotations

import sys

from gdrivesync.config import default_base_dir
from gdrivesync.supervisor import SyncSupervisor, install_signal_handlers


def main() -> int:
    supervisor = SyncSupervisor(default_base_dir())
    install_signal_handlers(supervisor)
    return supervisor.run()


if __name__ == "__main__":
    sys.exit(main())
