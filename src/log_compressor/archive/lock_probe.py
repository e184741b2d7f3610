"""Best-effort detection of log files still held by a writer.

The probe opens the file for writing without creating or truncating it. A
failure to open (sharing violation on Windows, permission error anywhere)
means the file is treated as in use. On POSIX systems the probe handle also
tries a non-blocking exclusive ``flock``, which catches writers that hold an
advisory lock. Neither check is a mutex: a writer may open the file right
after the probe returns.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

if sys.platform != "win32":
    import fcntl
else:
    fcntl = None

LOGGER = logging.getLogger(__name__)

# O_NONBLOCK: opening a FIFO with no reader fails with ENXIO instead of blocking.
_PROBE_FLAGS = os.O_WRONLY | getattr(os, "O_NONBLOCK", 0)


def _holds_foreign_lock(fd: int) -> bool:
    if fcntl is None:
        return False
    try:
        fcntl.flock(fd, fcntl.LOCK_EX | fcntl.LOCK_NB)
    except BlockingIOError:
        return True
    except OSError as exc:
        # Filesystems without flock support fall back to the open probe alone.
        LOGGER.debug("lock_probe.flock_unsupported fd=%s error=%s", fd, exc)
        return False
    fcntl.flock(fd, fcntl.LOCK_UN)
    return False


def is_file_in_use(path: Path) -> bool:
    """Return True when the file cannot be safely compressed right now."""

    try:
        fd = os.open(path, _PROBE_FLAGS)
    except OSError as exc:
        LOGGER.debug("lock_probe.open_failed path=%s error=%s", path, exc)
        return True
    try:
        return _holds_foreign_lock(fd)
    finally:
        os.close(fd)
