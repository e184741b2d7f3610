"""Archive target naming."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from log_compressor.utils.time_utils import archive_timestamp

MAX_COLLISION_SUFFIX = 1000


def archive_file_name(
    source_name: str,
    started_at: datetime,
    extension: str = "zip",
    *,
    fmt: str = "%Y-%m-%d_%H-%M-%S",
    counter: int = 0,
) -> str:
    """Build ``<timestamp>_<source_name>.<extension>``; a non-zero counter goes after the timestamp."""

    stamp = archive_timestamp(started_at, fmt)
    if counter:
        stamp = f"{stamp}.{counter}"
    return f"{stamp}_{source_name}.{extension}"


def resolve_archive_target(
    source: Path,
    started_at: datetime,
    extension: str = "zip",
    *,
    fmt: str = "%Y-%m-%d_%H-%M-%S",
) -> Path:
    """Return the first archive path next to ``source`` that does not exist yet."""

    for counter in range(MAX_COLLISION_SUFFIX):
        target = source.with_name(archive_file_name(source.name, started_at, extension, fmt=fmt, counter=counter))
        if not target.exists():
            return target
    raise FileExistsError(f"No free archive name for {source.name} at {archive_timestamp(started_at, fmt)}")
