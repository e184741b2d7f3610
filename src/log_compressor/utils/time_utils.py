"""Time utility helpers."""

from __future__ import annotations

from datetime import datetime, timezone


def now_utc() -> datetime:
    """Return current timezone-aware UTC timestamp."""

    return datetime.now(timezone.utc)


def now_local() -> datetime:
    """Return current timezone-aware local timestamp."""

    return datetime.now().astimezone()


def archive_timestamp(moment: datetime, fmt: str = "%Y-%m-%d_%H-%M-%S") -> str:
    """Format a moment for use as an archive name prefix (second precision by default)."""

    return moment.strftime(fmt)
