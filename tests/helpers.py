"""Test helpers shared across modules."""

from __future__ import annotations

import sys
import zipfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import pytest

requires_flock = pytest.mark.skipif(sys.platform == "win32", reason="flock is POSIX-only")


def write_file(path: Path, content: bytes | str) -> Path:
    data = content.encode("utf-8") if isinstance(content, str) else content
    path.write_bytes(data)
    return path


@contextmanager
def held_write_lock(path: Path) -> Iterator[None]:
    """Keep ``path`` open for appending with an exclusive flock, like a live writer."""
    import fcntl

    with path.open("ab") as handle:
        fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
        try:
            yield
        finally:
            fcntl.flock(handle.fileno(), fcntl.LOCK_UN)


def strip_timestamp(archive_name: str) -> str:
    """``2026-01-02_03-04-05_app.log.zip`` -> ``app.log.zip``."""
    return archive_name.split("_", 2)[2]


def read_single_entry(archive_path: Path) -> tuple[str, bytes]:
    with zipfile.ZipFile(archive_path) as archive:
        infos = archive.infolist()
        assert len(infos) == 1
        return infos[0].filename, archive.read(infos[0])
