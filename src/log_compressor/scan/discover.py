"""Discover compressible log files directly inside one directory."""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

from log_compressor.config import SELF_TOKEN

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Candidate:
    """A log file eligible for compression, as seen at scan time."""

    path: Path
    size_bytes: int

    @property
    def name(self) -> str:
        return self.path.name


def matches_log_name(file_name: str, log_suffix: str = "log", self_token: str = SELF_TOKEN) -> bool:
    """Return whether a base name has the log extension and is not one of our own files."""

    stem, dot, extension = file_name.rpartition(".")
    if not dot or not stem:
        return False
    return extension == log_suffix and self_token not in file_name


def iter_candidates(
    directory: Path,
    *,
    log_suffix: str = "log",
    self_token: str = SELF_TOKEN,
    exclude: Iterable[Path] = (),
    logger: logging.Logger | None = None,
) -> Iterator[Candidate]:
    """Lazily yield candidates among the immediate children of a directory."""

    effective_logger = logger or LOGGER
    root = directory.resolve()
    excluded = {path.resolve() for path in exclude}
    with os.scandir(root) as entries:
        for entry in entries:
            if not matches_log_name(entry.name, log_suffix=log_suffix, self_token=self_token):
                continue
            path = root / entry.name
            if path in excluded:
                effective_logger.debug("discover.excluded path=%s", path)
                continue
            try:
                stats = entry.stat(follow_symlinks=False)
            except OSError as exc:
                effective_logger.debug("discover.stat_failed path=%s error=%s", entry.path, exc)
                continue
            if not stat.S_ISREG(stats.st_mode):
                continue
            yield Candidate(path=path, size_bytes=stats.st_size)


def discover_candidates(
    directory: Path,
    *,
    log_suffix: str = "log",
    self_token: str = SELF_TOKEN,
    exclude: Iterable[Path] = (),
    logger: logging.Logger | None = None,
) -> list[Candidate]:
    """Collect candidates sorted by path for stable reporting."""

    found = iter_candidates(
        directory,
        log_suffix=log_suffix,
        self_token=self_token,
        exclude=exclude,
        logger=logger,
    )
    return sorted(found, key=lambda candidate: candidate.path)
