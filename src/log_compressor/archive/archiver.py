"""Compress one log file into a timestamped ZIP archive and remove the source."""

from __future__ import annotations

import contextlib
import logging
import os
import time
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from log_compressor.archive.lock_probe import is_file_in_use
from log_compressor.archive.models import FileOutcome
from log_compressor.archive.naming import resolve_archive_target
from log_compressor.config import ArchiveConfig
from log_compressor.errors import ArchiveVerificationError
from log_compressor.scan.discover import Candidate
from log_compressor.utils.paths import atomic_temp_path
from log_compressor.utils.time_utils import now_local

LOGGER = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


@dataclass(frozen=True, slots=True)
class ArchiveOptions:
    """Runtime options for single-file compression."""

    extension: str = "zip"
    chunk_size_bytes: int = 1_048_576
    compression_level: int = 6
    timestamp_format: str = "%Y-%m-%d_%H-%M-%S"
    verify_crc: bool = False

    @classmethod
    def from_config(cls, config: ArchiveConfig) -> "ArchiveOptions":
        return cls(
            extension=config.extension,
            chunk_size_bytes=config.chunk_size_bytes,
            compression_level=config.compression_level,
            timestamp_format=config.timestamp_format,
            verify_crc=config.verify_crc,
        )


def _stream_into_archive(
    source: Path,
    archive_path: Path,
    entry_name: str,
    options: ArchiveOptions,
    on_progress: ProgressCallback | None,
) -> int:
    """Copy ``source`` chunk by chunk into a single deflated ZIP64 entry; return bytes read."""

    bytes_read = 0
    with source.open("rb") as source_file, zipfile.ZipFile(
        archive_path,
        mode="w",
        compression=zipfile.ZIP_DEFLATED,
        compresslevel=options.compression_level,
        allowZip64=True,
    ) as archive:
        with archive.open(entry_name, mode="w", force_zip64=True) as entry:
            while True:
                chunk = source_file.read(options.chunk_size_bytes)
                if not chunk:
                    break
                entry.write(chunk)
                bytes_read += len(chunk)
                if on_progress is not None:
                    on_progress(len(chunk))
    return bytes_read


def verify_archive(archive_path: Path, entry_name: str, expected_size: int, check_crc: bool = False) -> None:
    """Raise ArchiveVerificationError unless the archive holds exactly the expected entry."""

    with zipfile.ZipFile(archive_path) as archive:
        infos = archive.infolist()
        if len(infos) != 1 or infos[0].filename != entry_name:
            names = [info.filename for info in infos]
            raise ArchiveVerificationError(f"{archive_path.name}: expected single entry {entry_name!r}, found {names}")
        if infos[0].file_size != expected_size:
            raise ArchiveVerificationError(
                f"{archive_path.name}: entry size {infos[0].file_size} != {expected_size} bytes read"
            )
        if check_crc and archive.testzip() is not None:
            raise ArchiveVerificationError(f"{archive_path.name}: CRC mismatch in {entry_name!r}")


def compress_candidate(
    candidate: Candidate,
    options: ArchiveOptions | None = None,
    *,
    assume_not_in_use: bool = False,
    on_progress: ProgressCallback | None = None,
    logger: logging.Logger | None = None,
) -> FileOutcome:
    """Archive one candidate and delete it once the archive is finalized.

    The archive is written to a hidden temp file next to the target, closed,
    verified and only then renamed into place, so a failed run never leaves a
    partial archive under the target name and never touches the source. A
    failed delete after a good archive is reported as ``cleanup_error`` on a
    ``COMPRESSED`` outcome.
    """

    effective_logger = logger or LOGGER
    run_options = options or ArchiveOptions()
    source = candidate.path
    started_mono = time.monotonic()

    if not assume_not_in_use and is_file_in_use(source):
        effective_logger.info("compress.skipped_in_use file=%s", candidate.name)
        return FileOutcome.skipped(source)

    started_at = now_local()
    temp_path: Path | None = None
    try:
        target = resolve_archive_target(
            source,
            started_at,
            run_options.extension,
            fmt=run_options.timestamp_format,
        )
        temp_path = atomic_temp_path(target)
        bytes_read = _stream_into_archive(source, temp_path, candidate.name, run_options, on_progress)
        verify_archive(temp_path, candidate.name, bytes_read, check_crc=run_options.verify_crc)
        archive_size = temp_path.stat().st_size
        os.replace(temp_path, target)
    except (OSError, zipfile.BadZipFile, ArchiveVerificationError) as exc:
        effective_logger.error("compress.failed file=%s error=%s", candidate.name, exc)
        return FileOutcome.failed(source, str(exc), duration_sec=time.monotonic() - started_mono)
    finally:
        if temp_path is not None:
            with contextlib.suppress(OSError):
                temp_path.unlink(missing_ok=True)

    cleanup_error: str | None = None
    try:
        source.unlink()
    except OSError as exc:
        cleanup_error = str(exc)
        effective_logger.warning(
            "compress.cleanup_failed file=%s archive=%s error=%s",
            candidate.name,
            target.name,
            exc,
        )

    duration_sec = time.monotonic() - started_mono
    effective_logger.info(
        "compress.done file=%s archive=%s bytes_in=%s bytes_out=%s elapsed_sec=%.2f",
        candidate.name,
        target.name,
        bytes_read,
        archive_size,
        duration_sec,
    )
    return FileOutcome(
        source=source,
        status="COMPRESSED",
        archive_path=target,
        cleanup_error=cleanup_error,
        bytes_read=bytes_read,
        archive_size_bytes=archive_size,
        duration_sec=duration_sec,
    )
