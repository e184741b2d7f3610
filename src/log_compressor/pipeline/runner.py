"""Batch orchestration: discover, probe and archive every log file in a directory."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from uuid import uuid4

from log_compressor.archive.archiver import ArchiveOptions, compress_candidate
from log_compressor.archive.lock_probe import is_file_in_use
from log_compressor.archive.models import OUTCOME_STATUS_VALUES, FileOutcome
from log_compressor.config import AppSettings
from log_compressor.errors import DirectoryResolutionError
from log_compressor.logging_utils import resolve_log_file
from log_compressor.pipeline.progress import ProgressSink
from log_compressor.scan.discover import Candidate, discover_candidates
from log_compressor.utils.paths import write_json_atomically
from log_compressor.utils.time_utils import now_utc

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CompressRunOptions:
    """Runtime options for one compression run; None falls back to settings."""

    dry_run: bool = False
    max_workers: int | None = None
    show_progress: bool | None = None
    summary_path: Path | None = None
    exclude_paths: tuple[Path, ...] = ()


@dataclass(frozen=True, slots=True)
class CompressRunResult:
    """Return object for compression run outcomes."""

    run_id: str
    directory: Path
    candidates_found: int
    outcomes: tuple[FileOutcome, ...]
    summary: dict[str, Any]
    summary_path: Path | None

    def count(self, status: str) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status == status)


def resolve_target_directory(directory: Path | None = None) -> Path:
    """Resolve the directory to scan, defaulting to the current working directory."""

    try:
        base = Path.cwd() if directory is None else directory.expanduser()
        resolved = base.resolve(strict=True)
    except OSError as exc:
        label = "current working directory" if directory is None else str(directory)
        raise DirectoryResolutionError(f"Failed to resolve {label}: {exc}") from exc
    if not resolved.is_dir():
        raise DirectoryResolutionError(f"Not a directory: {resolved}")
    return resolved


def _own_output_paths(settings: AppSettings, run_options: CompressRunOptions) -> list[Path]:
    """Files this run writes itself; they are never archived even if they look like logs."""

    paths = list(run_options.exclude_paths)
    if run_options.summary_path is not None:
        paths.append(run_options.summary_path)
    log_file = resolve_log_file(settings.logging.log_file)
    if log_file is not None:
        paths.append(log_file)
    return paths


def _process_candidate(
    candidate: Candidate,
    options: ArchiveOptions,
    sink: ProgressSink,
    logger: logging.Logger,
) -> FileOutcome:
    """Probe then archive one candidate; never raises."""

    started_mono = time.monotonic()
    try:
        if is_file_in_use(candidate.path):
            logger.info("compress.skipped_in_use file=%s", candidate.name)
            return FileOutcome.skipped(candidate.path)
        return compress_candidate(
            candidate,
            options,
            assume_not_in_use=True,
            on_progress=sink.callback_for(candidate.name),
            logger=logger,
        )
    except Exception as exc:
        logger.exception("compress_run.file_failed file=%s", candidate.path)
        return FileOutcome.failed(candidate.path, str(exc), duration_sec=time.monotonic() - started_mono)


def _run_candidates(
    candidates: list[Candidate],
    options: ArchiveOptions,
    *,
    max_workers: int,
    sink: ProgressSink,
    logger: logging.Logger,
) -> list[FileOutcome]:
    if max_workers <= 1 or len(candidates) <= 1:
        return [_process_candidate(candidate, options, sink, logger) for candidate in candidates]

    with ThreadPoolExecutor(
        max_workers=min(max_workers, len(candidates)),
        thread_name_prefix="log_compressor",
    ) as executor:
        futures = [executor.submit(_process_candidate, candidate, options, sink, logger) for candidate in candidates]
        return [future.result() for future in futures]


def _dry_run_plan(candidates: list[Candidate], logger: logging.Logger) -> dict[str, list[str]]:
    plan: dict[str, list[str]] = {"would_compress": [], "skipped_in_use": []}
    for candidate in candidates:
        if is_file_in_use(candidate.path):
            logger.info("compress_run.dry_run skipped_in_use file=%s", candidate.name)
            plan["skipped_in_use"].append(str(candidate.path))
        else:
            logger.info("compress_run.dry_run would_compress file=%s size_bytes=%s", candidate.name, candidate.size_bytes)
            plan["would_compress"].append(str(candidate.path))
    return plan


def run_compress_batch(
    settings: AppSettings,
    *,
    directory: Path | None = None,
    options: CompressRunOptions | None = None,
    logger: logging.Logger | None = None,
) -> CompressRunResult:
    """Compress every eligible log file directly inside ``directory``.

    Per-file failures are logged and recorded as outcomes; only an
    unresolvable directory raises (``DirectoryResolutionError``).
    """

    effective_logger = logger or LOGGER
    run_options = options or CompressRunOptions()
    max_workers = max(1, run_options.max_workers or settings.runner.max_workers)
    show_progress = settings.runner.show_progress if run_options.show_progress is None else run_options.show_progress
    archive_options = ArchiveOptions.from_config(settings.archive)

    target_dir = resolve_target_directory(directory)
    run_id = f"compress-run-{uuid4().hex[:12]}"
    started_ts = now_utc()
    started_mono = time.monotonic()

    effective_logger.info(
        "compress_run.start run_id=%s directory=%s suffix=%s workers=%s dry_run=%s",
        run_id,
        target_dir,
        settings.scan.log_suffix,
        max_workers,
        run_options.dry_run,
    )

    candidates = discover_candidates(
        target_dir,
        log_suffix=settings.scan.log_suffix,
        self_token=settings.scan.self_token,
        exclude=_own_output_paths(settings, run_options),
        logger=effective_logger,
    )
    total_bytes = sum(candidate.size_bytes for candidate in candidates)
    effective_logger.info("compress_run.discovered candidates=%s total_bytes=%s", len(candidates), total_bytes)

    outcomes: list[FileOutcome] = []
    dry_run_plan: dict[str, list[str]] | None = None
    if run_options.dry_run:
        dry_run_plan = _dry_run_plan(candidates, effective_logger)
    elif candidates:
        with ProgressSink(total_bytes, enabled=show_progress) as sink:
            outcomes = _run_candidates(
                candidates,
                archive_options,
                max_workers=max_workers,
                sink=sink,
                logger=effective_logger,
            )

    finished_ts = now_utc()
    duration_sec = time.monotonic() - started_mono
    status_counts = {status: 0 for status in OUTCOME_STATUS_VALUES}
    for outcome in outcomes:
        status_counts[outcome.status] += 1
    cleanup_warnings = sum(1 for outcome in outcomes if outcome.cleanup_error is not None)

    summary: dict[str, Any] = {
        "run_id": run_id,
        "directory": str(target_dir),
        "started_ts": started_ts.isoformat(),
        "finished_ts": finished_ts.isoformat(),
        "duration_sec": round(duration_sec, 3),
        "dry_run": run_options.dry_run,
        "max_workers": max_workers,
        "candidates_found": len(candidates),
        "files_compressed": status_counts["COMPRESSED"],
        "files_skipped_in_use": status_counts["SKIPPED_IN_USE"],
        "files_failed": status_counts["FAILED"],
        "cleanup_warnings": cleanup_warnings,
        "bytes_read": sum(outcome.bytes_read for outcome in outcomes),
        "bytes_written": sum(outcome.archive_size_bytes for outcome in outcomes),
        "outcomes": [outcome.as_dict() for outcome in outcomes],
    }
    if dry_run_plan is not None:
        summary["dry_run_plan"] = dry_run_plan

    summary_path = None
    if run_options.summary_path is not None:
        summary_path = write_json_atomically(summary, run_options.summary_path)

    effective_logger.info(
        "compress_run.complete run_id=%s candidates=%s compressed=%s skipped_in_use=%s failed=%s cleanup_warnings=%s elapsed_sec=%.2f",
        run_id,
        len(candidates),
        status_counts["COMPRESSED"],
        status_counts["SKIPPED_IN_USE"],
        status_counts["FAILED"],
        cleanup_warnings,
        duration_sec,
    )

    return CompressRunResult(
        run_id=run_id,
        directory=target_dir,
        candidates_found=len(candidates),
        outcomes=tuple(outcomes),
        summary=summary,
        summary_path=summary_path,
    )
