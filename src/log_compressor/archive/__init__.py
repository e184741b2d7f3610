"""Single-file archiving: lock probe, naming and ZIP streaming."""

from log_compressor.archive.archiver import ArchiveOptions, compress_candidate, verify_archive
from log_compressor.archive.lock_probe import is_file_in_use
from log_compressor.archive.models import OUTCOME_STATUS_VALUES, FileOutcome, OutcomeStatus
from log_compressor.archive.naming import archive_file_name, resolve_archive_target

__all__ = [
    "ArchiveOptions",
    "compress_candidate",
    "verify_archive",
    "is_file_in_use",
    "FileOutcome",
    "OutcomeStatus",
    "OUTCOME_STATUS_VALUES",
    "archive_file_name",
    "resolve_archive_target",
]
