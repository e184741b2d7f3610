"""Per-file outcome models shared by the archiver and the batch runner."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Literal

OutcomeStatus = Literal["COMPRESSED", "SKIPPED_IN_USE", "FAILED"]
OUTCOME_STATUS_VALUES: tuple[OutcomeStatus, ...] = ("COMPRESSED", "SKIPPED_IN_USE", "FAILED")


@dataclass(frozen=True, slots=True)
class FileOutcome:
    """Terminal result of processing one candidate."""

    source: Path
    status: OutcomeStatus
    archive_path: Path | None = None
    reason: str | None = None
    cleanup_error: str | None = None
    bytes_read: int = 0
    archive_size_bytes: int = 0
    duration_sec: float = 0.0

    @classmethod
    def skipped(cls, source: Path) -> "FileOutcome":
        return cls(source=source, status="SKIPPED_IN_USE")

    @classmethod
    def failed(cls, source: Path, reason: str, duration_sec: float = 0.0) -> "FileOutcome":
        return cls(source=source, status="FAILED", reason=reason, duration_sec=duration_sec)

    @property
    def source_removed(self) -> bool:
        return self.status == "COMPRESSED" and self.cleanup_error is None

    def as_dict(self) -> dict[str, Any]:
        return {
            "source": str(self.source),
            "status": self.status,
            "archive_path": str(self.archive_path) if self.archive_path else None,
            "reason": self.reason,
            "cleanup_error": self.cleanup_error,
            "bytes_read": self.bytes_read,
            "archive_size_bytes": self.archive_size_bytes,
            "duration_sec": round(self.duration_sec, 3),
        }
