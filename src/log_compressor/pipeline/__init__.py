"""Batch run orchestration."""

from log_compressor.pipeline.progress import ProgressSink
from log_compressor.pipeline.runner import (
    CompressRunOptions,
    CompressRunResult,
    resolve_target_directory,
    run_compress_batch,
)

__all__ = [
    "ProgressSink",
    "CompressRunOptions",
    "CompressRunResult",
    "resolve_target_directory",
    "run_compress_batch",
]
