"""Shared utility helpers."""

from log_compressor.utils.paths import atomic_temp_path, write_json_atomically
from log_compressor.utils.time_utils import archive_timestamp, now_local, now_utc

__all__ = [
    "atomic_temp_path",
    "write_json_atomically",
    "archive_timestamp",
    "now_local",
    "now_utc",
]
