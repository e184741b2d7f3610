"""Candidate discovery."""

from log_compressor.scan.discover import Candidate, discover_candidates, iter_candidates, matches_log_name

__all__ = [
    "Candidate",
    "iter_candidates",
    "discover_candidates",
    "matches_log_name",
]
