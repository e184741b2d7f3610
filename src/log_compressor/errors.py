"""Exception types raised by log_compressor."""

from __future__ import annotations


class LogCompressorError(Exception):
    """Base class for tool-specific errors."""


class DirectoryResolutionError(LogCompressorError):
    """The directory to scan could not be resolved; nothing can be processed."""


class ArchiveVerificationError(LogCompressorError):
    """A finalized archive does not hold exactly the expected entry."""
