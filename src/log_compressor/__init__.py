"""Compress rotated log files into timestamped ZIP archives."""

__version__ = "0.1.0"
