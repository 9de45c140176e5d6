"""Utility functions."""

from .helpers import (
    setup_logging,
    get_timestamp,
    format_metrics,
    atomic_path,
    write_json_atomic,
    read_json,
)

__all__ = [
    "setup_logging",
    "get_timestamp",
    "format_metrics",
    "atomic_path",
    "write_json_atomic",
    "read_json",
]
