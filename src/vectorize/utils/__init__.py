"""Utility functions for vectorize.

This module provides logging setup and retrace statistics.
"""

from vectorize.utils.logging import (
    RetraceLogger,
    RetraceStats,
    configure_logging,
    get_logger,
)

__all__ = [
    "RetraceLogger",
    "RetraceStats",
    "configure_logging",
    "get_logger",
]
