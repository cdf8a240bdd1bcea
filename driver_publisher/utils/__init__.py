# driver_publisher/utils/__init__.py
"""Utility functions for driver-publisher"""

from .file_utils import calculate_file_checksum, format_size, safe_remove
from .async_utils import run_async, BackgroundTask

__all__ = [
    "calculate_file_checksum",
    "format_size",
    "safe_remove",
    "run_async",
    "BackgroundTask",
]
