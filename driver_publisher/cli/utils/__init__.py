"""CLI utility functions"""

from .output import (
    console,
    print_error,
    print_warning,
    publish_failure_message,
    format_publish_result,
    format_pack_result,
)

__all__ = [
    'console',
    'print_error',
    'print_warning',
    'publish_failure_message',
    'format_publish_result',
    'format_pack_result',
]
