"""CLI commands"""

from . import pack
from . import publish

__all__ = [
    "pack",
    "publish",
]
