"""Command line interface for driver-publisher"""

from .main import cli, main

__all__ = ["cli", "main"]
