# driver_publisher/cli/main.py
"""Main CLI entry point for driver-publisher"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

import click
from rich.logging import RichHandler

from ..constants import APP_NAME, ENV_LOG_LEVEL, LOG_FORMAT
from ..core.path_resolver import find_project_root
from .commands import pack, publish
from .utils.output import console


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.getLevelName(os.environ.get(ENV_LOG_LEVEL, "WARNING").upper())
        if not isinstance(level, int):
            level = logging.WARNING

    logging.disable(logging.NOTSET)

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ],
        force=True
    )

    # Adjust third-party loggers
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


class Context:
    """CLI context object with lazy project lookup"""

    def __init__(self):
        self._project_root: Optional[Path] = None
        self._project_checked: bool = False
        self.verbose: bool = False
        self.debug: bool = False

    @property
    def project_root(self) -> Optional[Path]:
        """Nearest directory holding a settings file, or None"""
        if not self._project_checked:
            self._project_checked = True
            self._project_root = find_project_root()
            if self.debug:
                console.print(f"[dim]Project root: {self._project_root or 'not found'}[/dim]")
        return self._project_root


@click.group(name=APP_NAME)
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.pass_context
def cli(ctx, verbose, debug, quiet):
    """Driver Publisher - Package and publish CloudShell drivers

    Reads deployment settings from the project, builds the driver archive
    and updates the driver (and scripts) on the CloudShell server.
    """
    # Setup logging
    if quiet:
        logging.disable(logging.CRITICAL)
    else:
        setup_logging(verbose=verbose, debug=debug)

    ctx.obj = Context()
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug


# Register commands
cli.add_command(publish.publish)
cli.add_command(pack.pack)


def main():
    """Main entry point for the CLI application"""
    try:
        cli(prog_name=APP_NAME)

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except Exception as e:
        console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
