"""Pack command implementation"""

from pathlib import Path

import click
from rich.markup import escape

from ..utils.output import format_pack_result, print_error
from ...api import Packer
from ...api.exceptions import DriverPublisherError


@click.command()
@click.option(
    '--project-root', '-p',
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Project directory (default: nearest directory with a deployment settings file)'
)
@click.option(
    '--config', '-c', 'config_path',
    type=click.Path(dir_okay=False, path_type=Path),
    help='Settings file (default: deployment.yaml, deployment.yml or deployment.xml)'
)
@click.pass_context
def pack(ctx, project_root, config_path):
    """Build the driver archive without publishing it

    The archive is written to deployment/<driverUniqueName>.zip.
    """
    packer = Packer(project_root or ctx.obj.project_root, config_path)

    try:
        handle = packer.pack()
    except DriverPublisherError as e:
        print_error(f"Packaging failed: {escape(str(e))}")
        ctx.exit(1)

    format_pack_result(handle)
