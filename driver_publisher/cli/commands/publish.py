"""Publish command implementation"""

from pathlib import Path

import click

from ..utils.output import console, format_publish_result, print_warning
from ...api import Publisher
from ...constants import UpdaterKind
from ...models.result import ErrorKind


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
@click.option(
    '--mode', '-m',
    type=click.Choice(['auto', 'archive', 'entries']),
    default='auto',
    help='Send one driver archive, or each driver and script separately'
)
@click.pass_context
def publish(ctx, project_root, config_path, mode):
    """Publish the driver to the CloudShell server

    Examples:
        driver-publisher publish
        driver-publisher publish --project-root ./my-driver --mode entries
    """
    publisher = Publisher(project_root or ctx.obj.project_root, config_path)
    kind = None if mode == 'auto' else UpdaterKind(mode)

    task = publisher.start(kind=kind)
    try:
        with console.status("Publishing..."):
            result = task.result()
    except KeyboardInterrupt:
        print_warning("Cancelling publish, the server may hold a partial update")
        task.cancel()
        result = task.result()

    format_publish_result(result)

    if result.error_kind == ErrorKind.CANCELLED:
        ctx.exit(130)
    if not result.is_success:
        ctx.exit(1)
