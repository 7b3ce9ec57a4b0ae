"""CLI command displaying a stored release state"""

import sys
from pathlib import Path

import click

from releasestate.cli.error_formatting import format_error
from releasestate.cli.utils.logging import logger
from releasestate.exceptions import ReleaseStateError
from releasestate.model import ReleaseState


@click.command(name="show")
@click.argument("state_file", type=click.Path(dir_okay=False, path_type=Path))
def show(state_file: Path):
    """Show a release state written by the generate command."""
    try:
        state = ReleaseState.read(state_file)
    except ReleaseStateError as e:
        logger.error(format_error(e))
        sys.exit(1)

    click.echo(state.to_json())
    click.echo(f"New version: {'yes' if state.is_new_version() else 'no'}")
    click.echo(f"New release: {'yes' if state.is_new_release() else 'no'}")
