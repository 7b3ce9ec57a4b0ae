"""releasestate CLI"""

import click

from releasestate import __version__
from releasestate.cli.generate import generate
from releasestate.cli.show import show
from releasestate.cli.utils.logging import configure_logging


@click.group()
@click.version_option(__version__, prog_name="releasestate")
@click.option("--debug/--no-debug", default=False, help="Enable debug mode")
def cli(debug: bool):
    """
    Release state of the last commit of a Git repository.
    """
    configure_logging(debug)


cli.add_command(generate)
cli.add_command(show)

if __name__ == "__main__":
    cli()
