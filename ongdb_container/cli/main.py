"""Main CLI entry point for ONgDB Container."""

import click

from .commands.start import start
from .commands.clean import clean
from .commands.config import config
from .commands.config_key import config_key


@click.group()
def cli():
    """ONgDB Container - Disposable ONgDB servers for integration tests"""
    pass


# Register commands
cli.add_command(start)
cli.add_command(clean)
cli.add_command(config)
cli.add_command(config_key)


if __name__ == '__main__':
    cli()
