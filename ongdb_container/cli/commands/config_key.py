"""Config key translation command."""

import click

from ...core.config_keys import format_configuration_key


@click.command('config-key')
@click.argument('keys', nargs=-1, required=True)
def config_key(keys):
    """Show the environment variable name used for each neo4j.conf KEY"""
    for key in keys:
        click.echo(f"{key} -> {format_configuration_key(key)}")
