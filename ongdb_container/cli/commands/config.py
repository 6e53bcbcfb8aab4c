"""Configuration management commands for ONgDB Container."""

from pathlib import Path

import click

from ...core.config_keys import format_configuration_key
from ...core.constants import DATA_DIR_NAME
from ...services.exceptions import ConfigError
from ...utils.config_manager import ConfigManager


@click.group()
def config():
    """Manage stored container settings"""
    pass


@config.command('set')
@click.argument('key')
@click.argument('value')
@click.pass_context
def set_value(ctx, key, value):
    """Store a neo4j.conf property applied on every start"""
    config_manager = ConfigManager(Path.cwd() / DATA_DIR_NAME)
    try:
        config_manager.set_config_value(key, value)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)
    click.echo(f"Set {key}={value} ({format_configuration_key(key)})")


@config.command()
@click.pass_context
def show(ctx):
    """Show effective settings"""
    config_manager = ConfigManager(Path.cwd() / DATA_DIR_NAME)
    try:
        settings = config_manager.load_settings()
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    click.echo(settings.model_dump_json(indent=2, exclude={'admin_password'}))
