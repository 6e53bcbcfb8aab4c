"""Start command for ONgDB Container."""

import logging
import sys
import time
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from ...core.constants import DATA_DIR_NAME
from ...core.ongdb_container import OngdbContainer
from ...services.exceptions import ConfigError, ContainerStartupTimeoutError, DockerServiceError
from ...utils.config_manager import ConfigManager


def parse_config_option(ctx, param, values):
    """Split repeated KEY=VALUE options into a dict."""
    entries = {}
    for item in values:
        key, sep, value = item.partition('=')
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got '{item}'")
        entries[key] = value
    return entries


@click.command()
@click.option('--image', help='Image to run (default from settings)')
@click.option('--password', help='Password of the neo4j account')
@click.option('--no-auth', is_flag=True, help='Disable authentication')
@click.option('--config', 'config_entries', multiple=True, callback=parse_config_option,
              metavar='KEY=VALUE', help='neo4j.conf property, may be repeated')
@click.option('--plugins', type=click.Path(exists=True, path_type=Path), help='Plugin file or directory to copy in')
@click.option('--database', type=click.Path(exists=True, file_okay=False, path_type=Path),
              help='Existing graph.db directory to copy in')
@click.option('--timeout', type=click.FloatRange(min=0, min_open=True), help='Startup timeout in seconds')
@click.option('--detach', '-d', is_flag=True, help='Leave the container running and exit')
@click.option('--verbose', '-v', is_flag=True, help='Show readiness polling')
@click.pass_context
def start(ctx, image, password, no_auth, config_entries, plugins, database, timeout, detach, verbose):
    """Start a disposable ONgDB server and print its URLs"""
    console = Console()
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            handlers=[logging.StreamHandler(sys.stderr)]
        )

    try:
        settings = ConfigManager(Path.cwd() / DATA_DIR_NAME).load_settings()
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    updates = {}
    if image:
        updates['image'] = image
    if timeout:
        updates['startup_timeout'] = timeout
    if updates:
        settings = settings.model_copy(update=updates)

    container = OngdbContainer.from_settings(settings)
    if no_auth:
        container.without_authentication()
    elif password is not None:
        container.with_admin_password(password)
    for key, value in config_entries.items():
        container.with_config(key, value)
    if plugins:
        container.with_plugins(plugins)
    if database:
        container.with_database(database)

    console.print(f"Starting [cyan]{container.image}[/cyan] ...")
    try:
        container.start()
    except ContainerStartupTimeoutError as e:
        click.echo(f"Error: container did not become ready: {e}", err=True)
        ctx.exit(1)
    except DockerServiceError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    table = Table(title="ONgDB Container")
    table.add_column("Endpoint", style="cyan", no_wrap=True)
    table.add_column("URL", style="green")
    table.add_row("Bolt", container.get_bolt_url())
    table.add_row("HTTP", container.get_http_url())
    table.add_row("HTTPS", container.get_https_url())
    table.add_row("Container", container.get_container_id()[:12])
    password = container.get_admin_password()
    table.add_row("Auth", f"neo4j/{password}" if password else "disabled")
    console.print(table)

    if detach:
        console.print("Container left running. Remove it with 'ongdb-container clean --force'.")
        return

    console.print("Press Ctrl+C to stop.")
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        console.print("Stopping container...")
    finally:
        container.stop()
