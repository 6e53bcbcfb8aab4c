"""Clean command for ONgDB Container."""

import click

from ...services.docker_service import DockerService
from ...services.exceptions import DockerServiceError
from ...core.constants import CONTAINER_LABEL


@click.command()
@click.option('--force', '-f', is_flag=True, help='Force remove running containers')
@click.pass_context
def clean(ctx, force):
    """Remove containers started by ongdb-container"""
    try:
        docker_service = DockerService()
        containers = docker_service.list_containers(all=True, labels={CONTAINER_LABEL: "true"})
    except DockerServiceError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    removed = 0
    for container in containers:
        if container.status == 'running' and not force:
            click.echo(f"Skipping running container: {container.name}")
            continue
        try:
            docker_service.remove_container(container, force=force)
            click.echo(f"Removed container: {container.name}")
            removed += 1
        except DockerServiceError as e:
            click.echo(f"Failed to remove container {container.name}: {e}", err=True)

    if removed > 0:
        click.echo(f"Removed {removed} container(s)")
    else:
        click.echo("No containers removed")
