"""Docker service for abstracting Docker operations."""

import io
import logging
import os
import tarfile
from pathlib import Path
from typing import Any, Optional
from urllib.parse import urlparse

import docker
import docker.errors
from docker.models.containers import Container

from .exceptions import (
    ContainerNotFoundError,
    DockerServiceError,
    ImageNotFoundError,
)

logger = logging.getLogger(__name__)


class DockerService:
    """Service for Docker operations with clean abstractions."""

    def __init__(self):
        """Initialize Docker service and test connection."""
        try:
            self.client = docker.from_env()
            self.client.ping()
        except docker.errors.DockerException as e:
            if "connection refused" in str(e).lower() or "cannot connect" in str(e).lower():
                raise DockerServiceError(
                    "Docker daemon is not running. Please start Docker Desktop or the Docker service."
                ) from e
            else:
                raise DockerServiceError(f"Failed to connect to Docker: {e}") from e

    def get_host(self) -> str:
        """Host name under which published container ports are reachable.

        Returns:
            The host of a ``tcp://`` DOCKER_HOST, otherwise ``localhost``
        """
        docker_host = os.environ.get("DOCKER_HOST", "")
        if docker_host.startswith(("tcp://", "http://", "https://")):
            hostname = urlparse(docker_host).hostname
            if hostname:
                return hostname
        return "localhost"

    def pull_image_if_missing(self, image: str) -> None:
        """Pull an image unless it is already present locally.

        Raises:
            ImageNotFoundError: If the registry does not know the image
            DockerServiceError: If the pull fails
        """
        try:
            self.client.images.get(image)
            return
        except docker.errors.ImageNotFound:
            pass
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to inspect image: {e}") from e

        logger.info(f"Pulling image {image}")
        try:
            self.client.images.pull(image)
        except docker.errors.ImageNotFound as e:
            raise ImageNotFoundError(f"Image '{image}' not found") from e
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to pull image '{image}': {e}") from e

    def create_container(
        self,
        image: str,
        name: Optional[str] = None,
        command: Optional[str] = None,
        environment: Optional[dict[str, str]] = None,
        ports: Optional[dict[str, Any]] = None,
        labels: Optional[dict[str, str]] = None,
        **kwargs,
    ) -> Container:
        """Create a Docker container.

        Args:
            image: Image name
            name: Container name
            command: Command to run
            environment: Environment variables
            ports: Port bindings, ``None`` as host port picks a random one
            labels: Container labels
            **kwargs: Additional Docker create parameters

        Returns:
            Created container object

        Raises:
            ImageNotFoundError: If image not found
            DockerServiceError: If creation fails
        """
        try:
            container = self.client.containers.create(
                image=image,
                name=name,
                command=command,
                environment=environment,
                ports=ports,
                labels=labels,
                **kwargs,
            )
            return container
        except docker.errors.ImageNotFound as e:
            raise ImageNotFoundError(f"Image '{image}' not found") from e
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to create container: {e}") from e
        except Exception as e:
            raise DockerServiceError(f"Unexpected error creating container: {e}") from e

    def start_container(self, container: Container) -> None:
        """Start a created container and refresh its attributes.

        Raises:
            ContainerNotFoundError: If container not found
            DockerServiceError: If start fails
        """
        try:
            container.start()
            container.reload()
        except docker.errors.NotFound as e:
            raise ContainerNotFoundError("Container not found") from e
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to start container: {e}") from e

    def remove_container(self, container: Container, force: bool = False) -> None:
        """Remove a container together with its anonymous volumes.

        Args:
            container: Container object
            force: Force remove even if running

        Raises:
            ContainerNotFoundError: If container not found
            DockerServiceError: If removal fails
        """
        try:
            container.remove(force=force, v=True)
        except docker.errors.NotFound as e:
            raise ContainerNotFoundError("Container not found") from e
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to remove container: {e}") from e
        except Exception as e:
            raise DockerServiceError(f"Unexpected error removing container: {e}") from e

    def get_logs(self, container: Container) -> str:
        """Return combined stdout and stderr of a container.

        Raises:
            ContainerNotFoundError: If container not found
            DockerServiceError: If logs cannot be read
        """
        try:
            return container.logs(stdout=True, stderr=True).decode("utf-8", errors="replace")
        except docker.errors.NotFound as e:
            raise ContainerNotFoundError("Container not found") from e
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to read container logs: {e}") from e

    def get_mapped_port(self, container: Container, port: int, protocol: str = "tcp") -> int:
        """Return the host port a container port is published on.

        Raises:
            DockerServiceError: If the port is not published
        """
        bindings = (container.ports or {}).get(f"{port}/{protocol}")
        if not bindings:
            raise DockerServiceError(f"Port {port}/{protocol} is not published by container {container.short_id}")
        return int(bindings[0]["HostPort"])

    def copy_to_container(
        self, container: Container, src_path: Path, dst_path: str, file_mode: Optional[int] = None
    ) -> None:
        """Copy a file or directory to a container.

        A directory is copied so that its contents end up at ``dst_path``. A
        file copied to a destination ending in ``/`` keeps its name.

        Args:
            container: Container object
            src_path: Source file or directory
            dst_path: Destination path in container
            file_mode: Permission bits applied to copied files

        Raises:
            ContainerNotFoundError: If container not found
            DockerServiceError: If copy fails
        """
        src_path = Path(src_path)
        if src_path.is_file() and dst_path.endswith('/'):
            dst_path = dst_path + src_path.name
        arcname = dst_path.rstrip('/').lstrip('/')

        def apply_mode(info: tarfile.TarInfo) -> tarfile.TarInfo:
            if file_mode is not None and info.isfile():
                info.mode = file_mode
            return info

        try:
            # Create tar archive in memory
            tar_stream = io.BytesIO()
            with tarfile.open(fileobj=tar_stream, mode='w') as tar:
                tar.add(str(src_path), arcname=arcname, filter=apply_mode)

            tar_stream.seek(0)
            container.put_archive('/', tar_stream.read())
        except docker.errors.NotFound as e:
            raise ContainerNotFoundError("Container not found") from e
        except Exception as e:
            raise DockerServiceError(f"Failed to copy to container: {e}") from e

    def list_containers(
        self,
        all: bool = True,
        filters: Optional[dict[str, Any]] = None,
        labels: Optional[dict[str, str]] = None,
    ) -> list[Container]:
        """List containers with optional filters.

        Args:
            all: Include stopped containers
            filters: Docker filters
            labels: Label filters

        Returns:
            List of containers

        Raises:
            DockerServiceError: If listing fails
        """
        try:
            filter_dict = filters or {}
            if labels:
                filter_dict['label'] = [f"{k}={v}" for k, v in labels.items()]

            return self.client.containers.list(all=all, filters=filter_dict)
        except docker.errors.APIError as e:
            raise DockerServiceError(f"Failed to list containers: {e}") from e
        except Exception as e:
            raise DockerServiceError(f"Unexpected error listing containers: {e}") from e
