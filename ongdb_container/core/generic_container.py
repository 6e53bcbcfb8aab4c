"""Generic disposable container built on the Docker service."""

import logging
import os
from typing import Dict, List, Optional, Set, Union

from ..models.container import FileCopy, MountableFile
from ..services.docker_service import DockerService
from ..services.exceptions import ContainerNotStartedError, DockerServiceError
from .constants import CONTAINER_LABEL
from .wait_strategies import HostPortWaitStrategy, WaitAllStrategy, WaitStrategy

logger = logging.getLogger(__name__)


def as_mountable_file(resource: Union[MountableFile, str, os.PathLike]) -> MountableFile:
    """Accept a MountableFile or anything path-like."""
    if isinstance(resource, MountableFile):
        return resource
    return MountableFile.for_host_path(resource)


class GenericContainer:
    """A container that is configured, started, polled for readiness and removed.

    Configuration methods return the container itself so calls can be
    chained before ``start()``.
    """

    def __init__(self, image: str, docker_service: Optional[DockerService] = None):
        self.image = image
        self.env: Dict[str, str] = {}
        self.exposed_ports: List[int] = []
        self.file_copies: List[FileCopy] = []
        self.labels: Dict[str, str] = {CONTAINER_LABEL: "true"}
        self.wait_strategy: WaitStrategy = WaitAllStrategy()
        self._docker_service = docker_service
        self._container = None

    @property
    def docker_service(self) -> DockerService:
        if self._docker_service is None:
            self._docker_service = DockerService()
        return self._docker_service

    # Configuration

    def add_exposed_ports(self, *ports: int) -> None:
        for port in ports:
            if port not in self.exposed_ports:
                self.exposed_ports.append(port)

    def add_env(self, key: str, value: str) -> None:
        self.env[key] = value

    def with_env(self, key: str, value: str) -> "GenericContainer":
        self.add_env(key, value)
        return self

    def with_exposed_ports(self, *ports: int) -> "GenericContainer":
        self.add_exposed_ports(*ports)
        return self

    def with_copy_file_to_container(self, resource, destination: str) -> "GenericContainer":
        self.file_copies.append(FileCopy(source=as_mountable_file(resource), destination=destination))
        return self

    def waiting_for(self, strategy: WaitStrategy) -> "GenericContainer":
        self.wait_strategy = strategy
        return self

    def configure(self) -> None:
        """Hook for subclasses to finalise configuration right before start."""

    # Lifecycle

    @property
    def is_running(self) -> bool:
        return self._container is not None

    def start(self) -> "GenericContainer":
        """Create, start and wait for the container.

        Raises:
            DockerServiceError: If the container cannot be created or started
            ContainerStartupTimeoutError: If it does not become ready in time
        """
        if self.is_running:
            return self

        self.configure()
        service = self.docker_service
        service.pull_image_if_missing(self.image)

        container = service.create_container(
            image=self.image,
            environment=dict(self.env),
            ports={f"{port}/tcp": None for port in self.exposed_ports},
            labels=dict(self.labels),
            detach=True,
        )
        self._container = container
        try:
            for copy in self.file_copies:
                logger.debug(f"Copying {copy.source.host_path} to {copy.destination}")
                service.copy_to_container(
                    container, copy.source.host_path, copy.destination, file_mode=copy.source.file_mode
                )
            service.start_container(container)
            logger.info(f"Started container {container.short_id} from {self.image}")
            self._wait_until_container_started()
        except BaseException:
            logger.error(f"Container {container.short_id} failed to start, logs:\n{self._safe_logs()}")
            self._remove_quietly()
            raise
        return self

    def _wait_until_container_started(self) -> None:
        strategy = self.wait_strategy
        if not isinstance(strategy, WaitAllStrategy):
            strategy = WaitAllStrategy([strategy])

        # Liveness ports first, then the richer readiness checks, within one budget
        liveness = WaitAllStrategy(
            [HostPortWaitStrategy()],
            startup_timeout=strategy.startup_timeout,
            poll_interval=strategy.poll_interval,
            clock=strategy.clock,
            sleep=strategy.sleep,
        )
        deadline = strategy.clock() + strategy.startup_timeout
        liveness.wait_until_ready(self, deadline=deadline)
        strategy.wait_until_ready(self, deadline=deadline)

    def stop(self) -> None:
        """Stop and remove the container. Does nothing if it was never started."""
        if self._container is None:
            return
        container = self._container
        try:
            self.docker_service.remove_container(container, force=True)
            logger.info(f"Removed container {container.short_id}")
        finally:
            self._container = None

    def _remove_quietly(self) -> None:
        try:
            self.stop()
        except DockerServiceError as e:
            logger.warning(f"Could not remove container: {e}")

    def _safe_logs(self) -> str:
        try:
            return self.get_logs()
        except DockerServiceError as e:
            return f"<logs unavailable: {e}>"

    def __enter__(self) -> "GenericContainer":
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    # Runtime information

    def _require_container(self):
        if self._container is None:
            raise ContainerNotStartedError("Container has not been started")
        return self._container

    def get_container_id(self) -> str:
        return self._require_container().id

    def get_host(self) -> str:
        return self.docker_service.get_host()

    def get_mapped_port(self, port: int) -> int:
        return self.docker_service.get_mapped_port(self._require_container(), port)

    def get_logs(self) -> str:
        return self.docker_service.get_logs(self._require_container())

    def get_liveness_check_port_numbers(self) -> Set[int]:
        return {self.get_mapped_port(port) for port in self.exposed_ports}
