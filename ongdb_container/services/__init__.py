"""Service layer for abstracting Docker operations."""

from .docker_service import DockerService
from .exceptions import (
    ServiceError,
    DockerServiceError,
    ImageNotFoundError,
    ContainerNotFoundError,
    ContainerNotStartedError,
    ContainerStartupTimeoutError,
    ConfigError,
)

__all__ = [
    "DockerService",
    "ServiceError",
    "DockerServiceError",
    "ImageNotFoundError",
    "ContainerNotFoundError",
    "ContainerNotStartedError",
    "ContainerStartupTimeoutError",
    "ConfigError",
]
