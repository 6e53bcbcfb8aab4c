"""Custom exceptions for service layer."""


class ServiceError(Exception):
    """Base exception for all service-related errors."""

    pass


class DockerServiceError(ServiceError):
    """Exception raised for Docker service operations."""

    pass


class ImageNotFoundError(DockerServiceError):
    """Exception raised when a Docker image is not found."""

    pass


class ContainerNotFoundError(DockerServiceError):
    """Exception raised when a Docker container is not found."""

    pass


class ContainerNotStartedError(DockerServiceError):
    """Exception raised when a running container is required but none exists."""

    pass


class ContainerStartupTimeoutError(DockerServiceError, TimeoutError):
    """Exception raised when a container is not ready within its startup timeout."""

    pass


class ConfigError(ServiceError):
    """Exception raised when stored settings cannot be loaded."""

    pass
