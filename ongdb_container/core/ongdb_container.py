"""Disposable ONgDB server for integration tests."""

import logging
from typing import Optional, Set

from ..models.container import ContainerSettings
from ..services.docker_service import DockerService
from .config_keys import format_configuration_key
from .constants import (
    AUTH_ENV_KEY,
    AUTH_FORMAT,
    BOLT_PORT,
    BOLT_READY_PATTERN,
    DATABASE_PATH,
    DEFAULT_ADMIN_PASSWORD,
    DEFAULT_IMAGE,
    EXPOSED_PORTS,
    HTTP_PORT,
    HTTPS_PORT,
    NO_AUTH,
    PLUGINS_PATH,
    POLL_INTERVAL,
    STARTUP_TIMEOUT,
)
from .generic_container import GenericContainer
from .wait_strategies import HttpWaitStrategy, LogMessageWaitStrategy, WaitAllStrategy

logger = logging.getLogger(__name__)


class OngdbContainer(GenericContainer):
    """ONgDB server running in the official ``graphfoundation/ongdb`` image.

    The container is ready once the Bolt connector has announced itself in
    the log and the HTTP endpoint answers with 200 OK.

    Example::

        with OngdbContainer().with_config("dbms.logs.debug.level", "DEBUG") as db:
            driver = GraphDatabase.driver(db.get_bolt_url(), auth=("neo4j", db.get_admin_password()))
    """

    def __init__(
        self,
        image: str = DEFAULT_IMAGE,
        docker_service: Optional[DockerService] = None,
        startup_timeout: float = STARTUP_TIMEOUT,
        poll_interval: float = POLL_INTERVAL,
    ):
        super().__init__(image, docker_service=docker_service)
        self.admin_password: Optional[str] = DEFAULT_ADMIN_PASSWORD
        self.default_image = image == DEFAULT_IMAGE

        wait_for_bolt = LogMessageWaitStrategy(BOLT_READY_PATTERN)
        wait_for_http = HttpWaitStrategy(HTTP_PORT, status_predicate=lambda status: status == 200)
        self.wait_strategy = WaitAllStrategy(
            [wait_for_bolt, wait_for_http],
            startup_timeout=startup_timeout,
            poll_interval=poll_interval,
        )

        self.add_exposed_ports(*EXPOSED_PORTS)

    @classmethod
    def from_settings(cls, settings: ContainerSettings, docker_service: Optional[DockerService] = None) -> "OngdbContainer":
        """Build a container from stored project settings."""
        container = cls(
            settings.image,
            docker_service=docker_service,
            startup_timeout=settings.startup_timeout,
            poll_interval=settings.poll_interval,
        )
        container.with_admin_password(settings.admin_password)
        for entry in settings.config_entries():
            container.with_config(entry.key, entry.value)
        for plugin in settings.plugins:
            container.with_plugins(plugin)
        return container

    def get_liveness_check_port_numbers(self) -> Set[int]:
        return {self.get_mapped_port(port) for port in EXPOSED_PORTS}

    def configure(self) -> None:
        if self.admin_password:
            neo4j_auth = AUTH_FORMAT.format(self.admin_password)
        else:
            neo4j_auth = NO_AUTH
        self.add_env(AUTH_ENV_KEY, neo4j_auth)

    def get_bolt_url(self) -> str:
        """Bolt URL for use with the Neo4j drivers."""
        return f"bolt://{self.get_host()}:{self.get_mapped_port(BOLT_PORT)}"

    def get_http_url(self) -> str:
        """URL of the transactional HTTP endpoint."""
        return f"http://{self.get_host()}:{self.get_mapped_port(HTTP_PORT)}"

    def get_https_url(self) -> str:
        """URL of the transactional HTTPS endpoint."""
        return f"https://{self.get_host()}:{self.get_mapped_port(HTTPS_PORT)}"

    def with_admin_password(self, admin_password: Optional[str]) -> "OngdbContainer":
        """Set the password of the ``neo4j`` account.

        ``None`` or an empty string disables authentication.
        """
        self.admin_password = admin_password
        return self

    def without_authentication(self) -> "OngdbContainer":
        return self.with_admin_password(None)

    def with_database(self, graph_db) -> "OngdbContainer":
        """Copy an existing ``graph.db`` folder into the container before it starts."""
        return self.with_copy_file_to_container(graph_db, DATABASE_PATH)

    def with_plugins(self, plugins) -> "OngdbContainer":
        """Copy plugins into the container.

        A directory is copied as a whole into the plugins folder, a single
        file is copied next to any other plugins.
        """
        return self.with_copy_file_to_container(plugins, PLUGINS_PATH)

    def with_config(self, key: str, value: str) -> "OngdbContainer":
        """Set a ``neo4j.conf`` property such as ``dbms.security.procedures.unrestricted``."""
        env_name = format_configuration_key(key)
        logger.debug(f"Setting {key} as {env_name}")
        self.add_env(env_name, value)
        return self

    def get_admin_password(self) -> Optional[str]:
        """Password of the ``neo4j`` account, ``None`` when authentication is disabled."""
        return self.admin_password
