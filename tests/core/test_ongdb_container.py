"""Tests for OngdbContainer."""

from unittest.mock import patch

import pytest

from ongdb_container.core.ongdb_container import OngdbContainer
from ongdb_container.core.wait_strategies import HttpWaitStrategy, LogMessageWaitStrategy, WaitAllStrategy
from ongdb_container.models.container import ContainerSettings


class TestOngdbContainerConfiguration:
    """Configuration applied before the container starts."""

    def test_default_image(self):
        container = OngdbContainer()
        assert container.image == "graphfoundation/ongdb:3.6.0"
        assert container.default_image is True

    def test_explicit_image(self):
        container = OngdbContainer("graphfoundation/ongdb:3.5.4")
        assert container.image == "graphfoundation/ongdb:3.5.4"
        assert container.default_image is False

    def test_exposes_three_ports(self):
        assert OngdbContainer().exposed_ports == [7687, 7474, 7473]

    def test_wait_strategy_waits_for_bolt_and_http(self):
        strategy = OngdbContainer().wait_strategy

        assert isinstance(strategy, WaitAllStrategy)
        assert strategy.startup_timeout == 120
        log_wait, http_wait = strategy.strategies
        assert isinstance(log_wait, LogMessageWaitStrategy)
        assert log_wait.pattern.search("INFO  Bolt enabled on 0.0.0.0:7687.\n")
        assert not log_wait.pattern.search("INFO  Bolt enabled on 0.0.0.0:7687.")
        assert isinstance(http_wait, HttpWaitStrategy)
        assert http_wait.port == 7474
        assert http_wait.status_predicate(200) is True
        assert http_wait.status_predicate(204) is False

    def test_default_password(self):
        container = OngdbContainer()
        container.configure()

        assert container.get_admin_password() == "password"
        assert container.env["NEO4J_AUTH"] == "neo4j/password"

    def test_with_admin_password(self):
        container = OngdbContainer().with_admin_password("secret")
        container.configure()

        assert container.get_admin_password() == "secret"
        assert container.env["NEO4J_AUTH"] == "neo4j/secret"

    def test_without_authentication(self):
        container = OngdbContainer().without_authentication()
        container.configure()

        assert container.get_admin_password() is None
        assert container.env["NEO4J_AUTH"] == "none"

    @pytest.mark.parametrize("password", [None, ""])
    def test_empty_password_disables_auth(self, password):
        explicit = OngdbContainer().with_admin_password(password)
        disabled = OngdbContainer().without_authentication()
        explicit.configure()
        disabled.configure()

        assert explicit.env["NEO4J_AUTH"] == disabled.env["NEO4J_AUTH"] == "none"

    def test_with_config_translates_key(self):
        container = (
            OngdbContainer()
            .with_config("dbms.security.procedures.unrestricted", "apoc.*")
            .with_config("dbms.memory.heap.max_size", "1G")
        )

        assert container.env["NEO4J_dbms_security_procedures_unrestricted"] == "apoc.*"
        assert container.env["NEO4J_dbms_memory_heap_max__size"] == "1G"

    def test_with_plugins_and_database(self, temp_project_dir):
        container = (
            OngdbContainer()
            .with_plugins(temp_project_dir / "plugins")
            .with_database(str(temp_project_dir / "graph.db"))
        )

        plugins, database = container.file_copies
        assert plugins.destination == "/var/lib/neo4j/plugins/"
        assert plugins.source.host_path == (temp_project_dir / "plugins").resolve()
        assert database.destination == "/data/databases/graph.db"

    def test_with_plugins_missing_path(self, temp_project_dir):
        with pytest.raises(ValueError):
            OngdbContainer().with_plugins(temp_project_dir / "missing")

    def test_from_settings(self, temp_project_dir):
        settings = ContainerSettings(
            image="graphfoundation/ongdb:3.5.4",
            admin_password=None,
            startup_timeout=30,
            config={"dbms.logs.debug.level": "DEBUG"},
            plugins=[temp_project_dir / "plugins" / "apoc.jar"],
        )

        container = OngdbContainer.from_settings(settings)

        assert container.image == "graphfoundation/ongdb:3.5.4"
        assert container.get_admin_password() is None
        assert container.wait_strategy.startup_timeout == 30
        assert container.env["NEO4J_dbms_logs_debug_level"] == "DEBUG"
        assert len(container.file_copies) == 1


class TestOngdbContainerRuntime:
    """Accessors that depend on the running container."""

    @pytest.fixture
    def running(self, mock_docker_service):
        container = OngdbContainer(docker_service=mock_docker_service)
        container._container = mock_docker_service.create_container.return_value
        return container

    def test_urls(self, running):
        assert running.get_bolt_url() == "bolt://localhost:32768"
        assert running.get_http_url() == "http://localhost:32769"
        assert running.get_https_url() == "https://localhost:32770"

    def test_liveness_ports(self, running):
        assert running.get_liveness_check_port_numbers() == {32768, 32769, 32770}

    def test_liveness_ports_independent_of_call_order(self, running):
        running.get_https_url()
        first = running.get_liveness_check_port_numbers()
        running.get_bolt_url()
        assert running.get_liveness_check_port_numbers() == first
        assert len(first) == 3

    @patch('ongdb_container.core.generic_container.HostPortWaitStrategy.check_ready', return_value=True)
    def test_start_sets_auth_env(self, mock_liveness, mock_docker_service):
        container = OngdbContainer(docker_service=mock_docker_service).with_admin_password("secret")
        container.wait_strategy = WaitAllStrategy([])

        container.start()

        kwargs = mock_docker_service.create_container.call_args.kwargs
        assert kwargs["environment"]["NEO4J_AUTH"] == "neo4j/secret"
        assert set(kwargs["ports"]) == {"7687/tcp", "7474/tcp", "7473/tcp"}
