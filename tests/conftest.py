import pytest
from click.testing import CliRunner
from unittest.mock import MagicMock
import tempfile
from pathlib import Path

from ongdb_container.services.docker_service import DockerService


class FakeClock:
    """Monotonic clock that only moves when sleep() is called."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class ScriptedStrategy:
    """Wait strategy that answers from a list of results, then repeats the last one."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    def check_ready(self, target):
        index = min(self.calls, len(self.results) - 1)
        self.calls += 1
        return self.results[index]


@pytest.fixture
def cli_runner():
    """Provides a Click CLI runner for testing commands."""
    return CliRunner()


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def scripted_strategy():
    """Factory for strategies with predetermined readiness answers."""
    return ScriptedStrategy


@pytest.fixture
def mock_docker_service():
    """Provides a mocked DockerService with three published ports."""
    service = MagicMock(spec=DockerService)
    service.get_host.return_value = "localhost"
    port_map = {7687: 32768, 7474: 32769, 7473: 32770}
    service.get_mapped_port.side_effect = lambda container, port: port_map[port]
    container = MagicMock()
    container.id = "abc123def4567890"
    container.short_id = "abc123def4"
    service.create_container.return_value = container
    service.get_logs.return_value = ""
    return service


@pytest.fixture
def temp_project_dir():
    """Creates a temporary project directory with plugin and database folders."""
    with tempfile.TemporaryDirectory() as tmpdir:
        project_path = Path(tmpdir)

        (project_path / "plugins").mkdir()
        (project_path / "plugins" / "apoc.jar").write_bytes(b"PK")
        (project_path / "graph.db").mkdir()
        (project_path / "graph.db" / "neostore").write_bytes(b"")

        yield project_path


@pytest.fixture(autouse=True)
def clear_settings_env(monkeypatch):
    """Keep settings overrides from the developer's shell out of tests."""
    for name in ("ONGDB_CONTAINER_IMAGE", "ONGDB_CONTAINER_PASSWORD", "ONGDB_CONTAINER_STARTUP_TIMEOUT", "DOCKER_HOST"):
        monkeypatch.delenv(name, raising=False)
