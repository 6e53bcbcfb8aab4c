"""Readiness checks polled while a container starts up."""

import logging
import re
import socket
import time
from abc import ABC, abstractmethod
from typing import Callable, Iterable, Optional

import requests

from ..services.exceptions import ContainerStartupTimeoutError
from .constants import HTTP_REQUEST_TIMEOUT, POLL_INTERVAL, SOCKET_TIMEOUT, STARTUP_TIMEOUT

logger = logging.getLogger(__name__)


class WaitStrategy(ABC):
    """A single readiness condition.

    ``target`` is the container being started. Strategies only read from it
    (logs, host, mapped ports) and hold no state between polls.
    """

    @abstractmethod
    def check_ready(self, target) -> bool:
        """Return True if the condition holds for ``target`` right now."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class LogMessageWaitStrategy(WaitStrategy):
    """Ready once a line of the combined stdout/stderr log matches a regex."""

    def __init__(self, regex: str):
        self.pattern = re.compile(regex, re.MULTILINE)

    def check_ready(self, target) -> bool:
        return self.pattern.search(target.get_logs()) is not None

    def __repr__(self) -> str:
        return f"LogMessageWaitStrategy({self.pattern.pattern!r})"


def is_http_ok(status_code: int) -> bool:
    return status_code == requests.codes.ok


class HttpWaitStrategy(WaitStrategy):
    """Ready once an HTTP GET against a container port returns an accepted status.

    Connection errors and timeouts are treated as "not ready yet"; the
    server is usually still binding its sockets while these happen.
    """

    def __init__(
        self,
        port: int,
        path: str = "/",
        status_predicate: Callable[[int], bool] = is_http_ok,
        request_timeout: float = HTTP_REQUEST_TIMEOUT,
    ):
        self.port = port
        self.path = path if path.startswith("/") else f"/{path}"
        self.status_predicate = status_predicate
        self.request_timeout = request_timeout

    def url_for(self, target) -> str:
        return f"http://{target.get_host()}:{target.get_mapped_port(self.port)}{self.path}"

    def check_ready(self, target) -> bool:
        url = self.url_for(target)
        try:
            response = requests.get(url, timeout=self.request_timeout)
        except requests.RequestException as e:
            logger.debug(f"HTTP check against {url} failed: {e}")
            return False
        logger.debug(f"HTTP check against {url} returned {response.status_code}")
        return self.status_predicate(response.status_code)

    def __repr__(self) -> str:
        return f"HttpWaitStrategy(port={self.port}, path={self.path!r})"


class HostPortWaitStrategy(WaitStrategy):
    """Ready once every liveness port of the target accepts a TCP connection."""

    def __init__(self, connect_timeout: float = SOCKET_TIMEOUT):
        self.connect_timeout = connect_timeout

    def check_ready(self, target) -> bool:
        host = target.get_host()
        for port in sorted(target.get_liveness_check_port_numbers()):
            try:
                with socket.create_connection((host, port), timeout=self.connect_timeout):
                    pass
            except OSError as e:
                logger.debug(f"Port {host}:{port} not reachable yet: {e}")
                return False
        return True


class WaitAllStrategy(WaitStrategy):
    """Logical AND over independent strategies sharing one startup timeout.

    Each poll cycle checks the members that have not been satisfied yet. A
    member that reported ready once stays satisfied, so members may become
    ready in any order. The composite is ready when every member has been
    satisfied at least once.
    """

    def __init__(
        self,
        strategies: Iterable[WaitStrategy] = (),
        startup_timeout: float = STARTUP_TIMEOUT,
        poll_interval: float = POLL_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if startup_timeout <= 0:
            raise ValueError(f"startup_timeout must be greater than zero, got {startup_timeout}")
        if poll_interval < 0:
            raise ValueError(f"poll_interval must not be negative, got {poll_interval}")
        self.strategies = tuple(strategies)
        self.startup_timeout = startup_timeout
        self.poll_interval = poll_interval
        self.clock = clock
        self.sleep = sleep

    def with_strategy(self, strategy: WaitStrategy) -> "WaitAllStrategy":
        """Return a new composite with ``strategy`` appended."""
        return WaitAllStrategy(
            self.strategies + (strategy,),
            startup_timeout=self.startup_timeout,
            poll_interval=self.poll_interval,
            clock=self.clock,
            sleep=self.sleep,
        )

    def with_startup_timeout(self, startup_timeout: float) -> "WaitAllStrategy":
        """Return a new composite with a different startup timeout."""
        return WaitAllStrategy(
            self.strategies,
            startup_timeout=startup_timeout,
            poll_interval=self.poll_interval,
            clock=self.clock,
            sleep=self.sleep,
        )

    def _poll(self, target, pending: list) -> list:
        return [strategy for strategy in pending if not strategy.check_ready(target)]

    def check_ready(self, target) -> bool:
        """Run a single poll cycle over all members."""
        return not self._poll(target, list(self.strategies))

    def wait_until_ready(self, target, deadline: Optional[float] = None) -> None:
        """Poll until every member has been satisfied.

        Args:
            target: Container being started
            deadline: Absolute time on ``self.clock`` to give up at, defaults
                to now plus ``startup_timeout``

        Raises:
            ContainerStartupTimeoutError: If the budget elapses first
        """
        if deadline is None:
            deadline = self.clock() + self.startup_timeout
        pending = list(self.strategies)

        while True:
            pending = self._poll(target, pending)
            if not pending:
                return
            remaining = deadline - self.clock()
            if remaining <= 0:
                raise ContainerStartupTimeoutError(
                    f"Container not ready after {self.startup_timeout} seconds, still waiting for: "
                    + ", ".join(repr(s) for s in pending)
                )
            logger.debug(f"Waiting for {len(pending)} readiness check(s)")
            self.sleep(min(self.poll_interval, remaining))

    def __repr__(self) -> str:
        members = ", ".join(repr(s) for s in self.strategies)
        return f"WaitAllStrategy([{members}], startup_timeout={self.startup_timeout})"


def compose(strategies: Iterable[WaitStrategy], timeout: float = STARTUP_TIMEOUT) -> WaitAllStrategy:
    """Combine independent strategies into one composite with a shared timeout."""
    return WaitAllStrategy(strategies, startup_timeout=timeout)
