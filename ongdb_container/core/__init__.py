"""Core functionality for the ONgDB container helper."""

from .config_keys import format_configuration_key
from .wait_strategies import (
    HostPortWaitStrategy,
    HttpWaitStrategy,
    LogMessageWaitStrategy,
    WaitAllStrategy,
    WaitStrategy,
    compose,
)

__all__ = [
    'format_configuration_key',
    'HostPortWaitStrategy',
    'HttpWaitStrategy',
    'LogMessageWaitStrategy',
    'WaitAllStrategy',
    'WaitStrategy',
    'compose'
]
