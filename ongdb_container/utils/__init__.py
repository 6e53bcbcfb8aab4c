"""Utilities for the ONgDB container helper."""

from .config_manager import ConfigManager

__all__ = [
    'ConfigManager'
]
