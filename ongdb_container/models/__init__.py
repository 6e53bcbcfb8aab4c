"""Models for the ONgDB container helper."""

from .container import ConfigEntry, ContainerSettings, FileCopy, MountableFile

__all__ = [
    'ConfigEntry',
    'ContainerSettings',
    'FileCopy',
    'MountableFile'
]
