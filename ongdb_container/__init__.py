"""ONgDB Container - Disposable ONgDB servers for integration tests."""

__version__ = "0.1.0"

from .core.ongdb_container import OngdbContainer
from .core.generic_container import GenericContainer
from .models.container import MountableFile

__all__ = ['OngdbContainer', 'GenericContainer', 'MountableFile']
