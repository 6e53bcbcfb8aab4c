"""Container configuration models."""

from importlib import resources
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from ..core.config_keys import format_configuration_key
from ..core.constants import DEFAULT_ADMIN_PASSWORD, DEFAULT_IMAGE, POLL_INTERVAL, STARTUP_TIMEOUT


class MountableFile(BaseModel):
    """A host file or directory that can be copied into a container."""
    host_path: Path
    file_mode: Optional[int] = None

    @field_validator("host_path")
    @classmethod
    def _must_exist(cls, value: Path) -> Path:
        if not value.exists():
            raise ValueError(f"Path does not exist: {value}")
        return value.resolve()

    @property
    def is_directory(self) -> bool:
        return self.host_path.is_dir()

    @classmethod
    def for_host_path(cls, path, file_mode: Optional[int] = None) -> "MountableFile":
        """Create from a path on the host."""
        return cls(host_path=Path(path), file_mode=file_mode)

    @classmethod
    def for_package_resource(cls, package: str, resource: str, file_mode: Optional[int] = None) -> "MountableFile":
        """Create from a resource shipped inside an installed package."""
        return cls(host_path=Path(str(resources.files(package).joinpath(resource))), file_mode=file_mode)


class FileCopy(BaseModel):
    """A file staged for copying into the container before it starts."""
    source: MountableFile
    destination: str


class ConfigEntry(BaseModel):
    """A single neo4j.conf setting."""
    key: str
    value: str

    @property
    def env_name(self) -> str:
        return format_configuration_key(self.key)


class ContainerSettings(BaseModel):
    """Settings used to build a container, stored per project."""
    image: str = DEFAULT_IMAGE
    admin_password: Optional[str] = DEFAULT_ADMIN_PASSWORD
    startup_timeout: float = STARTUP_TIMEOUT
    poll_interval: float = POLL_INTERVAL
    config: Dict[str, str] = Field(default_factory=dict)
    plugins: List[Path] = Field(default_factory=list)

    @field_validator("startup_timeout")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("startup_timeout must be greater than zero")
        return value

    @field_validator("plugins")
    @classmethod
    def _plugins_exist(cls, value: List[Path]) -> List[Path]:
        missing = [str(path) for path in value if not path.exists()]
        if missing:
            raise ValueError(f"Plugin paths do not exist: {', '.join(missing)}")
        return value

    @field_validator("poll_interval")
    @classmethod
    def _non_negative_interval(cls, value: float) -> float:
        if value < 0:
            raise ValueError("poll_interval must not be negative")
        return value

    def config_entries(self) -> List[ConfigEntry]:
        return [ConfigEntry(key=key, value=value) for key, value in self.config.items()]
