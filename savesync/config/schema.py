# Savesync Configuration Schema
# Pydantic models for YAML configuration validation

import os
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Logging level names."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class StoreConfig(BaseModel):
    """Local record store settings."""

    path: str = Field(default="~/.local/share/savesync/items.yaml", description="Path to the YAML record store")

    @field_validator("path")
    @classmethod
    def expand_path(cls, v: str) -> str:
        """Expand ~ in path."""
        return str(Path(v).expanduser())


class RemoteConfig(BaseModel):
    """Remote service settings."""

    base_url: Optional[str] = Field(default=None, description="Base URL of the remote API")
    token_env: str = Field(default="SAVESYNC_TOKEN", description="Environment variable holding the API token")
    timeout: float = Field(default=30.0, gt=0, description="Request timeout in seconds")

    def get_token(self) -> Optional[str]:
        """Read the API token from the environment."""
        return os.environ.get(self.token_env) or None


class EngineConfig(BaseModel):
    """Action handler settings."""

    max_workers: int = Field(default=4, ge=1, description="Maximum number of actions in flight")
    remote_on_missing: bool = Field(
        default=False,
        description="Issue the remote delete even when the record is absent locally",
    )


class OutputConfig(BaseModel):
    """Output and logging configuration."""

    verbose: bool = Field(default=False, description="Enable verbose output")
    colored: bool = Field(default=True, description="Enable colored output")
    log_level: LogLevel = Field(default=LogLevel.WARNING, description="Console log level")
    log_file: Optional[str] = Field(default=None, description="Path to log file")

    @field_validator("log_file")
    @classmethod
    def expand_optional_path(cls, v: Optional[str]) -> Optional[str]:
        """Expand ~ in optional path."""
        if v is None:
            return None
        return str(Path(v).expanduser())


class SavesyncConfig(BaseModel):
    """Root configuration model for savesync."""

    store: StoreConfig = Field(default_factory=StoreConfig, description="Record store settings")
    remote: RemoteConfig = Field(default_factory=RemoteConfig, description="Remote service settings")
    engine: EngineConfig = Field(default_factory=EngineConfig, description="Engine settings")
    output: OutputConfig = Field(default_factory=OutputConfig, description="Output settings")

    @property
    def store_path(self) -> Path:
        return Path(self.store.path)
