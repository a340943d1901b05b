# Savesync Configuration Module
# Handles YAML-based configuration loading, validation, and defaults

from savesync.config.defaults import DEFAULT_CONFIG, generate_default_config
from savesync.config.loader import (
    ensure_config_exists,
    get_config_path,
    load_config,
    save_config,
    validate_config_file,
)
from savesync.config.schema import (
    EngineConfig,
    LogLevel,
    OutputConfig,
    RemoteConfig,
    SavesyncConfig,
    StoreConfig,
)

__all__ = [
    # Schema
    "SavesyncConfig",
    "StoreConfig",
    "RemoteConfig",
    "EngineConfig",
    "OutputConfig",
    "LogLevel",
    # Loader
    "load_config",
    "save_config",
    "get_config_path",
    "ensure_config_exists",
    "validate_config_file",
    # Defaults
    "DEFAULT_CONFIG",
    "generate_default_config",
]
