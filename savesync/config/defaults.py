# Savesync Default Configuration
# Default configuration as Python dict and YAML generator

import copy
from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "store": {
        "path": "~/.local/share/savesync/items.yaml",
    },
    "remote": {
        "base_url": None,
        "token_env": "SAVESYNC_TOKEN",
        "timeout": 30.0,
    },
    "engine": {
        "max_workers": 4,
        "remote_on_missing": False,
    },
    "output": {
        "verbose": False,
        "colored": True,
        "log_level": "WARNING",
        "log_file": None,
    },
}


def get_default_config() -> dict[str, Any]:
    """Get an independent copy of the default configuration."""
    return copy.deepcopy(DEFAULT_CONFIG)


def generate_default_config() -> str:
    """Generate default configuration as YAML string with comments."""
    header = """# savesync configuration
#
# store.path            YAML file holding saved items and their sync status
# remote.base_url       Remote API base URL (required for archive/unarchive/delete/sync)
# remote.token_env      Environment variable that holds the API token
# engine.max_workers    Maximum number of remote calls in flight
# engine.remote_on_missing
#                       Still send the remote delete when the item is not stored locally

"""
    return header + yaml.dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False, allow_unicode=True)
