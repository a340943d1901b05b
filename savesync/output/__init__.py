# Savesync Output Module
# Rich console output

from savesync.output.console import Console, create_console

__all__ = [
    "Console",
    "create_console",
]
