# Savesync Errors
# Exception hierarchy for local failures (network failures are never raised)


class SavesyncError(Exception):
    """Base class for savesync errors."""


class StoreError(SavesyncError):
    """Local record store could not be read or written."""


class ConfigError(SavesyncError):
    """Configuration is unreadable or missing something a command needs."""
