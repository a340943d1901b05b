# Savesync Utilities Module
# Helper functions for file handling

from savesync.utils.paths import atomic_write, ensure_dir

__all__ = [
    "atomic_write",
    "ensure_dir",
]
