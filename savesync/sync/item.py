# Savesync Saved Item
# The saved-item record and its server sync status

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from savesync.errors import StoreError


class SyncStatus(str, Enum):
    """Whether a record's local state matches the last server-acknowledged state."""

    SYNCED = "synced"
    NEEDS_UPDATE = "needs_update"  # Field mutation awaiting acknowledgment
    NEEDS_DELETION = "needs_deletion"  # Delete intent awaiting acknowledgment


@dataclass
class SavedItem:
    """
    A saved item as kept in the local record store.

    Display and content fields live in ``payload`` and pass through the
    engine untouched.
    """

    id: str
    is_archived: bool = False
    server_sync_status: SyncStatus = SyncStatus.SYNCED
    payload: dict[str, Any] = field(default_factory=dict)

    @property
    def is_pending(self) -> bool:
        """Check if remote work is still outstanding for this record."""
        return self.server_sync_status != SyncStatus.SYNCED

    @property
    def title(self) -> str:
        """Get the display title, if the payload carries one."""
        return str(self.payload.get("title", ""))

    def copy(self) -> "SavedItem":
        """Return an independent copy, payload included."""
        return SavedItem(
            id=self.id,
            is_archived=self.is_archived,
            server_sync_status=self.server_sync_status,
            payload=copy.deepcopy(self.payload),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "is_archived": self.is_archived,
            "server_sync_status": self.server_sync_status.value,
            "payload": copy.deepcopy(self.payload),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SavedItem":
        """
        Create from dictionary.

        Raises:
            StoreError: If the id is missing or the status is unknown.
        """
        item_id = data.get("id")
        if not item_id:
            raise StoreError(f"Saved item without id: {data!r}")

        raw_status = data.get("server_sync_status", SyncStatus.SYNCED.value)
        try:
            status = SyncStatus(raw_status)
        except ValueError as e:
            raise StoreError(f"Unknown sync status {raw_status!r} for item {item_id}") from e

        return cls(
            id=str(item_id),
            is_archived=bool(data.get("is_archived", False)),
            server_sync_status=status,
            payload=dict(data.get("payload") or {}),
        )
