# Savesync Sync Status Transitions
# Local (optimistic) and reconciliation transitions for each user action

from enum import Enum
from typing import Optional

from savesync.sync.item import SavedItem, SyncStatus


class ItemAction(str, Enum):
    """User intents the engine handles."""

    ARCHIVE = "archive"
    UNARCHIVE = "unarchive"
    DELETE = "delete"

    @property
    def archived_value(self) -> Optional[bool]:
        """Target ``is_archived`` value, or None for delete."""
        if self == ItemAction.ARCHIVE:
            return True
        if self == ItemAction.UNARCHIVE:
            return False
        return None


def apply_local(item: SavedItem, action: ItemAction) -> SavedItem:
    """
    Apply the optimistic local transition for an action.

    The prior status is ignored: the target state is forced, so repeating
    the same action is idempotent.

    Args:
        item: Current record.
        action: The user intent.

    Returns:
        New record to persist before the remote call.
    """
    updated = item.copy()

    if action == ItemAction.DELETE:
        updated.server_sync_status = SyncStatus.NEEDS_DELETION
    else:
        updated.is_archived = bool(action.archived_value)
        updated.server_sync_status = SyncStatus.NEEDS_UPDATE

    return updated


def apply_outcome(item: SavedItem, action: ItemAction, confirmed: bool) -> Optional[SavedItem]:
    """
    Reconcile a record with the outcome of its remote call.

    Args:
        item: Record as it stands after the local transition.
        action: The action whose remote call completed.
        confirmed: Whether the server acknowledged the intent.

    Returns:
        The record to persist, or None when it must be removed from the store.
    """
    if not confirmed:
        return item.copy()

    if action == ItemAction.DELETE:
        return None

    reconciled = item.copy()
    reconciled.server_sync_status = SyncStatus.SYNCED
    return reconciled


def pending_action(item: SavedItem) -> Optional[ItemAction]:
    """
    Get the action whose remote call would clear the record's pending status.

    Returns:
        ItemAction, or None if the record is already synced.
    """
    if item.server_sync_status == SyncStatus.NEEDS_DELETION:
        return ItemAction.DELETE
    if item.server_sync_status == SyncStatus.NEEDS_UPDATE:
        return ItemAction.ARCHIVE if item.is_archived else ItemAction.UNARCHIVE
    return None
