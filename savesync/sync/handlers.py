# Savesync Action Handlers
# Optimistic local write, remote call and reconciliation per user intent

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from savesync.sync.gateway import RemoteGateway, RemoteOutcome, gateway_call
from savesync.sync.item import SavedItem
from savesync.sync.status import ItemAction, apply_local, apply_outcome, pending_action
from savesync.sync.store import RecordStore

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 4


class ResultStatus(str, Enum):
    """Where a record ended up after an action."""

    SYNCED = "synced"  # Remote confirmed, record collapsed to synced
    PENDING = "pending"  # Remote not confirmed, pending status kept for retry
    REMOVED = "removed"  # Remote confirmed a delete, record gone
    NOT_FOUND = "not_found"  # No local record, nothing to do


@dataclass
class ActionResult:
    """Result of handling one action for one record."""

    item_id: str
    action: ItemAction
    status: ResultStatus
    outcome: Optional[RemoteOutcome] = None
    item: Optional[SavedItem] = None

    @property
    def success(self) -> bool:
        """Check if the intent is settled (confirmed, or nothing to do)."""
        return self.status != ResultStatus.PENDING

    @property
    def reason(self) -> str:
        """Get the remote reason for a non-confirmed outcome."""
        return self.outcome.reason if self.outcome else ""


class KeyedLock:
    """
    Per-key mutual exclusion for coroutines on one event loop.

    Locks are created on demand and dropped once no coroutine holds or
    waits on them.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(key, asyncio.Lock())
        self._users[key] = self._users.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[key] -= 1
            if self._users[key] == 0:
                del self._users[key]
                del self._locks[key]

    def __len__(self) -> int:
        return len(self._locks)


class ActionHandlers:
    """
    Handlers for archive, unarchive and delete.

    Each call reads the record, writes the optimistic local transition,
    awaits the remote call and reconciles the store with its outcome.
    Network failures never raise: the record keeps its pending status and
    the store itself carries the retry signal. Calls for the same id are
    serialized; calls for different ids run concurrently up to
    ``max_workers``.
    """

    def __init__(
        self,
        store: RecordStore,
        gateway: RemoteGateway,
        *,
        max_workers: int = DEFAULT_MAX_WORKERS,
        remote_on_missing: bool = False,
    ):
        """
        Initialize handlers.

        Args:
            store: Local record store.
            gateway: Remote gateway.
            max_workers: Maximum number of actions in flight at once.
            remote_on_missing: Still issue the remote delete when the record
                is absent locally.
        """
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")

        self.store = store
        self.gateway = gateway
        self.max_workers = max_workers
        self.remote_on_missing = remote_on_missing
        self._locks = KeyedLock()
        self._slots: Optional[asyncio.Semaphore] = None
        self._slots_loop: Optional[asyncio.AbstractEventLoop] = None

    @property
    def slots(self) -> asyncio.Semaphore:
        # One semaphore per event loop; asyncio primitives bind to a loop
        loop = asyncio.get_running_loop()
        if self._slots is None or self._slots_loop is not loop:
            self._slots = asyncio.Semaphore(self.max_workers)
            self._slots_loop = loop
        return self._slots

    async def archive(self, item_id: str) -> ActionResult:
        """Archive a saved item."""
        return await self.run(ItemAction.ARCHIVE, item_id)

    async def unarchive(self, item_id: str) -> ActionResult:
        """Unarchive a saved item."""
        return await self.run(ItemAction.UNARCHIVE, item_id)

    async def delete(self, item_id: str) -> ActionResult:
        """Delete a saved item."""
        return await self.run(ItemAction.DELETE, item_id)

    async def run(self, action: ItemAction, item_id: str) -> ActionResult:
        """
        Handle one action for one record.

        Args:
            action: The user intent.
            item_id: Record id.

        Returns:
            ActionResult describing the final local state.
        """
        # Same-id waiters queue on the lock without occupying a worker slot
        async with self._locks.hold(item_id):
            async with self.slots:
                return await self._dispatch(action, item_id)

    async def retry(self, item_id: str) -> Optional[ActionResult]:
        """
        Re-send the outstanding remote call for a pending record.

        The action is derived from the record as read under the id lock, so
        a user action that settled or changed the record in the meantime
        wins over the intent seen by an earlier scan.

        Returns:
            ActionResult, or None if the record is gone or already synced.
        """
        async with self._locks.hold(item_id):
            async with self.slots:
                item = self.store.find_by_id(item_id)
                action = pending_action(item) if item is not None else None
                if action is None:
                    logger.debug("Item %s no longer pending, retry skipped", item_id)
                    return None
                return await self._dispatch(action, item_id)

    async def _dispatch(self, action: ItemAction, item_id: str) -> ActionResult:
        if action == ItemAction.DELETE:
            return await self._delete(item_id)
        return await self._set_archived(action, item_id)

    async def _delete(self, item_id: str) -> ActionResult:
        action = ItemAction.DELETE
        item = self.store.find_by_id(item_id)

        if item is None:
            if not self.remote_on_missing:
                logger.debug("Delete of unknown item %s ignored", item_id)
                return ActionResult(item_id=item_id, action=action, status=ResultStatus.NOT_FOUND)
            outcome = await self._call_remote(action, item_id)
            return ActionResult(item_id=item_id, action=action, status=ResultStatus.NOT_FOUND, outcome=outcome)

        self.store.update(apply_local(item, action))

        outcome = await self._call_remote(action, item_id)
        return self._reconcile(action, item_id, outcome)

    async def _set_archived(self, action: ItemAction, item_id: str) -> ActionResult:
        item = self.store.find_by_id(item_id)

        if item is None:
            logger.debug("%s of unknown item %s ignored", action.value.capitalize(), item_id)
            return ActionResult(item_id=item_id, action=action, status=ResultStatus.NOT_FOUND)

        self.store.update(apply_local(item, action))

        outcome = await self._call_remote(action, item_id)
        return self._reconcile(action, item_id, outcome)

    async def _call_remote(self, action: ItemAction, item_id: str) -> RemoteOutcome:
        try:
            outcome = await gateway_call(self.gateway, action, item_id)
        except Exception as e:
            logger.warning("Remote %s for %s failed: %s", action.value, item_id, e)
            return RemoteOutcome.unreachable(str(e) or type(e).__name__)

        if not outcome.confirmed:
            logger.info("Remote %s for %s not confirmed (%s): %s", action.value, item_id, outcome.kind.value, outcome.reason)
        return outcome

    def _reconcile(self, action: ItemAction, item_id: str, outcome: RemoteOutcome) -> ActionResult:
        # Re-read: the record written before the call is the one to reconcile
        current = self.store.find_by_id(item_id)
        if current is None:
            logger.warning("Item %s disappeared during remote %s", item_id, action.value)
            return ActionResult(item_id=item_id, action=action, status=ResultStatus.REMOVED, outcome=outcome)

        reconciled = apply_outcome(current, action, outcome.confirmed)

        if reconciled is None:
            self.store.delete_by_id(item_id)
            logger.debug("Item %s removed after confirmed delete", item_id)
            return ActionResult(item_id=item_id, action=action, status=ResultStatus.REMOVED, outcome=outcome)

        if not outcome.confirmed:
            return ActionResult(
                item_id=item_id, action=action, status=ResultStatus.PENDING, outcome=outcome, item=reconciled
            )

        self.store.update(reconciled)
        return ActionResult(item_id=item_id, action=action, status=ResultStatus.SYNCED, outcome=outcome, item=reconciled)
