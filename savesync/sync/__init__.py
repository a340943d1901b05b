# Savesync Sync Module
# Local mutation and server-reconciliation engine

from savesync.sync.dispatcher import ActionDispatcher
from savesync.sync.gateway import OutcomeKind, RemoteGateway, RemoteOutcome, gateway_call
from savesync.sync.handlers import ActionHandlers, ActionResult, KeyedLock, ResultStatus
from savesync.sync.item import SavedItem, SyncStatus
from savesync.sync.status import ItemAction, apply_local, apply_outcome, pending_action
from savesync.sync.store import RecordStore, YamlRecordStore
from savesync.sync.sweep import ReconciliationSweep, SweepResult

__all__ = [
    # Item
    "SavedItem",
    "SyncStatus",
    # Status transitions
    "ItemAction",
    "apply_local",
    "apply_outcome",
    "pending_action",
    # Store
    "RecordStore",
    "YamlRecordStore",
    # Gateway
    "OutcomeKind",
    "RemoteGateway",
    "RemoteOutcome",
    "gateway_call",
    # Handlers
    "ActionHandlers",
    "ActionResult",
    "KeyedLock",
    "ResultStatus",
    # Dispatcher
    "ActionDispatcher",
    # Sweep
    "ReconciliationSweep",
    "SweepResult",
]
