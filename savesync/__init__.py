"""savesync - offline-first local mutation and server reconciliation for saved items.

User actions (archive, unarchive, delete) are applied to a durable local
store first, tagged with a sync status, and confirmed with the remote
service afterwards.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "SavedItem",
    "SyncStatus",
    "ItemAction",
    "YamlRecordStore",
    "RemoteOutcome",
    "ActionHandlers",
    "ActionResult",
    "ActionDispatcher",
    "ReconciliationSweep",
    "GraphQLGateway",
]


def __getattr__(name: str):
    """Lazy import to avoid loading dependencies during setup."""
    if name in ("SavedItem", "SyncStatus"):
        from savesync.sync import item

        return getattr(item, name)
    if name == "ItemAction":
        from savesync.sync.status import ItemAction

        return ItemAction
    if name == "YamlRecordStore":
        from savesync.sync.store import YamlRecordStore

        return YamlRecordStore
    if name == "RemoteOutcome":
        from savesync.sync.gateway import RemoteOutcome

        return RemoteOutcome
    if name in ("ActionHandlers", "ActionResult"):
        from savesync.sync import handlers

        return getattr(handlers, name)
    if name == "ActionDispatcher":
        from savesync.sync.dispatcher import ActionDispatcher

        return ActionDispatcher
    if name == "ReconciliationSweep":
        from savesync.sync.sweep import ReconciliationSweep

        return ReconciliationSweep
    if name == "GraphQLGateway":
        from savesync.remote.graphql import GraphQLGateway

        return GraphQLGateway
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
